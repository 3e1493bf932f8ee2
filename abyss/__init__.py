"""Abyss static site builder.

This package turns a small corpus of Markdown-like text files into a static HTML site:
a homepage listing posts, per-post pages, a weekly "echo" collection with its own index,
and an about page.

The content pipeline is a set of pure functions:
- frontmatter: splits the leading metadata block from the body.
- renderers: prose, poem and echo renderers selected by the ``type`` tag.
- templates: literal ``{{name}}`` placeholder substitution.

The build and cli modules wrap the pipeline with file discovery, configuration
and output.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
