"""Content renderers for Abyss.

This module contains implementations of the ContentRenderer protocol
for the three content types. Each renderer handles a single responsibility
(SRP) - turning one kind of body text into an HTML fragment.

Key classes:
- ContentType: Closed set of content type tags.
- ProseRenderer: Paragraphs with an optional secondary-language section.
- PoemRenderer: Stanzas that keep every line break.
- EchoRenderer: Dividers, lists and paragraphs with inline emphasis.
- RendererRegistry: Picks the renderer for a content type.

Every renderer is total: any input string produces some output, never an error.
"""

from __future__ import annotations

import re
from enum import Enum

from .html_utils import escape_html, format_inline, split_blocks
from .protocols import ContentRenderer

# The bilingual marker must sit on a line of its own
SECONDARY_MARKER_RE = re.compile(r"^---en---[ \t]*$", re.MULTILINE)

_DIVIDER_RE = re.compile(r"^-{3,}$")
_LIST_MARKER_RE = re.compile(r"^-\s*")


class ContentType(str, Enum):
    """Content type tag read from the ``type`` front matter key."""

    PROSE = "prose"
    POEM = "poem"
    ECHO = "echo"

    @classmethod
    def parse(cls, value: str | ContentType | None) -> ContentType:
        """Return the content type for a tag, defaulting to prose.

        Args:
            value: Tag value from metadata, an existing ContentType, or None.

        Returns:
            Matching ContentType, or PROSE for unknown and missing tags.
        """
        if isinstance(value, ContentType):
            return value
        try:
            return cls((value or "").strip())
        except ValueError:
            return cls.PROSE


def _paragraphs(text: str) -> list[str]:
    """Render prose paragraphs, turning soft line breaks into <br>."""
    paragraphs = []
    for block in split_blocks(text):
        escaped = escape_html(block.strip()).replace("\n", "<br>")
        paragraphs.append(f"<p>{escaped}</p>")
    return paragraphs


class ProseRenderer:
    """Renders prose bodies.

    Paragraphs are separated by blank lines. A ``---en---`` line splits the
    body into a primary section and a secondary-language section; the
    secondary paragraphs are wrapped in ``<div class="en">``.
    """

    @property
    def content_type(self) -> ContentType:
        """Return the content type this renderer handles."""
        return ContentType.PROSE

    def render(self, body: str) -> str:
        """Render a prose body to HTML.

        Args:
            body: Body text from a content file.

        Returns:
            HTML fragment of sibling paragraphs.
        """
        normalized = body.replace("\r\n", "\n")
        parts = SECONDARY_MARKER_RE.split(normalized, maxsplit=1)
        html_parts = _paragraphs(parts[0])
        if len(parts) > 1:
            secondary = _paragraphs(parts[1])
            if secondary:
                html_parts.append('<div class="en">')
                html_parts.extend(secondary)
                html_parts.append("</div>")
        return "\n".join(html_parts)


class PoemRenderer:
    """Renders poems.

    Stanzas are separated by blank lines and every line inside a stanza
    is kept, joined with ``<br>``.
    """

    @property
    def content_type(self) -> ContentType:
        """Return the content type this renderer handles."""
        return ContentType.POEM

    def render(self, body: str) -> str:
        """Render a poem body to HTML.

        Args:
            body: Body text from a content file.

        Returns:
            HTML fragment with one paragraph per stanza.
        """
        stanzas: list[str] = []
        for stanza in split_blocks(body.replace("\r\n", "\n")):
            lines = [escape_html(line.rstrip()) for line in stanza.split("\n")]
            stanzas.append("<p>\n" + "<br>\n".join(lines) + "\n</p>")
        return "\n".join(stanzas)


class EchoRenderer:
    """Renders echo entries.

    Each blank-line separated block is classified on its own, first match wins:
    a run of dashes is a divider, a block whose first line starts with ``- `` is
    a list, anything else is a paragraph. List items and paragraph lines support
    ``**bold**`` emphasis.
    """

    @property
    def content_type(self) -> ContentType:
        """Return the content type this renderer handles."""
        return ContentType.ECHO

    def render(self, body: str) -> str:
        """Render an echo body to HTML.

        Args:
            body: Body text from a content file.

        Returns:
            HTML fragment of dividers, lists and paragraphs in source order.
        """
        blocks = split_blocks(body.replace("\r\n", "\n"))
        return "\n".join(self.render_block(block) for block in blocks)

    def render_block(self, block: str) -> str:
        """Classify and render a single block.

        Args:
            block: One blank-line separated block.

        Returns:
            HTML for the block.
        """
        stripped = block.strip()
        if _DIVIDER_RE.match(stripped):
            return "<hr>"
        lines = stripped.split("\n")
        if lines[0].startswith("- "):
            items = []
            for line in lines:
                if not line.strip():
                    continue
                text = _LIST_MARKER_RE.sub("", line.strip())
                items.append(f"<li>{format_inline(escape_html(text))}</li>")
            return "<ul>\n" + "\n".join(items) + "\n</ul>"
        text = "<br>\n".join(format_inline(escape_html(line.strip())) for line in lines)
        return f"<p>{text}</p>"


class RendererRegistry:
    """Registry for content renderers.

    Holds one renderer per content type. Unknown types fall back to the
    prose renderer.
    """

    def __init__(self):
        """Initialize the registry with default renderers."""
        self._renderers: dict[ContentType, ContentRenderer] = {}
        self.register(ProseRenderer())
        self.register(PoemRenderer())
        self.register(EchoRenderer())

    def register(self, renderer: ContentRenderer) -> None:
        """Register a renderer, replacing any renderer for the same type.

        Args:
            renderer: A ContentRenderer implementation.
        """
        self._renderers[renderer.content_type] = renderer

    def get_renderer(self, content_type: str | ContentType | None) -> ContentRenderer:
        """Get the renderer for a content type tag.

        Args:
            content_type: Tag value, ContentType, or None.

        Returns:
            The matching renderer, or the prose renderer.
        """
        return self._renderers[ContentType.parse(content_type)]


# Default renderer registry instance
default_renderer_registry = RendererRegistry()


def render_body(body: str, content_type: str | ContentType | None = None) -> str:
    """Render a body with the renderer for its content type.

    Args:
        body: Body text from a content file.
        content_type: Tag from the ``type`` front matter key.

    Returns:
        HTML fragment.
    """
    return default_renderer_registry.get_renderer(content_type).render(body)
