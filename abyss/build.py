"""Site building functionality for Abyss.

This module contains the logic for building the static site from content files.
It loads configuration, loads and renders content, composes pages from templates,
and writes the output files.

Key functions:
- build_site: Main function to build the entire site.
- load_config: Loads site configuration from abyss.yaml.

Output layout:
- index.html          post list, newest first
- posts/<slug>.html   one page per post
- echo/index.html     echo list, by week, written even when empty
- echo/<slug>.html    one page per echo entry
- about.html          about page
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .collections import EntryCollection
from .content import ECHO, POSTS, ContentError, ContentProcessor, Entry, EntryBuilder
from .html_utils import escape_html
from .templates import TemplateEngine, TemplateError


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


DEFAULT_CONFIG = {
    "content_dir": "content",
    "templates_dir": "templates",
    "output_dir": ".",
    "site_title": "Abyss",
    "site_description": "",
    "about_title": "About",
    "echo_title": "Echo",
    "echo_question": "",
    "strict_templates": False,
}


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        posts: Posts, newest first.
        echo: Echo entries, by week.
        about: About page, if one was built.
        output_dir: Directory where the site was built.
        written: Paths of written files, relative to output_dir.
        config: Configuration used for the build.
    """

    posts: list[Entry]
    echo: list[Entry]
    about: Entry | None
    output_dir: Path
    written: list[Path] = field(default_factory=list)
    config: dict[str, Any] = field(default_factory=dict)


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from abyss.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config_path = project_root / "abyss.yaml"
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                config.update(loaded)
    return config


def build_site(
    project_root: Path,
    include_drafts: bool = False,
    strict: bool | None = None,
    output_dir_override: Path | None = None,
) -> BuildResult:
    """Build the entire static site.

    Args:
        project_root: Root directory of the project.
        include_drafts: Whether to include draft entries (starting with _).
        strict: Fail on unresolved template placeholders. Defaults to the
            ``strict_templates`` config value.
        output_dir_override: Optional path to write the build output instead
            of config output_dir.

    Returns:
        BuildResult with the built entries and written files.

    Raises:
        BuildError: If a content file cannot be read or a template fails.
    """
    config = load_config(project_root)
    if strict is not None:
        config["strict_templates"] = strict
    output_dir = output_dir_override or (project_root / str(config["output_dir"]))
    output_dir.mkdir(parents=True, exist_ok=True)

    content_dir = project_root / str(config["content_dir"])
    templates_dir = project_root / str(config["templates_dir"])
    engine = TemplateEngine(templates_dir, strict=bool(config["strict_templates"]))
    processor = ContentProcessor(
        content_dir,
        entry_builder=EntryBuilder(echo_question=str(config["echo_question"] or "")),
    )

    try:
        posts = EntryCollection(processor.load(POSTS, include_drafts)).by_date()
        echo = EntryCollection(processor.load(ECHO, include_drafts)).by_week()
        about = processor.load_page("about.md")
    except ContentError as exc:
        raise BuildError(exc.source_path, exc.message, exc.original_error) from exc

    for entry in echo:
        if entry.slug == "index":
            raise BuildError(
                entry.path,
                "echo/index.html is reserved for the echo index, rename the file",
            )

    site = _SiteWriter(engine, config, output_dir, templates_dir)
    for entry in posts:
        site.write_entry(entry, "post.html", f"posts/{entry.slug}.html")
    site.write_index(posts)
    for entry in echo:
        site.write_entry(entry, "echo.html", f"echo/{entry.slug}.html")
    site.write_echo_index(echo)
    if about is not None:
        site.write_about(about)

    return BuildResult(
        posts=list(posts),
        echo=list(echo),
        about=about,
        output_dir=output_dir,
        written=site.written,
        config=config,
    )


def post_list_html(posts: EntryCollection) -> str:
    """Render the homepage post list items.

    Args:
        posts: Posts in display order.

    Returns:
        HTML list items.
    """
    return "\n".join(
        "      <li>\n"
        f'        <a href="./posts/{escape_html(p.slug, quote=True)}.html">\n'
        f'          <span class="title">{escape_html(p.title)}</span>\n'
        f'          <span class="meta">{escape_html(p.date)}</span>\n'
        "        </a>\n"
        "      </li>"
        for p in posts
    )


def echo_list_html(entries: EntryCollection) -> str:
    """Render the echo index list items.

    Args:
        entries: Echo entries in display order.

    Returns:
        HTML list items.
    """
    return "\n".join(
        "      <li>\n"
        f'        <a href="./{escape_html(e.slug, quote=True)}.html">\n'
        f'          <span class="week">{escape_html(e.week)}</span>\n'
        f'          <span class="title">{escape_html(e.title)}</span>\n'
        f'          <span class="meta">{escape_html(e.date)}</span>\n'
        "        </a>\n"
        "      </li>"
        for e in entries
    )


def _attr(value: Any) -> str:
    """Escape a value for use in text or a double-quoted attribute."""
    return escape_html(str(value), quote=True)


class _SiteWriter:
    """Composes pages from templates and writes them to the output directory.

    Attributes:
        engine: Template engine.
        config: Build configuration.
        output_dir: Output root.
        templates_dir: Project templates directory, used for error context.
        written: Paths written so far, relative to output_dir.
    """

    def __init__(
        self,
        engine: TemplateEngine,
        config: Mapping[str, Any],
        output_dir: Path,
        templates_dir: Path,
    ):
        self.engine = engine
        self.config = config
        self.output_dir = output_dir
        self.templates_dir = templates_dir
        self.written: list[Path] = []

    @property
    def site_title(self) -> str:
        return str(self.config["site_title"])

    def write_entry(self, entry: Entry, template: str, target: str) -> None:
        """Render a post or echo entry page and write it."""
        context = {
            "title": _attr(entry.title),
            "date": _attr(entry.date),
            "type": entry.content_type.value,
            "week": _attr(entry.week),
            "question": _attr(entry.question),
            "audio": entry.audio,
            # Last, so placeholder-like text in the body is never substituted
            "content": entry.content,
        }
        self._write(
            entry.path,
            template,
            context,
            target,
            {
                "title": _attr(f"{entry.title} — {self.site_title}"),
                "description": _attr(entry.description),
                "cssPath": "../",
            },
        )

    def write_index(self, posts: EntryCollection) -> None:
        self._write(
            self.templates_dir / "index.html",
            "index.html",
            {"postList": post_list_html(posts)},
            "index.html",
            {
                "title": _attr(self.site_title),
                "description": _attr(self.config["site_description"] or ""),
                "cssPath": "./",
            },
        )

    def write_echo_index(self, entries: EntryCollection) -> None:
        echo_title = str(self.config["echo_title"])
        self._write(
            self.templates_dir / "echo-index.html",
            "echo-index.html",
            {
                "question": _attr(self.config["echo_question"] or ""),
                "echoList": echo_list_html(entries),
            },
            "echo/index.html",
            {
                "title": _attr(f"{echo_title} — {self.site_title}"),
                "description": _attr(self.config["echo_question"] or ""),
                "cssPath": "../",
            },
        )

    def write_about(self, about: Entry) -> None:
        about_title = str(self.config["about_title"])
        self._write(
            about.path,
            "about.html",
            {"content": about.content},
            "about.html",
            {
                "title": _attr(f"{about_title} — {self.site_title}"),
                "description": _attr(about.description),
                "cssPath": "./",
            },
        )

    def _write(
        self,
        source_path: Path,
        template: str,
        context: Mapping[str, Any],
        target: str,
        base_context: Mapping[str, Any],
    ) -> None:
        """Render a page template, wrap it in base.html and write it.

        Args:
            source_path: File reported when rendering fails.
            template: Page template name.
            context: Page template context.
            target: Output path relative to output_dir.
            base_context: base.html context without the body.

        Raises:
            BuildError: If a template is missing or, in strict mode,
                leaves placeholders unresolved.
        """
        try:
            body = self.engine.render(template, context)
            html = self.engine.wrap_in_base(body, base_context)
        except TemplateError as exc:
            raise BuildError(source_path, str(exc), exc) from exc
        rel_path = Path(target)
        out_path = self.output_dir / rel_path
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(html)
        self.written.append(rel_path)
