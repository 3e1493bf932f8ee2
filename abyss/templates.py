"""Template rendering engine for Abyss.

Templates are plain HTML files with ``{{name}}`` placeholders. Substitution is
literal: for every key in the context, every ``{{key}}`` is replaced with the
key's value. There are no conditionals, loops or expressions.

Key functions and classes:
- render_template: Substitute a context into a template string.
- find_placeholders: List the placeholder names a template uses.
- TemplateEngine: Loads named templates and composes full pages.

Unknown placeholders are left verbatim unless the engine runs in strict mode.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

__all__ = [
    "DEFAULT_TEMPLATES_DIR",
    "TemplateEngine",
    "TemplateError",
    "TemplateNotFoundError",
    "UnresolvedPlaceholderError",
    "find_placeholders",
    "render_template",
]

# Templates bundled with the package, used when a project lacks one
DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "scaffold" / "templates"

PLACEHOLDER_RE = re.compile(r"\{\{([^{}\s]+)\}\}")


class TemplateError(Exception):
    """Base class for template errors."""


class TemplateNotFoundError(TemplateError):
    """Raised when a named template exists in none of the search directories.

    Attributes:
        name: Template file name that was requested.
        searched: Directories that were searched.
    """

    def __init__(self, name: str, searched: Iterable[Path]):
        self.name = name
        self.searched = list(searched)
        locations = ", ".join(str(path) for path in self.searched)
        super().__init__(f"Template not found: {name} (searched {locations})")


class UnresolvedPlaceholderError(TemplateError):
    """Raised in strict mode when a template placeholder has no value.

    Attributes:
        names: Placeholder names left unresolved, in template order.
        template_name: Name of the template, when rendered by name.
    """

    def __init__(self, names: list[str], template_name: str | None = None):
        self.names = names
        self.template_name = template_name
        joined = ", ".join("{{" + name + "}}" for name in names)
        where = f" in {template_name}" if template_name else ""
        super().__init__(f"Unresolved placeholders{where}: {joined}")


def render_template(template: str, context: Mapping[str, Any]) -> str:
    """Replace ``{{key}}`` placeholders with context values.

    Keys are processed in the context's iteration order, one global replace
    per key. Values are not scanned again for placeholders of keys already
    processed, so nested resolution is not guaranteed. Placeholders without a
    context key are left as they are.

    Args:
        template: Template text.
        context: Mapping of placeholder names to values.

    Returns:
        The substituted text.

    Examples:
        >>> render_template("{{title}} - {{title}}", {"title": "X"})
        'X - X'

        >>> render_template("{{missing}}", {})
        '{{missing}}'
    """
    rendered = template
    for key, value in context.items():
        rendered = rendered.replace("{{" + str(key) + "}}", str(value))
    return rendered


def find_placeholders(template: str) -> list[str]:
    """Return placeholder names used by a template, in first-appearance order.

    Args:
        template: Template text.

    Returns:
        Unique placeholder names.
    """
    names: list[str] = []
    for name in PLACEHOLDER_RE.findall(template):
        if name not in names:
            names.append(name)
    return names


class TemplateEngine:
    """Loads templates by name and renders them.

    Templates are looked up in the project's templates directory first and
    then in the bundled defaults. Loaded templates are cached.

    Attributes:
        templates_dir: Project templates directory.
        strict: Whether unresolved placeholders raise.
        search_path: Directories searched for templates, in order.
    """

    def __init__(
        self,
        templates_dir: Path | None = None,
        strict: bool = False,
        fallback_dir: Path | None = DEFAULT_TEMPLATES_DIR,
    ):
        """Initialize the template engine.

        Args:
            templates_dir: Directory with project templates.
            strict: Raise UnresolvedPlaceholderError for placeholders
                that have no context value.
            fallback_dir: Directory with default templates, or None to
                disable the fallback.
        """
        self.templates_dir = templates_dir
        self.strict = strict
        self.search_path = [d for d in (templates_dir, fallback_dir) if d is not None]
        self._cache: dict[str, str] = {}

    def load(self, name: str) -> str:
        """Load a template by file name.

        Args:
            name: Template file name, such as 'base.html'.

        Returns:
            Template text.

        Raises:
            TemplateNotFoundError: If no search directory has the template.
        """
        if name in self._cache:
            return self._cache[name]
        for directory in self.search_path:
            candidate = directory / name
            if candidate.is_file():
                text = candidate.read_text(encoding="utf-8")
                self._cache[name] = text
                return text
        raise TemplateNotFoundError(name, self.search_path)

    def render_string(
        self,
        template: str,
        context: Mapping[str, Any],
        name: str | None = None,
    ) -> str:
        """Render a template string.

        Args:
            template: Template text.
            context: Mapping of placeholder names to values.
            name: Template name used in error messages.

        Returns:
            Rendered string.

        Raises:
            UnresolvedPlaceholderError: In strict mode, if the template uses
                placeholders missing from the context.
        """
        if self.strict:
            missing = [key for key in find_placeholders(template) if key not in context]
            if missing:
                raise UnresolvedPlaceholderError(missing, name)
        return render_template(template, context)

    def render(self, name: str, context: Mapping[str, Any]) -> str:
        """Load and render a named template.

        Args:
            name: Template file name.
            context: Mapping of placeholder names to values.

        Returns:
            Rendered string.
        """
        return self.render_string(self.load(name), context, name)

    def wrap_in_base(self, body_html: str, context: Mapping[str, Any]) -> str:
        """Render ``base.html`` around a page body.

        Args:
            body_html: Rendered page body, placed in ``{{body}}``.
            context: Remaining base placeholders (title, description, cssPath).

        Returns:
            Full HTML document.
        """
        return self.render("base.html", {**context, "body": body_html})
