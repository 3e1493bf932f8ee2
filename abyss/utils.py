"""Utility functions for Abyss.

This module contains small string and path helpers used by the content
loader, the build and the CLI.

Key functions:
    is_markdown: Check if a path is a Markdown file.
    is_draft: Check if a path is a draft (name starts with _).
    date_from_name: Read a YYYY-MM-DD prefix from a filename.
    parse_week: Parse a week number, treating junk as 0.
    first_line: Extract a short description from a body.
    titleize: Convert filenames to human-readable titles.
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file has .md extension (case-insensitive).
    """
    return path.suffix.lower() == ".md"


def is_draft(path: Path) -> bool:
    """Check if a content file is a draft.

    Args:
        path: Path to check.

    Returns:
        True if the file name starts with an underscore.
    """
    return path.name.startswith("_")


def date_from_name(name: str) -> str:
    """Extract a YYYY-MM-DD date prefix from a filename stem.

    Args:
        name: Filename stem (without extension).

    Returns:
        The date prefix in ISO form, or an empty string if the name has
        no valid date prefix.

    Examples:
        >>> date_from_name("2024-01-15-tide")
        '2024-01-15'

        >>> date_from_name("tide")
        ''
    """
    parts = name.split("-")
    if len(parts) >= 3 and all(p.isdigit() for p in parts[:3]):
        try:
            date = datetime(int(parts[0]), int(parts[1]), int(parts[2]))
        except ValueError:
            return ""
        return date.strftime("%Y-%m-%d")
    return ""


def parse_week(value: str | int | None) -> int:
    """Parse a week number.

    Leading digits are used, so ``"12"`` and ``"12th"`` are both 12.
    Missing or non-numeric values are 0.

    Args:
        value: Week value from metadata.

    Returns:
        Week number.
    """
    if isinstance(value, int):
        return value
    match = _LEADING_INT_RE.match(value or "")
    return int(match.group(1)) if match else 0


def first_line(text: str, limit: int = 100) -> str:
    """Return the first line of text, truncated to a limit.

    Args:
        text: Body text.
        limit: Maximum character length of result.

    Returns:
        First line, stripped and truncated.
    """
    stripped = text.strip()
    if not stripped:
        return ""
    return stripped.splitlines()[0].strip()[:limit]


def titleize(filename: str) -> str:
    """Convert a filename to a human-readable title.

    Removes date prefixes (YYYY-MM-DD), replaces hyphens and underscores
    with spaces, and capitalizes each word.

    Args:
        filename: Filename with or without extension.

    Returns:
        Human-readable title string.

    Examples:
        >>> titleize("2024-01-15-low-tide.md")
        'Low Tide'
    """
    base = Path(filename).stem if filename.endswith(".md") else filename
    parts = base.split("-")
    if len(parts) >= 4 and all(p.isdigit() for p in parts[:3]):
        base = "-".join(parts[3:])
    words = re.split(r"[\s\-_]+", base)
    return " ".join(word.capitalize() for word in words if word) or "Untitled"
