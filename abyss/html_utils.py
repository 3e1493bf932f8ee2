"""HTML utility functions for Abyss.

This module provides the string helpers shared by the block renderers:
escaping, inline emphasis, and splitting text into blank-line separated blocks.

Functions:
    escape_html: Escape special HTML characters in a string.
    format_inline: Turn ``**bold**`` spans of escaped text into ``<strong>``.
    split_blocks: Split text on runs of blank lines.
"""

from __future__ import annotations

import re

# One or more blank lines; a blank line may hold spaces or tabs
_BLANK_LINES_RE = re.compile(r"\r?\n(?:[ \t]*\r?\n)+")

_STRONG_RE = re.compile(r"\*\*(.+?)\*\*")


def escape_html(text: str, quote: bool = False) -> str:
    """Escape special HTML characters in a string.

    Converts the following characters to their HTML entity equivalents:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot; (only when ``quote`` is set, for attribute values)

    Args:
        text: The string to escape.
        quote: Whether to escape double quotes as well.

    Returns:
        The escaped string, safe for inclusion in HTML.

    Examples:
        >>> escape_html('<b>Tom & Jerry</b>')
        '&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;'

        >>> escape_html('say "hi"', quote=True)
        'say &quot;hi&quot;'
    """
    escaped = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    if quote:
        escaped = escaped.replace('"', "&quot;")
    return escaped


def format_inline(escaped_text: str) -> str:
    """Apply inline emphasis to already-escaped text.

    Each ``**span**`` pair becomes ``<strong>span</strong>``. Matching is
    non-greedy and left to right, so ``**a** and **b**`` yields two spans.
    An unpaired ``**`` is left as literal text.

    Args:
        escaped_text: Text that has already been passed through escape_html.

    Returns:
        Text with emphasis markup applied.

    Examples:
        >>> format_inline('**a** and **b**')
        '<strong>a</strong> and <strong>b</strong>'

        >>> format_inline('**a')
        '**a'
    """
    return _STRONG_RE.sub(r"<strong>\1</strong>", escaped_text)


def split_blocks(text: str) -> list[str]:
    """Split text into blocks separated by one or more blank lines.

    Blocks that are empty after trimming are dropped; the remaining
    blocks keep their inner line breaks.

    Args:
        text: Text to split.

    Returns:
        List of blocks in source order.
    """
    return [block for block in _BLANK_LINES_RE.split(text.strip()) if block.strip()]
