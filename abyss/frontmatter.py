"""Front matter splitting for Abyss.

A content file may start with a metadata block:

    ---
    title: Tide
    date: 2025-03-01
    type: poem
    ---
    body text...

The block is a flat list of ``key: value`` lines. Values stay strings; there is
no schema, so missing keys are simply absent from the mapping.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

FRONTMATTER_RE = re.compile(r"\A---\r?\n(.*?)\r?\n---(?:\r?\n(.*))?\Z", re.DOTALL)


@dataclass(frozen=True)
class ContentDocument:
    """A source file split into its metadata and body.

    Attributes:
        metadata: Front matter key/value pairs, both trimmed.
        body: Remaining text, trimmed of surrounding whitespace.
    """

    metadata: dict[str, str] = field(default_factory=dict)
    body: str = ""


def parse_metadata(block: str) -> dict[str, str]:
    """Parse ``key: value`` lines into a mapping.

    Each line is split on its first colon. Lines without a colon, with the
    colon first, or with an empty key are ignored. Later keys overwrite
    earlier ones.

    Args:
        block: Text between the front matter delimiters.

    Returns:
        Mapping of keys to values.
    """
    metadata: dict[str, str] = {}
    for line in block.splitlines():
        idx = line.find(":")
        if idx <= 0:
            continue
        key = line[:idx].strip()
        if not key:
            continue
        metadata[key] = line[idx + 1 :].strip()
    return metadata


def split_frontmatter(raw: str) -> ContentDocument:
    """Split raw file text into metadata and body.

    Args:
        raw: Raw file content.

    Returns:
        ContentDocument with parsed metadata. When the text has no
        front matter block the metadata is empty and the whole text
        is the body.
    """
    match = FRONTMATTER_RE.match(raw)
    if not match:
        return ContentDocument(metadata={}, body=raw.strip())
    body = match.group(2) or ""
    return ContentDocument(metadata=parse_metadata(match.group(1)), body=body.strip())
