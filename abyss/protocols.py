"""Protocol definitions for Abyss.

This module defines the interfaces (protocols) used between the content
pipeline and the site builder, following the Dependency Inversion Principle.

These protocols enable:
- Swapping renderers per content type without touching the registry
- Easy testing through stand-in loaders
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .renderers import ContentType


@runtime_checkable
class ContentRenderer(Protocol):
    """Protocol for turning a body string into an HTML fragment.

    Implementations handle one content type each and must accept any
    string without raising.
    """

    @abstractmethod
    def render(self, body: str) -> str:
        """Render body text to an HTML fragment.

        Args:
            body: Body text with front matter already removed.

        Returns:
            HTML fragment.
        """
        ...

    @property
    @abstractmethod
    def content_type(self) -> ContentType:
        """Return the content type this renderer handles."""
        ...


@runtime_checkable
class ContentLoader(Protocol):
    """Protocol for discovering content files of a collection.

    This separates file discovery from entry building (SRP).
    """

    @abstractmethod
    def iter_files(self, collection: str, include_drafts: bool = False) -> list[Path]:
        """List the content files of a collection.

        Args:
            collection: Collection folder name, such as 'posts' or 'echo'.
            include_drafts: Whether to include draft files.

        Returns:
            List of paths to content files.
        """
        ...
