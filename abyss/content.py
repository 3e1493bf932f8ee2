"""Content processing for Abyss.

This module handles loading of content files. It splits front matter, fills in
the defaults the renderers rely on, renders the body and creates Entry objects.

Key classes:
- Entry: Dataclass representing one loaded content file.
- FileContentLoader: Implementation of the ContentLoader protocol for folders.
- EntryBuilder: Builds an Entry from a source file.
- ContentProcessor: Facade for loading collections and single pages.

Collections map to folders under the content directory: ``posts`` and ``echo``.
Standalone pages such as ``about.md`` sit at the content root.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .audio import audio_player_html
from .frontmatter import split_frontmatter
from .protocols import ContentLoader
from .renderers import ContentType, RendererRegistry, default_renderer_registry
from .utils import date_from_name, first_line, is_draft, is_markdown, parse_week

POSTS = "posts"
ECHO = "echo"
PAGES = "pages"

# Content type used when a file's front matter has no type
DEFAULT_TYPES = {
    POSTS: ContentType.PROSE,
    ECHO: ContentType.ECHO,
    PAGES: ContentType.PROSE,
}


class ContentError(Exception):
    """Error while loading a content file.

    Attributes:
        source_path: Path to the content file.
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


@dataclass
class Entry:
    """Represents a loaded content file.

    Attributes:
        slug: File stem, used for the output file name.
        path: Path to the source file.
        collection: 'posts', 'echo' or 'pages'.
        metadata: Raw front matter.
        body: Body text without front matter.
        content: Rendered HTML fragment.
        title: Title, defaulting to the slug.
        date: Date string, defaulting to a filename prefix or ''.
        content_type: Renderer used for the body.
        week: Week string for echo entries.
        question: Question answered by an echo entry.
        description: Short description from the first body line.
        audio: Audio player markup, or ''.
        draft: Whether the file is a draft.
    """

    slug: str
    path: Path
    collection: str
    metadata: dict[str, str]
    body: str
    content: str
    title: str
    date: str
    content_type: ContentType
    week: str = ""
    question: str = ""
    description: str = ""
    audio: str = ""
    draft: bool = False

    @property
    def week_number(self) -> int:
        """Week as an integer, 0 when missing or not numeric."""
        return parse_week(self.week)


class FileContentLoader:
    """Loads content files from collection folders.

    This class is responsible for discovering content files in a content
    directory. It follows the Single Responsibility Principle - only handles
    file discovery.

    Attributes:
        content_dir: Directory containing content.
    """

    def __init__(self, content_dir: Path):
        """Initialize the content loader.

        Args:
            content_dir: Path to the content directory.
        """
        self.content_dir = content_dir

    def iter_files(self, collection: str, include_drafts: bool = False) -> list[Path]:
        """List the Markdown files of a collection.

        Args:
            collection: Collection folder name.
            include_drafts: Whether to include draft files.

        Returns:
            Sorted list of paths to content files.
        """
        folder = self.content_dir / collection
        if not folder.is_dir():
            return []
        files: list[Path] = []
        for path in sorted(folder.iterdir()):
            if not path.is_file() or not is_markdown(path):
                continue
            if is_draft(path) and not include_drafts:
                continue
            files.append(path)
        return files


class EntryBuilder:
    """Builds Entry objects from source files.

    Attributes:
        renderer_registry: Registry of content renderers.
        echo_question: Question used by echo entries without one.
    """

    def __init__(
        self,
        renderer_registry: RendererRegistry | None = None,
        echo_question: str = "",
    ):
        """Initialize the entry builder.

        Args:
            renderer_registry: Optional custom renderer registry.
            echo_question: Default question for echo entries.
        """
        self.renderer_registry = renderer_registry or default_renderer_registry
        self.echo_question = echo_question

    def build(
        self, path: Path, collection: str, content_type: ContentType | None = None
    ) -> Entry:
        """Build an Entry from a source file.

        Args:
            path: Path to the source file.
            collection: Collection the file belongs to.
            content_type: Force a content type instead of reading ``type``.

        Returns:
            Entry object.
        """
        raw = path.read_text(encoding="utf-8")
        return self.build_from_text(raw, path, collection, content_type)

    def build_from_text(
        self,
        raw: str,
        path: Path,
        collection: str,
        content_type: ContentType | None = None,
    ) -> Entry:
        """Build an Entry from already-read file text.

        Args:
            raw: Raw file content.
            path: Path to the source file.
            collection: Collection the file belongs to.
            content_type: Force a content type instead of reading ``type``.

        Returns:
            Entry object.
        """
        document = split_frontmatter(raw)
        metadata = document.metadata
        slug = path.stem
        if content_type is None:
            content_type = ContentType.parse(
                metadata.get("type") or DEFAULT_TYPES.get(collection, ContentType.PROSE)
            )
        renderer = self.renderer_registry.get_renderer(content_type)

        week = ""
        question = ""
        if collection == ECHO:
            week = metadata.get("week", "")
            question = metadata.get("question") or self.echo_question

        return Entry(
            slug=slug,
            path=path,
            collection=collection,
            metadata=metadata,
            body=document.body,
            content=renderer.render(document.body),
            title=metadata.get("title") or slug,
            date=metadata.get("date") or date_from_name(slug),
            content_type=content_type,
            week=week,
            question=question,
            description=first_line(document.body),
            audio=audio_player_html(metadata.get("audio")),
            draft=is_draft(path),
        )


class ContentProcessor:
    """Facade for loading collections and standalone pages.

    Attributes:
        content_dir: Directory containing content.
    """

    def __init__(
        self,
        content_dir: Path,
        content_loader: ContentLoader | None = None,
        entry_builder: EntryBuilder | None = None,
    ):
        """Initialize the content processor.

        Args:
            content_dir: Path to the content directory.
            content_loader: Optional custom content loader.
            entry_builder: Optional custom entry builder.
        """
        self.content_dir = content_dir
        self._content_loader = content_loader or FileContentLoader(content_dir)
        self._entry_builder = entry_builder or EntryBuilder()

    def load(self, collection: str, include_drafts: bool = False) -> list[Entry]:
        """Load every entry of a collection, in file name order.

        Args:
            collection: Collection folder name.
            include_drafts: Whether to include draft entries.

        Returns:
            List of Entry objects.
        """
        return [
            self._build(path, collection)
            for path in self._content_loader.iter_files(collection, include_drafts)
        ]

    def load_page(self, name: str) -> Entry | None:
        """Load a standalone page from the content root, always as prose.

        Args:
            name: File name, such as 'about.md'.

        Returns:
            Entry object, or None when the file does not exist.
        """
        path = self.content_dir / name
        if not path.is_file():
            return None
        return self._build(path, PAGES, ContentType.PROSE)

    def _build(
        self, path: Path, collection: str, content_type: ContentType | None = None
    ) -> Entry:
        """Build one entry, attaching the file path to read errors."""
        try:
            return self._entry_builder.build(path, collection, content_type)
        except (OSError, UnicodeDecodeError) as exc:
            message = f"Could not read content file: {exc}"
            raise ContentError(path, message, exc) from exc

