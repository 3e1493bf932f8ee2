from pathlib import Path

import pytest

from abyss.content import (
    ECHO,
    PAGES,
    POSTS,
    ContentError,
    ContentProcessor,
    EntryBuilder,
    FileContentLoader,
)
from abyss.protocols import ContentLoader
from abyss.renderers import ContentType


def create_content(tmp_path: Path) -> Path:
    content = tmp_path / "content"
    (content / "posts").mkdir(parents=True)
    (content / "echo").mkdir()
    (content / "posts" / "2024-01-15-tide.md").write_text(
        "---\ntitle: Tide\ndate: 2024-01-15\ntype: poem\n---\nin\nout\n\nagain",
        encoding="utf-8",
    )
    (content / "posts" / "notes.md").write_text("First line\n\nSecond", encoding="utf-8")
    (content / "posts" / "_draft.md").write_text("---\ntitle: Draft\n---\nwip", encoding="utf-8")
    (content / "posts" / "ignore.txt").write_text("not content", encoding="utf-8")
    (content / "echo" / "week-02.md").write_text(
        "---\ntitle: Two\nweek: 2\nquestion: Why?\n---\n- a\n- b",
        encoding="utf-8",
    )
    (content / "echo" / "week-01.md").write_text(
        "---\ntitle: One\nweek: 1\n---\nplain", encoding="utf-8"
    )
    (content / "about.md").write_text(
        "---\ntype: poem\n---\n关于\n---en---\nAbout", encoding="utf-8"
    )
    return content


def test_loader_lists_markdown_files_sorted(tmp_path):
    content = create_content(tmp_path)
    loader = FileContentLoader(content)
    assert [p.name for p in loader.iter_files(POSTS)] == ["2024-01-15-tide.md", "notes.md"]
    names = [p.name for p in loader.iter_files(POSTS, include_drafts=True)]
    assert names == ["2024-01-15-tide.md", "_draft.md", "notes.md"]
    assert loader.iter_files("missing") == []
    assert isinstance(loader, ContentLoader)


def test_processor_builds_posts(tmp_path):
    content = create_content(tmp_path)
    posts = ContentProcessor(content).load(POSTS)
    tide, notes = posts

    assert tide.slug == "2024-01-15-tide"
    assert tide.title == "Tide"
    assert tide.date == "2024-01-15"
    assert tide.content_type is ContentType.POEM
    assert tide.content == "<p>\nin<br>\nout\n</p>\n<p>\nagain\n</p>"
    assert tide.collection == POSTS
    assert tide.draft is False

    # Defaults supplied for a file without front matter
    assert notes.title == "notes"
    assert notes.date == ""
    assert notes.content_type is ContentType.PROSE
    assert notes.metadata == {}
    assert notes.description == "First line"
    assert notes.content == "<p>First line</p>\n<p>Second</p>"
    assert notes.audio == ""


def test_processor_includes_drafts_on_request(tmp_path):
    content = create_content(tmp_path)
    posts = ContentProcessor(content).load(POSTS, include_drafts=True)
    draft = next(p for p in posts if p.draft)
    assert draft.slug == "_draft"
    assert draft.title == "Draft"


def test_echo_entries_default_to_echo_renderer(tmp_path):
    content = create_content(tmp_path)
    builder = EntryBuilder(echo_question="What stayed?")
    entries = ContentProcessor(content, entry_builder=builder).load(ECHO)
    one, two = entries
    assert one.content_type is ContentType.ECHO
    assert one.week == "1"
    assert one.week_number == 1
    assert one.question == "What stayed?"
    assert two.question == "Why?"
    assert two.content == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>"


def test_posts_do_not_carry_echo_fields(tmp_path):
    builder = EntryBuilder(echo_question="Q")
    entry = builder.build_from_text("---\nweek: 4\n---\nx", Path("p.md"), POSTS)
    assert entry.week == ""
    assert entry.question == ""
    assert entry.metadata["week"] == "4"


def test_explicit_type_overrides_collection_default(tmp_path):
    builder = EntryBuilder()
    entry = builder.build_from_text("---\ntype: prose\n---\n- a", Path("e.md"), ECHO)
    assert entry.content_type is ContentType.PROSE
    assert entry.content == "<p>- a</p>"


def test_unknown_type_falls_back_to_prose():
    entry = EntryBuilder().build_from_text("---\ntype: novel\n---\nx", Path("n.md"), POSTS)
    assert entry.content_type is ContentType.PROSE


def test_date_defaults_to_filename_prefix():
    entry = EntryBuilder().build_from_text("body", Path("2023-05-06-walk.md"), POSTS)
    assert entry.date == "2023-05-06"
    assert entry.title == "2023-05-06-walk"


def test_audio_metadata_renders_player():
    raw = "---\naudio: media/tide.mp3\n---\nbody"
    entry = EntryBuilder().build_from_text(raw, Path("a.md"), POSTS)
    assert 'class="audio-player"' in entry.audio
    assert 'src="media/tide.mp3"' in entry.audio


def test_description_is_truncated_first_line():
    entry = EntryBuilder().build_from_text("x" * 150 + "\nmore", Path("d.md"), POSTS)
    assert entry.description == "x" * 100


def test_load_page_is_always_prose(tmp_path):
    content = create_content(tmp_path)
    about = ContentProcessor(content).load_page("about.md")
    assert about is not None
    assert about.collection == PAGES
    assert about.content_type is ContentType.PROSE
    assert about.content == '<p>关于</p>\n<div class="en">\n<p>About</p>\n</div>'


def test_load_page_missing(tmp_path):
    assert ContentProcessor(tmp_path).load_page("about.md") is None


def test_unreadable_file_raises_content_error(tmp_path):
    content = tmp_path / "content"
    (content / "posts").mkdir(parents=True)
    bad = content / "posts" / "bad.md"
    bad.write_bytes(b"\xff\xfe\xfa not utf-8")
    with pytest.raises(ContentError) as excinfo:
        ContentProcessor(content).load(POSTS)
    assert excinfo.value.source_path == bad
    assert isinstance(excinfo.value.original_error, UnicodeDecodeError)
