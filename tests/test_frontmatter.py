import pytest

from abyss.frontmatter import ContentDocument, parse_metadata, split_frontmatter


def test_split_extracts_metadata_and_body():
    raw = "---\ntitle: Tide\ndate: 2025-01-08\ntype: poem\n---\nthe water comes in\n"
    doc = split_frontmatter(raw)
    assert doc.metadata == {"title": "Tide", "date": "2025-01-08", "type": "poem"}
    assert doc.body == "the water comes in"


@pytest.mark.parametrize(
    "raw",
    [
        "plain text",
        "  padded body \n\n",
        "",
        "title: not front matter\n---\nbody",
        "--- \ntitle: x\n---\nbody",
    ],
)
def test_split_without_frontmatter_returns_trimmed_input(raw):
    doc = split_frontmatter(raw)
    assert doc.metadata == {}
    assert doc.body == raw.strip()


def test_split_trims_keys_and_values_and_splits_on_first_colon():
    doc = split_frontmatter("---\n  title :  Hello: World  \nurl: http://x\n---\nbody")
    assert doc.metadata == {"title": "Hello: World", "url": "http://x"}


def test_split_ignores_lines_without_key():
    doc = split_frontmatter("---\nno colon here\n: leading colon\n   : blank key\nok: yes\n---\nb")
    assert doc.metadata == {"ok": "yes"}
    assert doc.body == "b"


def test_duplicate_keys_last_wins():
    doc = split_frontmatter("---\ntitle: one\ntitle: two\n---\nbody")
    assert doc.metadata["title"] == "two"


def test_keys_are_case_sensitive():
    doc = split_frontmatter("---\nTitle: A\ntitle: b\n---\nbody")
    assert doc.metadata == {"Title": "A", "title": "b"}


def test_delimiter_stripped_only_once():
    raw = "---\ntitle: x\n---\nfirst\n\n---\n\nsecond"
    doc = split_frontmatter(raw)
    assert doc.metadata == {"title": "x"}
    assert doc.body == "first\n\n---\n\nsecond"


def test_closing_delimiter_at_end_of_file():
    doc = split_frontmatter("---\ntitle: only metadata\n---")
    assert doc.metadata == {"title": "only metadata"}
    assert doc.body == ""


def test_crlf_line_endings():
    doc = split_frontmatter("---\r\ntitle: Windows\r\n---\r\nbody\r\n")
    assert doc.metadata == {"title": "Windows"}
    assert doc.body == "body"


def test_secondary_marker_is_not_a_closing_delimiter():
    raw = "---\ntitle: About\n---\n中文\n---en---\nEnglish"
    doc = split_frontmatter(raw)
    assert doc.metadata == {"title": "About"}
    assert doc.body == "中文\n---en---\nEnglish"


def test_parse_metadata_directly():
    assert parse_metadata("a: 1\nb: 2") == {"a": "1", "b": "2"}
    assert parse_metadata("") == {}


def test_content_document_is_immutable():
    doc = ContentDocument(metadata={}, body="x")
    with pytest.raises(AttributeError):
        doc.body = "y"
