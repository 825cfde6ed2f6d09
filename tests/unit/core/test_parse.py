"""Unit tests for core/parse.py"""

import datetime

import pytest
import yaml

from contentpage.core.models import BlockType, ContentPage
from contentpage.core.parse import discover_files, dump_metadata, parse, parse_file, split_front_matter
from contentpage.errors import MalformedDocument


def test_split_front_matter_yaml():
    """split_front_matter returns the mapping, the body, and the format."""
    fm, body, fmt = split_front_matter("---\ntitle: Hello\n---\n# Body\n")
    assert fm == {"title": "Hello"}
    assert body == "# Body\n"
    assert fmt == "yaml"


def test_split_front_matter_toml():
    """+++ markers select TOML front matter."""
    fm, body, fmt = split_front_matter('+++\ntitle = "Hello"\nweight = 3\n+++\nBody\n')
    assert fm == {"title": "Hello", "weight": 3}
    assert fmt == "toml"


def test_split_front_matter_ignores_bom():
    fm, _, _ = split_front_matter("\ufeff---\ntitle: Hello\n---\n")
    assert fm == {"title": "Hello"}


def test_parse_sample_metadata(sample_page):
    """Observed keys are typed: title str, date as a date, weight int."""
    assert sample_page.title == "Coding Style"
    assert sample_page.date == datetime.date(2019, 3, 4)
    assert sample_page.weight == 5
    assert sample_page.draft is False


def test_parse_sample_block_order(sample_page):
    """Body blocks keep their source order."""
    assert [b.type for b in sample_page.blocks] == [
        BlockType.heading,
        BlockType.paragraph,
        BlockType.list,
        BlockType.list,
        BlockType.quote,
        BlockType.code,
    ]


def test_parse_keeps_unknown_keys():
    """Keys outside the known set are kept in metadata and as extras."""
    page = parse("---\ntitle: T\nauthor: someone\n---\n")
    assert page.metadata["author"] == "someone"
    assert page.meta.model_extra == {"author": "someone"}


def test_metadata_round_trip(sample_text, sample_page):
    """Re-serialized metadata recovers the original key/value pairs."""
    original = yaml.safe_load(sample_text.split("---")[1])
    assert yaml.safe_load(dump_metadata(sample_page)) == original
    assert list(yaml.safe_load(dump_metadata(sample_page))) == ["title", "date", "weight"]


def test_metadata_round_trip_toml():
    page = parse('+++\ntitle = "T"\ndate = 2020-01-02\nweight = 7\n+++\nBody\n')
    assert yaml.safe_load(dump_metadata(page)) == {"title": "T", "date": datetime.date(2020, 1, 2), "weight": 7}


def test_empty_front_matter():
    """An empty block is an empty mapping, not an error."""
    page = parse("---\n---\nBody.\n")
    assert page.metadata == {}
    assert page.title is None
    assert page.slug == "page"


@pytest.mark.parametrize("text,reason", [
    ("# No front matter\n",                   "missing front matter"),
    ("",                                      "missing front matter"),
    ("---\ntitle: Open\n\n# Body\n",          "unterminated front matter"),
    ("+++\ntitle = 'x'\n---\n",               "unterminated front matter"),
    ("---\ntitle: [unclosed\n---\n",          "invalid YAML front matter"),
    ("+++\ntitle = \n+++\n",                  "invalid TOML front matter"),
    ("---\n- a\n- b\n---\n",                  "must be a key/value mapping"),
    ("---\njust a string\n---\n",             "must be a key/value mapping"),
    ("---\ntitle: T\nweight: heavy\n---\n",   "invalid front matter values"),
    ("---\ntitle: T\nweight: true\n---\n",    "invalid front matter values"),
    ("---\ntitle: T\nweight: \"5\"\n---\n",   "invalid front matter values"),
])
def test_malformed_documents(text, reason):
    """Each malformed front matter variant raises MalformedDocument."""
    with pytest.raises(MalformedDocument, match=reason):
        parse(text)


def test_malformed_document_carries_path():
    with pytest.raises(MalformedDocument) as exc:
        parse("---\ntitle: Open\n", "docs/open.md")
    assert exc.value.path == "docs/open.md"
    assert exc.value.reason == "unterminated front matter"
    assert str(exc.value) == "docs/open.md: unterminated front matter"


def test_malformed_document_is_value_error():
    with pytest.raises(ValueError):
        parse("no front matter")


def test_slug_precedence(page_text):
    """Slug comes from metadata, then file stem, then title."""
    assert parse(page_text("T", extra="slug: Custom Slug"), "docs/file.md").slug == "custom-slug"
    assert parse(page_text("T"), "docs/My Page.md").slug == "my-page"
    assert parse(page_text("Style Guide")).slug == "style-guide"


def test_parse_collects_references():
    """Reference-style link definitions are kept on the page."""
    page = parse("---\ntitle: T\n---\nSee [docs][d].\n\n[d]: https://d.example.org\n")
    assert [b.type for b in page.blocks] == [BlockType.paragraph]
    assert any(ref["href"] == "https://d.example.org" for ref in page.references.values())


def test_page_is_frozen(sample_page):
    with pytest.raises(Exception):
        sample_page.slug = "other"


def test_outline_and_links(sample_page):
    assert sample_page.outline() == [{"level": 1, "text": "Coding Style"}]
    assert [link.href for link in sample_page.links] == ["https://example.org/manual"]
    assert sample_page.links[0].title == "Manual"
    assert sample_page.links[0].text == "the manual"


def test_parse_file(tmp_path):
    """parse_file records the source path and derives the slug from it."""
    f = tmp_path / "guide.md"
    f.write_text("---\ntitle: Guide\n---\n# Body\n", encoding="utf-8")
    page = parse_file(f)
    assert isinstance(page, ContentPage)
    assert page.path == str(f)
    assert page.slug == "guide"


def test_discover_files_single(tmp_path):
    f = tmp_path / "page.md"
    f.write_text("---\n---\n")
    assert discover_files(f) == [f]


def test_discover_files_non_md_skipped(tmp_path):
    (tmp_path / "notes.txt").write_text("text")
    assert discover_files(tmp_path) == []


def test_discover_files_dir(tmp_path):
    """discover_files finds .md and .markdown files recursively, sorted."""
    (tmp_path / "b.md").write_text("b")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "a.markdown").write_text("a")
    files = discover_files(tmp_path)
    assert files == sorted(files)
    assert len(files) == 2


def test_dump_metadata_toml_local_time():
    """TOML local times are written as ISO strings instead of failing to serialize."""
    page = parse('+++\ntitle = "T"\nstarts = 07:32:00\n+++\nBody\n')
    assert page.metadata["starts"] == datetime.time(7, 32)
    assert yaml.safe_load(dump_metadata(page)) == {"title": "T", "starts": "07:32:00"}


def test_parse_file_rejects_non_utf8(tmp_path):
    """Undecodable bytes surface as MalformedDocument carrying the path."""
    f = tmp_path / "latin.md"
    f.write_bytes(b"---\ntitle: T\n---\n\xff\xfe body\n")
    with pytest.raises(MalformedDocument, match="not valid UTF-8 text") as exc:
        parse_file(f)
    assert exc.value.path == str(f)
