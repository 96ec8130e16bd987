"""Tests for the built-in Atom feed template."""

from datetime import UTC, datetime
from pathlib import Path, PurePosixPath
from xml.etree import ElementTree

import pytest

from gempress.core.exceptions import InvalidFeedTemplateError
from gempress.core.types import Author, Entry, EntryMetadata, Feed, Location
from gempress.engine.context import FeedTemplateData
from gempress.engine.template_loader import TemplateLoader
from gempress.infra.sinks.atom import AtomSink

ATOM = "{http://www.w3.org/2005/Atom}"


@pytest.fixture
def sample_feed() -> Feed:
    return Feed(
        capsule_url="gemini://example.com/",
        feed_url="gemini://example.com/posts/atom.xml",
        index_url="gemini://example.com/posts/index.gmi",
        title="Tom & Jerry's <Capsule>",
        subtitle="Cat and mouse",
        author=Author(name="Ada", email="ada@example.com"),
        updated=datetime(2025, 12, 25, 12, 0, tzinfo=UTC),
        entries=(
            Entry(
                metadata=EntryMetadata(
                    id="urn:uuid:1225c695-cfb8-4ebb-aaaa-80da344efa6a",
                    title="First <post>",
                    updated=datetime(2025, 12, 25, 12, 0, tzinfo=UTC),
                    published=datetime(2025, 12, 25, 10, 0, tzinfo=UTC),
                    summary="Fish & chips",
                    lang="en",
                    categories=["food", "gemini"],
                ),
                body="# First\n",
                location=Location(
                    url="gemini://example.com/posts/first.gmi",
                    output_path=PurePosixPath("posts/first.gmi"),
                ),
            ),
        ),
    )


def test_atom_sink_writes_valid_escaped_xml(sample_feed: Feed, tmp_path: Path):
    output_path = tmp_path / "nested" / "atom.xml"

    AtomSink(output_path).publish(FeedTemplateData.from_feed(sample_feed))

    root = ElementTree.parse(output_path).getroot()
    assert root.tag == f"{ATOM}feed"
    assert root.findtext(f"{ATOM}title") == "Tom & Jerry's <Capsule>"
    assert root.findtext(f"{ATOM}subtitle") == "Cat and mouse"
    assert root.findtext(f"{ATOM}updated") == "2025-12-25T12:00:00Z"
    assert root.findtext(f"{ATOM}author/{ATOM}name") == "Ada"

    links = {link.get("rel"): link.get("href") for link in root.findall(f"{ATOM}link")}
    assert links == {
        "self": "gemini://example.com/posts/atom.xml",
        "alternate": "gemini://example.com/posts/index.gmi",
    }

    entries = root.findall(f"{ATOM}entry")
    assert len(entries) == 1
    entry = entries[0]
    assert entry.findtext(f"{ATOM}title") == "First <post>"
    assert entry.findtext(f"{ATOM}summary") == "Fish & chips"
    assert entry.findtext(f"{ATOM}published") == "2025-12-25T10:00:00Z"
    assert entry.find(f"{ATOM}link").get("href") == "gemini://example.com/posts/first.gmi"
    assert [c.get("term") for c in entry.findall(f"{ATOM}category")] == ["food", "gemini"]
    assert entry.get("{http://www.w3.org/XML/1998/namespace}lang") == "en"


def test_atom_sink_overwrites_existing_file(sample_feed: Feed, tmp_path: Path):
    output_path = tmp_path / "atom.xml"
    output_path.write_text("stale", encoding="utf-8")

    AtomSink(output_path).publish(FeedTemplateData.from_feed(sample_feed))

    assert "stale" not in output_path.read_text(encoding="utf-8")


def test_broken_feed_template_is_reported_as_bug(sample_feed: Feed, tmp_path: Path):
    template_dir = tmp_path / "builtin"
    template_dir.mkdir()
    (template_dir / "atom.xml.jinja").write_text("{{ feed.missing }}", encoding="utf-8")
    sink = AtomSink(tmp_path / "atom.xml", loader=TemplateLoader(template_dir))

    with pytest.raises(InvalidFeedTemplateError, match="This is a bug"):
        sink.publish(FeedTemplateData.from_feed(sample_feed))
