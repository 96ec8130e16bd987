"""Tests for the index and post page sinks."""

from datetime import UTC, datetime
from pathlib import Path, PurePosixPath

import pytest

from gempress.core.exceptions import (
    InvalidIndexTemplateError,
    InvalidPostTemplateError,
    TemplateNotFoundError,
)
from gempress.core.types import Entry, EntryMetadata, Feed, Location
from gempress.engine.context import FeedTemplateData
from gempress.infra.sinks import IndexSink, PostSink


@pytest.fixture
def entry() -> Entry:
    return Entry(
        metadata=EntryMetadata(
            id="urn:example:hello",
            title="Hello",
            updated=datetime(2024, 3, 5, tzinfo=UTC),
            extra_fields={"mood": "sunny"},
        ),
        body="Hi there.\n",
        location=Location(
            url="gemini://example.com/posts/2024/hello.gmi",
            output_path=PurePosixPath("posts/2024/hello.gmi"),
        ),
    )


@pytest.fixture
def feed_data(entry: Entry) -> FeedTemplateData:
    return FeedTemplateData.from_feed(
        Feed(
            capsule_url="gemini://example.com/",
            feed_url="gemini://example.com/posts/atom.xml",
            index_url="gemini://example.com/posts/index.gmi",
            title="Example",
            updated=datetime(2024, 3, 5, tzinfo=UTC),
            entries=(entry,),
        )
    )


def _template(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / "templates" / name
    path.parent.mkdir(exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_index_sink_renders_feed(tmp_path: Path, feed_data: FeedTemplateData):
    template = _template(
        tmp_path,
        "index.gmi.jinja",
        "# {{ feed.title }}\n{% for e in feed.entries %}=> {{ e.url }} {{ e.updated | format_datetime }} {{ e.title }}\n{% endfor %}",
    )
    output_path = tmp_path / "public" / "posts" / "index.gmi"

    IndexSink(template, output_path).publish(feed_data)

    assert output_path.read_text(encoding="utf-8") == (
        "# Example\n=> gemini://example.com/posts/2024/hello.gmi 2024-03-05 Hello\n"
    )


def test_post_sink_writes_entry_with_feed_context(tmp_path: Path, entry: Entry, feed_data: FeedTemplateData):
    template = _template(
        tmp_path,
        "post.gmi.jinja",
        "# {{ entry.title }} ({{ entry.extra.mood }})\n{{ entry.body }}=> {{ feed.index_url }} {{ feed.title }}\n",
    )
    public_dir = tmp_path / "public"

    written = PostSink(template, public_dir).publish((entry,), feed_data)

    output_path = public_dir / "posts" / "2024" / "hello.gmi"
    assert written == [output_path]
    assert output_path.read_text(encoding="utf-8") == (
        "# Hello (sunny)\nHi there.\n=> gemini://example.com/posts/index.gmi Example\n"
    )


def test_index_template_syntax_error(tmp_path: Path, feed_data: FeedTemplateData):
    template = _template(tmp_path, "index.gmi.jinja", "line one\n{% for %}\n")

    with pytest.raises(InvalidIndexTemplateError) as excinfo:
        IndexSink(template, tmp_path / "index.gmi").publish(feed_data)

    assert excinfo.value.template_path == template
    assert "line 2" in excinfo.value.reason


def test_index_template_missing_variable(tmp_path: Path, feed_data: FeedTemplateData):
    template = _template(tmp_path, "index.gmi.jinja", "{{ feed.nope }}")

    with pytest.raises(InvalidIndexTemplateError, match="nope"):
        IndexSink(template, tmp_path / "index.gmi").publish(feed_data)


def test_post_template_missing_variable_names_output(tmp_path: Path, entry: Entry, feed_data: FeedTemplateData):
    template = _template(tmp_path, "post.gmi.jinja", "{{ entry.extra.missing }}")
    public_dir = tmp_path / "public"

    with pytest.raises(InvalidPostTemplateError) as excinfo:
        PostSink(template, public_dir).publish_entry(entry, feed_data)

    assert excinfo.value.output_path == public_dir / "posts" / "2024" / "hello.gmi"


def test_missing_template_file(tmp_path: Path, feed_data: FeedTemplateData):
    template = tmp_path / "templates" / "index.gmi.jinja"

    with pytest.raises(TemplateNotFoundError) as excinfo:
        IndexSink(template, tmp_path / "index.gmi").publish(feed_data)

    assert excinfo.value.kind == "index"
    assert excinfo.value.path == template
