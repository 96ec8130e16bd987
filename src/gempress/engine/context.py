"""Projection of feed and entries into template data."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from gempress.core.types import Author, Entry, ExtraValue, Feed, format_rfc3339


class AuthorTemplateData(BaseModel):
    name: str
    email: str | None = None
    uri: str | None = None

    @classmethod
    def from_author(cls, author: Author | None) -> AuthorTemplateData | None:
        if author is None:
            return None
        return cls(name=author.name, email=author.email, uri=author.uri)


class EntryTemplateData(BaseModel):
    id: str
    url: str
    path: str
    title: str
    body: str
    updated: str
    published: str | None = None
    summary: str | None = None
    author: AuthorTemplateData | None = None
    rights: str | None = None
    lang: str | None = None
    categories: list[str]
    extra: dict[str, ExtraValue]

    @classmethod
    def from_entry(cls, entry: Entry) -> EntryTemplateData:
        metadata = entry.metadata
        return cls(
            id=metadata.id,
            url=entry.location.url,
            path=str(entry.location.output_path),
            title=metadata.title,
            body=entry.body,
            updated=format_rfc3339(metadata.updated),
            published=format_rfc3339(metadata.published) if metadata.published else None,
            summary=metadata.summary,
            author=AuthorTemplateData.from_author(metadata.author),
            rights=metadata.rights,
            lang=metadata.lang,
            categories=list(metadata.categories),
            extra=dict(metadata.extra_fields),
        )

    def context(self) -> dict[str, Any]:
        return self.model_dump()


class FeedTemplateData(BaseModel):
    capsule_url: str
    feed_url: str
    index_url: str
    title: str
    subtitle: str | None = None
    rights: str | None = None
    author: AuthorTemplateData | None = None
    updated: str
    entries: list[EntryTemplateData]

    @classmethod
    def from_feed(cls, feed: Feed) -> FeedTemplateData:
        return cls(
            capsule_url=feed.capsule_url,
            feed_url=feed.feed_url,
            index_url=feed.index_url,
            title=feed.title,
            subtitle=feed.subtitle,
            rights=feed.rights,
            author=AuthorTemplateData.from_author(feed.author),
            updated=format_rfc3339(feed.updated),
            entries=[EntryTemplateData.from_entry(entry) for entry in feed.entries],
        )

    def context(self) -> dict[str, Any]:
        return self.model_dump()
