"""Aggregation of loaded posts into the capsule feed."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from gempress.core.config import GempressConfig
from gempress.core.paths import replace_url_path
from gempress.core.types import Entry, Feed


def sort_entries(entries: Sequence[Entry]) -> list[Entry]:
    """Sort newest first by publish time, falling back to update time.

    The sort is stable, so posts with equal times keep their discovery order.
    """
    return sorted(entries, key=lambda entry: entry.metadata.sort_time, reverse=True)


def build_feed(config: GempressConfig, entries: Sequence[Entry], now: datetime | None = None) -> Feed:
    """Build the feed model for a capsule.

    ``updated`` is the latest post update, or ``now`` (the current local time by default)
    for a capsule without posts.
    """
    if entries:
        updated = max(entry.metadata.updated for entry in entries)
    else:
        updated = now or datetime.now(UTC).astimezone()

    return Feed(
        capsule_url=config.url,
        feed_url=replace_url_path(config.url, config.feed_path),
        index_url=replace_url_path(config.url, config.index_path),
        title=config.title,
        subtitle=config.subtitle,
        rights=config.rights,
        author=config.author,
        updated=updated,
        entries=tuple(sort_entries(entries)),
    )
