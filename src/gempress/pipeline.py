"""Capsule build pipeline.

Stages run strictly in order: discover posts, load and validate them, build the feed, render
the index, the Atom feed and every post, then merge the static tree on top.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path, PurePosixPath

from gempress.core.config import GempressConfig
from gempress.core.discovery import WarningSink, find_content_pairs
from gempress.core.exceptions import BuildFilesystemError, UnsafePublicDirError
from gempress.core.feed import build_feed
from gempress.core.loader import load_entries
from gempress.core.paths import TemplateLocator, split_url_path, url_to_filepath
from gempress.core.types import Feed
from gempress.engine.context import FeedTemplateData
from gempress.engine.template_loader import TemplateLoader
from gempress.infra.sinks import AtomSink, IndexSink, PostSink
from gempress.infra.static import merge_static_tree
from gempress.logging_setup import log_warning

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    feed: Feed
    written: list[Path] = field(default_factory=list)


def _reserved_output_paths(config: GempressConfig) -> dict[PurePosixPath, str]:
    return {
        PurePosixPath(*split_url_path(config.feed_path)): f"the Atom feed `{config.feed_path}`",
        PurePosixPath(*split_url_path(config.index_path)): f"the index page `{config.index_path}`",
    }


def load_feed(config: GempressConfig, warn: WarningSink = log_warning, now: datetime | None = None) -> Feed:
    """Discover, validate and aggregate the capsule's posts."""
    pairs = find_content_pairs(config.abs_posts_dir, warn)
    locator = TemplateLocator(config.url, config.post_path_template)
    entries = load_entries(pairs, locator, reserved=_reserved_output_paths(config))
    return build_feed(config, entries, now=now)


def _check_public_dir(config: GempressConfig) -> None:
    # The public dir may sit inside the capsule but must not be, or contain, any source.
    public_dir = config.abs_public_dir.resolve()
    sources = [
        config.site_root,
        config.abs_posts_dir,
        config.abs_static_dir,
        config.abs_index_template_file.parent,
        config.abs_post_template_file.parent,
    ]
    for source in sources:
        resolved = source.resolve()
        if resolved == public_dir or public_dir in resolved.parents:
            raise UnsafePublicDirError(config.abs_public_dir, source)


def _reset_public_dir(public_dir: Path) -> None:
    # Posts may have been removed or turned into drafts since the last build.
    try:
        if public_dir.exists():
            shutil.rmtree(public_dir)
        public_dir.mkdir(parents=True)
    except OSError as e:
        msg = f"Failed resetting the public directory `{public_dir}`: {e}"
        raise BuildFilesystemError(msg) from e


def build_capsule(config: GempressConfig, warn: WarningSink = log_warning, now: datetime | None = None) -> BuildReport:
    """Build the capsule described by ``config`` into its public directory."""
    _check_public_dir(config)
    feed = load_feed(config, warn, now=now)
    feed_data = FeedTemplateData.from_feed(feed)
    report = BuildReport(feed=feed)

    public_dir = config.abs_public_dir
    _reset_public_dir(public_dir)

    loader = TemplateLoader()

    index_sink = IndexSink(
        config.abs_index_template_file,
        url_to_filepath(public_dir, config.index_path),
        loader=loader,
    )
    report.written.append(index_sink.publish(feed_data))

    atom_sink = AtomSink(url_to_filepath(public_dir, config.feed_path), loader=loader)
    report.written.append(atom_sink.publish(feed_data))

    post_sink = PostSink(config.abs_post_template_file, public_dir, loader=loader)
    report.written.extend(post_sink.publish(feed.entries, feed_data))

    merge_static_tree(config.abs_static_dir, public_dir, config.static_conflict)

    logger.info("Built %d post(s) into %s", len(feed.entries), public_dir)
    return report
