"""Discovery of post files.

A post is a gemtext body (``slug.gmi``) plus a YAML sidecar (``slug.yaml``) in the same
directory. Files that are missing their counterpart are reported through the warning sink and
skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from gempress.core.exceptions import DirectoryReadError

logger = logging.getLogger(__name__)

WarningSink = Callable[[str], None]


class ContentKind(str, Enum):
    BODY = "gmi"
    METADATA = "yaml"

    @property
    def suffix(self) -> str:
        return f".{self.value}"

    @property
    def counterpart(self) -> ContentKind:
        return ContentKind.METADATA if self is ContentKind.BODY else ContentKind.BODY

    @property
    def label(self) -> str:
        return "gemtext" if self is ContentKind.BODY else "YAML metadata"

    @classmethod
    def for_path(cls, path: Path) -> ContentKind | None:
        """Return the kind matching the path's extension, or None."""
        for kind in cls:
            if path.suffix == kind.suffix:
                return kind
        return None

    def counterpart_path(self, path: Path) -> Path:
        return path.with_suffix(self.counterpart.suffix)


@dataclass(frozen=True)
class ContentPair:
    body_path: Path
    metadata_path: Path

    @property
    def slug(self) -> str:
        return self.body_path.stem


def _list_directory(directory: Path) -> list[Path]:
    try:
        return sorted(directory.iterdir())
    except OSError as e:
        raise DirectoryReadError(directory, e.strerror or str(e)) from e


def _warn_orphan(warn: WarningSink, kind: ContentKind, path: Path) -> None:
    warn(
        f"This {kind.label} file does not have an accompanying {kind.counterpart.label} file: {path}"
    )


def find_content_pairs(directory: Path, warn: WarningSink) -> list[ContentPair]:
    """Pair every body file in ``directory`` with its metadata sidecar.

    Entries are visited in sorted name order, which fixes the discovery order used to break ties
    when sorting the feed.
    """
    found: dict[ContentKind, list[Path]] = {kind: [] for kind in ContentKind}

    for path in _list_directory(directory):
        kind = ContentKind.for_path(path)
        if kind is None or path.is_dir():
            warn(f"This is not a .gmi or .yaml file: {path}")
            continue
        found[kind].append(path)

    body_paths = set(found[ContentKind.BODY])
    metadata_paths = set(found[ContentKind.METADATA])

    for metadata_path in found[ContentKind.METADATA]:
        if ContentKind.METADATA.counterpart_path(metadata_path) not in body_paths:
            _warn_orphan(warn, ContentKind.METADATA, metadata_path)

    pairs: list[ContentPair] = []
    for body_path in found[ContentKind.BODY]:
        metadata_path = ContentKind.BODY.counterpart_path(body_path)
        if metadata_path in metadata_paths:
            pairs.append(ContentPair(body_path=body_path, metadata_path=metadata_path))
        else:
            _warn_orphan(warn, ContentKind.BODY, body_path)

    logger.debug("Found %d post(s) in %s", len(pairs), directory)
    return pairs
