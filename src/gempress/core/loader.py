"""Loading and validation of post files."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path, PurePosixPath
from typing import Any

import yaml
from pydantic import ValidationError

from gempress.core.discovery import ContentPair
from gempress.core.exceptions import (
    DuplicateOutputPathError,
    InvalidBodyEncodingError,
    InvalidMetadataFileError,
    LocationError,
    PostReadError,
)
from gempress.core.paths import PostLocator
from gempress.core.types import Entry, EntryMetadata

logger = logging.getLogger(__name__)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class MetadataLoader(yaml.SafeLoader):
    """Safe YAML loader that leaves timestamps as strings.

    Timestamps are validated as RFC 3339 by :class:`EntryMetadata`, and extra fields reach the
    templates exactly as written.
    """


MetadataLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise PostReadError(path, e.strerror or str(e)) from e


def _format_validation_error(error: ValidationError) -> str:
    lines = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        message = detail["msg"].removeprefix("Value error, ")
        lines.append(f"`{location}`: {message}" if location else message)
    return "\n".join(lines)


def read_metadata(path: Path) -> EntryMetadata:
    """Parse and validate a YAML sidecar file.

    Raises:
        InvalidMetadataFileError: If the file is not a YAML mapping or fails validation.
        PostReadError: If the file cannot be read.

    """
    try:
        raw: Any = yaml.load(_read_bytes(path), Loader=MetadataLoader)  # noqa: S506
    except yaml.YAMLError as e:
        raise InvalidMetadataFileError(path, str(e)) from e

    if not isinstance(raw, dict):
        raise InvalidMetadataFileError(path, "The metadata file must be a YAML mapping.")

    try:
        return EntryMetadata.from_sidecar(raw)
    except ValidationError as e:
        raise InvalidMetadataFileError(path, _format_validation_error(e)) from e


def read_body(path: Path) -> str:
    """Read a gemtext body, which must be valid UTF-8."""
    try:
        return _read_bytes(path).decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidBodyEncodingError(path, str(e)) from e


def load_entries(
    pairs: Iterable[ContentPair],
    locator: PostLocator,
    reserved: Mapping[PurePosixPath, str] | None = None,
) -> list[Entry]:
    """Load every non-draft post, in the order the pairs are given.

    Drafts are skipped before their location is computed, so a draft never claims a URL.
    ``reserved`` maps output paths already taken by other pages (the index, the feed) to a
    description used in the error when a post lands on one of them.
    """
    entries: list[Entry] = []
    claimed: dict[PurePosixPath, Path | str] = dict(reserved or {})
    drafts = 0

    for pair in pairs:
        body = read_body(pair.body_path)
        metadata = read_metadata(pair.metadata_path)

        if metadata.draft:
            drafts += 1
            logger.debug("Skipping draft %s", pair.body_path)
            continue

        try:
            location = locator.locate(pair.slug, metadata.published)
        except ValueError as e:
            raise LocationError(pair.body_path, str(e)) from e

        if (previous := claimed.get(location.output_path)) is not None:
            raise DuplicateOutputPathError(location.output_path, previous, pair.body_path)
        claimed[location.output_path] = pair.body_path

        entries.append(Entry(metadata=metadata, body=body, location=location))
        logger.debug("Loaded %s -> %s", pair.body_path, location.url)

    if drafts:
        logger.info("Skipped %d draft post(s)", drafts)
    return entries
