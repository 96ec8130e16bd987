"""Core data types for gempress."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, TypeAlias

from dateutil.parser import isoparse
from pydantic import BaseModel, ConfigDict, Field, JsonValue, ValidationInfo, field_validator

# Semi-structured value passed through from sidecar files to templates.
ExtraValue: TypeAlias = JsonValue

# This example comes from the Go standard library.
EXAMPLE_RFC3339 = "2006-01-02T15:04:05Z07:00"

_RFC3339_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)


def parse_rfc3339(value: str) -> datetime:
    """Parse an RFC 3339 timestamp. The timezone offset is mandatory.

    Raises:
        ValueError: If ``value`` is not RFC 3339.

    """
    if not _RFC3339_RE.match(value):
        msg = f"not an RFC 3339 timestamp: {value!r}"
        raise ValueError(msg)
    return isoparse(value.upper().replace(" ", "T"))


def format_rfc3339(dt: datetime) -> str:
    """Format a timezone-aware datetime as RFC 3339, using ``Z`` for UTC."""
    return dt.isoformat().replace("+00:00", "Z")


def _string_keys(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _string_keys(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_string_keys(item) for item in value]
    return value


class ConflictPolicy(str, Enum):
    """What to do when a static file lands on a path the build already wrote."""

    OVERWRITE = "overwrite"
    ERROR = "error"


class Author(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    email: str | None = None
    uri: str | None = None


class EntryMetadata(BaseModel):
    """Validated contents of a post's YAML sidecar."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    updated: datetime
    published: datetime | None = None
    summary: str | None = None
    author: Author | None = None
    rights: str | None = None
    lang: str | None = None
    categories: list[str] = Field(default_factory=list)
    draft: bool = False
    extra_fields: dict[str, ExtraValue] = Field(default_factory=dict)

    @classmethod
    def from_sidecar(cls, data: Mapping[Any, Any]) -> EntryMetadata:
        """Validate a parsed sidecar mapping.

        Every key outside the fixed schema is kept in ``extra_fields``, in file order, including a
        key that happens to be named ``extra_fields``. Mapping keys are stringified at any depth.
        """
        schema = cls.model_fields.keys() - {"extra_fields"}
        known = {key: value for key, value in data.items() if key in schema}
        extra = {str(key): _string_keys(value) for key, value in data.items() if key not in schema}
        return cls.model_validate({**known, "extra_fields": extra})

    @field_validator("updated", "published", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, datetime) or (value is None and info.field_name == "published"):
            return value
        msg = f"The post `{info.field_name}` time must be in RFC 3339 format (e.g. {EXAMPLE_RFC3339})."
        if not isinstance(value, str):
            raise ValueError(msg)
        try:
            return parse_rfc3339(value)
        except ValueError as e:
            raise ValueError(msg) from e

    @field_validator("updated", "published")
    @classmethod
    def _require_timezone(cls, value: datetime | None, info: ValidationInfo) -> datetime | None:
        if value is not None and value.tzinfo is None:
            msg = f"The post `{info.field_name}` time must include a timezone offset (e.g. {EXAMPLE_RFC3339})."
            raise ValueError(msg)
        return value

    @property
    def sort_time(self) -> datetime:
        return self.published or self.updated


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    output_path: PurePosixPath


class Entry(BaseModel):
    model_config = ConfigDict(frozen=True)

    metadata: EntryMetadata
    body: str
    location: Location


class Feed(BaseModel):
    """Publication-wide model consumed by the render sinks."""

    model_config = ConfigDict(frozen=True)

    capsule_url: str
    feed_url: str
    index_url: str
    title: str
    subtitle: str | None = None
    rights: str | None = None
    author: Author | None = None
    updated: datetime
    entries: tuple[Entry, ...] = ()
