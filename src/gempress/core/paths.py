"""Post path templates and URL/output-path resolution."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path, PurePosixPath
from typing import Protocol
from urllib.parse import quote, urlsplit, urlunsplit

from jinja2 import Environment, StrictUndefined, TemplateError

from gempress.core.exceptions import InvalidPostPathError
from gempress.core.types import Location

_SAMPLE_PUBLISHED = datetime(2006, 1, 2, 15, 4, 5)


def split_url_path(url_path: str) -> list[str]:
    """Split a URL path on ``/``, dropping empty segments."""
    return [segment for segment in url_path.split("/") if segment]


def url_to_filepath(base_path: Path, url_path: str) -> Path:
    return base_path.joinpath(*split_url_path(url_path))


def replace_url_path(url: str, path: str) -> str:
    """Return ``url`` with its path replaced by ``path``."""
    parts = urlsplit(url)
    if not path.startswith("/"):
        path = f"/{path}"
    return urlunsplit(parts._replace(path=path, query="", fragment=""))


class PostPathTemplate:
    """A compiled post path template.

    Templates use Jinja2 syntax and may reference ``slug``, ``year``, ``month`` and ``day``.
    The date placeholders are empty strings for posts without a ``published`` time.
    """

    def __init__(self, template: str) -> None:
        self.source = template
        env = Environment(undefined=StrictUndefined, autoescape=False)
        try:
            self._template = env.from_string(template)
        except TemplateError as e:
            raise InvalidPostPathError(template, str(e)) from e

        # Catch unknown placeholders now instead of on the first post.
        self.render("slug", _SAMPLE_PUBLISHED)
        self.render("slug", None)

    def render(self, slug: str, published: datetime | None) -> str:
        if published is None:
            year = month = day = ""
        else:
            year, month, day = f"{published.year:04d}", f"{published.month:02d}", f"{published.day:02d}"

        try:
            return self._template.render(slug=slug, year=year, month=month, day=day)
        except TemplateError as e:
            raise InvalidPostPathError(self.source, str(e)) from e


class PostLocator(Protocol):
    def locate(self, slug: str, published: datetime | None) -> Location:
        """Compute where a post is published.

        Raises ``ValueError`` when the post cannot be placed.
        """
        ...


class TemplateLocator:
    """Places posts under the capsule URL using a post path template."""

    def __init__(self, capsule_url: str, template: PostPathTemplate) -> None:
        self.capsule_url = capsule_url
        self.template = template

    def locate(self, slug: str, published: datetime | None) -> Location:
        segments = split_url_path(self.template.render(slug, published))
        if not segments:
            msg = f"The post path template `{self.template.source}` rendered an empty path."
            raise ValueError(msg)
        if any(segment in {".", ".."} for segment in segments):
            msg = f"The post path may not contain `.` or `..` segments: {'/'.join(segments)}"
            raise ValueError(msg)

        parts = urlsplit(self.capsule_url)
        base_segments = split_url_path(parts.path)
        url_path = "/" + "/".join([*base_segments, *(quote(s, safe="") for s in segments)])
        url = urlunsplit(parts._replace(path=url_path, query="", fragment=""))

        return Location(url=url, output_path=PurePosixPath(*segments))
