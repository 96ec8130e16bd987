"""Sinks rendering user templates into gemtext pages."""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Template, TemplateError, TemplateNotFound

from gempress.core.exceptions import (
    InvalidIndexTemplateError,
    InvalidPostTemplateError,
    TemplateNotFoundError,
)
from gempress.core.types import Entry
from gempress.engine.context import EntryTemplateData, FeedTemplateData
from gempress.engine.template_loader import TemplateLoader, describe_template_error
from gempress.infra.sinks.base import write_output

logger = logging.getLogger(__name__)

_RENDER_ERRORS = (TemplateError, TypeError, ValueError)


class IndexSink:
    """Renders the index page from the user's index template."""

    def __init__(self, template_path: Path, output_path: Path, loader: TemplateLoader | None = None) -> None:
        self.template_path = template_path
        self.output_path = output_path
        self.loader = loader or TemplateLoader()

    def publish(self, feed_data: FeedTemplateData) -> Path:
        try:
            template = self.loader.load_template(self.template_path)
        except TemplateNotFound as e:
            raise TemplateNotFoundError("index", self.template_path) from e
        except TemplateError as e:
            raise InvalidIndexTemplateError(self.template_path, describe_template_error(e)) from e

        try:
            content = template.render(feed=feed_data.context())
        except _RENDER_ERRORS as e:
            raise InvalidIndexTemplateError(self.template_path, describe_template_error(e)) from e

        write_output(self.output_path, content)
        logger.debug("Wrote index page %s", self.output_path)
        return self.output_path


class PostSink:
    """Renders one page per entry from the user's post template.

    Each page gets the entry as ``entry`` and the whole feed as ``feed``. Pages are written
    to ``public_dir`` joined with the entry's output path.
    """

    def __init__(self, template_path: Path, public_dir: Path, loader: TemplateLoader | None = None) -> None:
        self.template_path = template_path
        self.public_dir = public_dir
        self.loader = loader or TemplateLoader()

    def _load(self, output_path: Path) -> Template:
        try:
            return self.loader.load_template(self.template_path)
        except TemplateNotFound as e:
            raise TemplateNotFoundError("post", self.template_path) from e
        except TemplateError as e:
            raise InvalidPostTemplateError(self.template_path, output_path, describe_template_error(e)) from e

    def publish_entry(self, entry: Entry, feed_data: FeedTemplateData) -> Path:
        output_path = self.public_dir / entry.location.output_path
        template = self._load(output_path)

        try:
            content = template.render(
                entry=EntryTemplateData.from_entry(entry).context(),
                feed=feed_data.context(),
            )
        except _RENDER_ERRORS as e:
            raise InvalidPostTemplateError(self.template_path, output_path, describe_template_error(e)) from e

        write_output(output_path, content)
        logger.debug("Wrote post %s", output_path)
        return output_path

    def publish(self, entries: tuple[Entry, ...], feed_data: FeedTemplateData) -> list[Path]:
        return [self.publish_entry(entry, feed_data) for entry in entries]
