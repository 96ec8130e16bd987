from pathlib import Path

from jinja2 import TemplateError

from gempress.core.exceptions import InvalidFeedTemplateError
from gempress.engine.context import FeedTemplateData
from gempress.engine.template_loader import TemplateLoader, describe_template_error
from gempress.infra.sinks.base import write_output


class AtomSink:
    """A sink for writing the capsule's Atom feed."""

    def __init__(self, output_path: Path, loader: TemplateLoader | None = None):
        self.output_path = output_path
        self.loader = loader or TemplateLoader()

    def render(self, feed_data: FeedTemplateData) -> str:
        try:
            return self.loader.load_feed_template().render(feed=feed_data.context())
        except (TemplateError, TypeError, ValueError) as e:
            raise InvalidFeedTemplateError(describe_template_error(e)) from e

    def publish(self, feed_data: FeedTemplateData) -> Path:
        """Renders the feed to XML and writes it to the output path."""
        write_output(self.output_path, self.render(feed_data))
        return self.output_path
