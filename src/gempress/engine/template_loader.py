"""Jinja2 template loading for pages, the Atom feed and new post metadata.

User templates (index and post pages) are read from the paths named in the config and render
gemtext, so they are not autoescaped. Built-in templates ship with the package; the Atom feed
template renders with XML escaping.
"""

from __future__ import annotations

from importlib.resources import files
from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateSyntaxError,
    select_autoescape,
)

from gempress.engine import filters

FEED_TEMPLATE_NAME = "atom.xml.jinja"


def describe_template_error(error: Exception) -> str:
    """Return a readable reason for a template failure, with the line when known."""
    if isinstance(error, TemplateSyntaxError) and error.lineno:
        return f"line {error.lineno}: {error.message}"
    return str(error)


class TemplateLoader:
    """Loads Jinja2 templates with gempress filters registered.

    Supports:
    - User templates from any directory, with includes and inheritance relative to it
    - Built-in templates (Atom feed, new post metadata)
    - Custom filters (datetime formatting)
    """

    def __init__(self, builtin_template_dir: Path | None = None) -> None:
        """Initialize TemplateLoader.

        Args:
            builtin_template_dir: Directory holding the built-in templates. Defaults to the
                templates bundled in ``gempress.engine``.

        """
        if builtin_template_dir is None:
            builtin_template_dir = Path(str(files("gempress.engine").joinpath("templates")))

        self.builtin_template_dir = builtin_template_dir
        self.builtin_env = self._create_env(
            builtin_template_dir,
            autoescape=select_autoescape(enabled_extensions=("xml.jinja",), default=False),
        )
        self._user_envs: dict[Path, Environment] = {}

    def _create_env(self, template_dir: Path, *, autoescape) -> Environment:
        env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=autoescape,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        env.filters["format_datetime"] = filters.format_datetime
        env.filters["isoformat"] = filters.isoformat
        return env

    def load_template(self, template_path: Path) -> Template:
        """Load a user template from a file path.

        Raises:
            TemplateNotFound: If the file does not exist
            TemplateSyntaxError: If the template cannot be parsed

        """
        template_dir = template_path.parent
        if template_dir not in self._user_envs:
            self._user_envs[template_dir] = self._create_env(template_dir, autoescape=False)
        return self._user_envs[template_dir].get_template(template_path.name)

    def load_builtin_template(self, template_name: str) -> Template:
        return self.builtin_env.get_template(template_name)

    def load_feed_template(self) -> Template:
        return self.load_builtin_template(FEED_TEMPLATE_NAME)
