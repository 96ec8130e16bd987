"""CLI error handling utilities."""

from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.markup import escape

from gempress.core.exceptions import (
    BuildFilesystemError,
    ConfigError,
    ContentError,
    GempressError,
)
from gempress.logging_setup import console


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Context manager to handle CLI errors gracefully.

    User-facing errors are printed without a traceback and exit with status 1. Anything else
    propagates.

    Args:
        debug: If True, re-raise user-facing errors so the full traceback is shown.

    """
    try:
        yield
    except GempressError as e:
        if debug:
            raise
        if isinstance(e, ConfigError):
            label = "Configuration error"
        elif isinstance(e, ContentError):
            label = "Post error"
        elif isinstance(e, BuildFilesystemError):
            label = "Filesystem error"
        else:
            label = "Error"
        console.print(f"[bold red]{label}:[/bold red] {escape(str(e))}")
        raise typer.Exit(1) from e
