"""Centralized logging configuration for gempress."""

from __future__ import annotations

import logging
import os
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console", "log_warning"]

_LOG_LEVEL_ENV: Final[str] = "GEMPRESS_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "INFO"

console = Console(stderr=True)

_warnings_logger = logging.getLogger("gempress.warnings")


def _resolve_level(verbose: bool) -> int:
    """Return the logging level from the CLI flag or environment variable."""
    if verbose:
        return logging.DEBUG
    level_name = os.getenv(_LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging(verbose: bool = False) -> None:
    """Configure logging once with a Rich handler."""
    root_logger = logging.getLogger()

    managed_handler = next(
        (h for h in root_logger.handlers if getattr(h, "_gempress_managed", False)),
        None,
    )
    if managed_handler is None:
        root_logger.handlers.clear()
        handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._gempress_managed = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)

    root_logger.setLevel(_resolve_level(verbose))
    logging.captureWarnings(True)


def log_warning(message: str) -> None:
    """Default warning sink for non-fatal build problems."""
    _warnings_logger.warning(message)
