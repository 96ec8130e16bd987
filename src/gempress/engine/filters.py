"""Custom Jinja2 filters for page and feed templates."""

from __future__ import annotations

from datetime import datetime

from gempress.core.types import format_rfc3339, parse_rfc3339


def _as_datetime(value: object) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return parse_rfc3339(value)
        except ValueError:
            return None
    return None


def format_datetime(value: object, format_str: str = "%Y-%m-%d") -> str:
    """Format a datetime or RFC 3339 string.

    Args:
        value: Datetime or RFC 3339 timestamp to format
        format_str: strftime format string

    Returns:
        Formatted datetime string, or ``str(value)`` when it is not a timestamp

    """
    dt = _as_datetime(value)
    if dt is None:
        return "" if value is None else str(value)
    return dt.strftime(format_str)


def isoformat(value: object) -> str:
    dt = _as_datetime(value)
    if dt is None:
        return "" if value is None else str(value)
    return format_rfc3339(dt)
