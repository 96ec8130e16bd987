from __future__ import annotations

from pathlib import Path

from gempress.core.exceptions import OutputWriteError


def write_output(path: Path, content: str) -> None:
    """Write a generated file, creating parent directories and overwriting any existing file."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(path, e.strerror or str(e)) from e
