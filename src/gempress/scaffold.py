"""Creation of new posts."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from pathlib import Path

from gempress.core.discovery import ContentKind, ContentPair
from gempress.core.exceptions import InvalidSlugError, OutputWriteError, PostAlreadyExistsError
from gempress.core.types import format_rfc3339
from gempress.engine.template_loader import TemplateLoader

logger = logging.getLogger(__name__)

METADATA_TEMPLATE_NAME = "metadata.yaml.jinja"


def render_new_metadata(title: str, now: datetime | None = None, loader: TemplateLoader | None = None) -> str:
    """Render the YAML sidecar for a fresh post with a random ``urn:uuid`` id."""
    timestamp = (now or datetime.now(UTC).astimezone()).replace(microsecond=0)
    template = (loader or TemplateLoader()).load_builtin_template(METADATA_TEMPLATE_NAME)
    return template.render(id=f"urn:uuid:{uuid.uuid4()}", title=title, timestamp=format_rfc3339(timestamp))


def _create_exclusive(path: Path, content: str, slug: str) -> None:
    try:
        with path.open("x", encoding="utf-8") as f:
            f.write(content)
    except FileExistsError as e:
        raise PostAlreadyExistsError(slug) from e
    except OSError as e:
        raise OutputWriteError(path, e.strerror or str(e)) from e


def create_new_post(posts_dir: Path, slug: str, title: str | None = None, now: datetime | None = None) -> ContentPair:
    """Create an empty gemtext body and a draft metadata file for ``slug``.

    Neither file may exist already.
    """
    if not slug or slug in {".", ".."} or "/" in slug or "\\" in slug:
        raise InvalidSlugError(slug)

    pair = ContentPair(
        body_path=posts_dir / f"{slug}{ContentKind.BODY.suffix}",
        metadata_path=posts_dir / f"{slug}{ContentKind.METADATA.suffix}",
    )
    if pair.body_path.exists() or pair.metadata_path.exists():
        raise PostAlreadyExistsError(slug)

    metadata = render_new_metadata(title or slug, now=now)

    posts_dir.mkdir(parents=True, exist_ok=True)
    _create_exclusive(pair.body_path, "", slug)
    try:
        _create_exclusive(pair.metadata_path, metadata, slug)
    except (PostAlreadyExistsError, OutputWriteError):
        pair.body_path.unlink(missing_ok=True)
        raise

    logger.info("Created %s and %s", pair.body_path, pair.metadata_path)
    return pair
