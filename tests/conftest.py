from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

from gempress.core.config import GempressConfig

INDEX_TEMPLATE = """\
# {{ feed.title }}
{% for entry in feed.entries %}
=> {{ entry.url }} {{ entry.published or entry.updated }} {{ entry.title }}
{% endfor %}
"""

POST_TEMPLATE = """\
# {{ entry.title }}

{{ entry.body }}
=> {{ feed.index_url }} Back to {{ feed.title }}
"""


def write_post(posts_dir: Path, slug: str, body: str = "Hello, Gemini!\n", **metadata: Any) -> Path:
    """Write ``slug.gmi`` and ``slug.yaml``; returns the body path."""
    posts_dir.mkdir(parents=True, exist_ok=True)
    fields = {
        "id": f"urn:example:{slug}",
        "title": slug.replace("-", " ").title(),
        "updated": "2024-01-01T00:00:00Z",
    }
    fields.update(metadata)
    (posts_dir / f"{slug}.yaml").write_text(yaml.safe_dump(fields, sort_keys=False), encoding="utf-8")
    body_path = posts_dir / f"{slug}.gmi"
    body_path.write_text(body, encoding="utf-8")
    return body_path


@dataclass
class Capsule:
    root: Path

    @property
    def config_path(self) -> Path:
        return self.root / "gempress.yaml"

    @property
    def posts_dir(self) -> Path:
        return self.root / "posts"

    @property
    def static_dir(self) -> Path:
        return self.root / "static"

    @property
    def public_dir(self) -> Path:
        return self.root / "public"

    @property
    def templates_dir(self) -> Path:
        return self.root / "templates"

    def write_config(self, **overrides: Any) -> Path:
        data: dict[str, Any] = {
            "title": "Example Capsule",
            "url": "gemini://example.com/",
            "author": {"name": "Ada", "email": "ada@example.com"},
        }
        data.update(overrides)
        self.config_path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return self.config_path

    def write_post(self, slug: str, body: str = "Hello, Gemini!\n", **metadata: Any) -> Path:
        return write_post(self.posts_dir, slug, body, **metadata)

    def config(self, **overrides: Any) -> GempressConfig:
        values: dict[str, Any] = {
            "site_root": self.root,
            "title": "Example Capsule",
            "url": "gemini://example.com/",
        }
        values.update(overrides)
        return GempressConfig(**values)


@pytest.fixture(autouse=True)
def _clean_gempress_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("GEMPRESS_"):
            monkeypatch.delenv(key)


@pytest.fixture
def capsule(tmp_path: Path) -> Capsule:
    """A capsule directory with config, templates and an empty posts directory."""
    site = Capsule(tmp_path / "site")
    site.posts_dir.mkdir(parents=True)
    site.templates_dir.mkdir()
    (site.templates_dir / "index.gmi.jinja").write_text(INDEX_TEMPLATE, encoding="utf-8")
    (site.templates_dir / "post.gmi.jinja").write_text(POST_TEMPLATE, encoding="utf-8")
    site.write_config()
    return site


@pytest.fixture
def warnings() -> list[str]:
    return []
