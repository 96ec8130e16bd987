from __future__ import annotations

from functools import cached_property
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from gempress.core.paths import PostPathTemplate
from gempress.core.types import Author, ConflictPolicy


class GempressConfig(BaseSettings):
    """Capsule configuration, read from ``gempress.yaml``.

    Supports environment variable overrides with the pattern:
    GEMPRESS_KEY or GEMPRESS_SECTION__KEY (e.g., GEMPRESS_AUTHOR__NAME)

    All paths are relative to ``site_root`` unless absolute. The loader sets ``site_root`` to
    the directory holding the config file.
    """

    site_root: Path = Field(default_factory=Path.cwd, description="Directory paths are resolved against")

    # Directories
    public_dir: Path = Field(default=Path("public"), description="Build output directory")
    static_dir: Path = Field(default=Path("static"), description="Static files copied over the output")
    posts_dir: Path = Field(default=Path("posts"), description="Gemtext posts and their YAML metadata")

    # Templates
    index_template_file: Path = Field(default=Path("templates/index.gmi.jinja"))
    post_template_file: Path = Field(default=Path("templates/post.gmi.jinja"))

    # URL paths
    post_path: str = Field(default="/posts/{{ slug }}.gmi", description="Post path template")
    index_path: str = Field(default="/posts/index.gmi")
    feed_path: str = Field(default="/posts/atom.xml")

    static_conflict: ConflictPolicy = Field(
        default=ConflictPolicy.OVERWRITE,
        description="Whether static files may overwrite generated pages",
    )

    # Capsule metadata
    title: str
    url: str = Field(description="Capsule base URL, e.g. gemini://example.com/")
    subtitle: str | None = None
    rights: str | None = None
    author: Author | None = None

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="GEMPRESS_",
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # File values arrive as init kwargs; the environment wins over them.
        return env_settings, init_settings

    @cached_property
    def post_path_template(self) -> PostPathTemplate:
        return PostPathTemplate(self.post_path)

    @property
    def abs_public_dir(self) -> Path:
        return self._resolve(self.public_dir)

    @property
    def abs_static_dir(self) -> Path:
        return self._resolve(self.static_dir)

    @property
    def abs_posts_dir(self) -> Path:
        return self._resolve(self.posts_dir)

    @property
    def abs_index_template_file(self) -> Path:
        return self._resolve(self.index_template_file)

    @property
    def abs_post_template_file(self) -> Path:
        return self._resolve(self.post_template_file)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_root / path
