from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import yaml
from pydantic import ValidationError

from gempress.core.config import GempressConfig
from gempress.core.exceptions import (
    InvalidCapsuleUrlError,
    InvalidConfigFileError,
    NonexistentConfigFileError,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("gempress.yaml")


class ConfigLoader:
    """Loads and validates gempress configuration.

    Handles YAML file loading and works with GempressConfig (BaseSettings) to apply
    environment variable overrides.
    """

    def __init__(self, config_path: Path = DEFAULT_CONFIG_FILE) -> None:
        self.config_path = config_path

    def load(self) -> GempressConfig:
        """Loads configuration with environment-variable precedence.

        Priority (highest to lowest):
        1. Environment variables (GEMPRESS_KEY, GEMPRESS_SECTION__KEY)
        2. Config file
        3. Defaults

        The capsule URL and the post path template are checked here, so a bad config fails
        before any post is read.
        """
        file_config = self._load_from_file()
        file_config["site_root"] = self.config_path.parent.resolve()

        try:
            config = GempressConfig(**file_config)
        except ValidationError as e:
            raise InvalidConfigFileError(self.config_path, str(e)) from e

        self._check_capsule_url(config.url)
        _ = config.post_path_template
        logger.debug("Loaded config from %s", self.config_path)
        return config

    def _load_from_file(self) -> dict[str, Any]:
        try:
            with self.config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError as e:
            raise NonexistentConfigFileError(self.config_path) from e
        except yaml.YAMLError as e:
            raise InvalidConfigFileError(self.config_path, str(e)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidConfigFileError(self.config_path, str(e)) from e

        if not isinstance(data, dict):
            msg = f"Configuration root must be a mapping (dictionary), got {type(data).__name__}"
            raise InvalidConfigFileError(self.config_path, msg)
        return data

    @staticmethod
    def _check_capsule_url(url: str) -> None:
        try:
            parts = urlsplit(url)
        except ValueError as e:
            raise InvalidCapsuleUrlError(url) from e
        if not parts.scheme or not parts.netloc:
            raise InvalidCapsuleUrlError(url)


def load_config(config_path: Path = DEFAULT_CONFIG_FILE) -> GempressConfig:
    return ConfigLoader(config_path).load()
