"""CineVault Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import toml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cinevault.config.models.api_settings import APISettings
from cinevault.config.models.app_settings import LoggingSettings
from cinevault.config.models.cache_settings import CacheSettings
from cinevault.config.models.safety_settings import SafetySettings
from cinevault.shared.constants import TMDB

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Settings facade providing unified configuration access.

    Environment variables use the ``CINEVAULT_`` prefix with ``__`` as the
    nesting delimiter, e.g. ``CINEVAULT_API__TMDB__TIMEOUT=5``. The plain
    ``TMDB_API_KEY`` variable fills ``api.tmdb.api_key`` when no key is
    configured otherwise.
    """

    model_config = SettingsConfigDict(
        env_prefix="CINEVAULT_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: APISettings = Field(default_factory=APISettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    safety: SafetySettings = Field(default_factory=SafetySettings)

    @model_validator(mode="after")
    def _fill_api_key_from_env(self) -> Settings:
        if not self.api.tmdb.api_key:
            env_key = os.getenv(TMDB.API_KEY_ENV, "").strip()
            if env_key:
                self.api.tmdb.api_key = env_key
        return self

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from TOML file with environment variable overrides."""
        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        return cls(**raw_config)

    def to_toml_file(self, file_path: str | Path) -> None:
        """Save settings to TOML file.

        API keys are written to the file; logs mask them via __repr__.
        """
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self.model_dump(exclude_none=True)

        with open(file_path, "w", encoding="utf-8") as f:
            toml.dump(config_dict, f)
