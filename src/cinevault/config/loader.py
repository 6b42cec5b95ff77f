"""Settings loader and singleton manager.

This module handles:
- Environment variable loading from .env files
- Configuration file loading from TOML
- Thread-safe singleton pattern for the Settings instance
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from dotenv import load_dotenv

from cinevault.config.models.settings import Settings
from cinevault.shared.errors import ApplicationError, ErrorCode, ErrorContext

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS: tuple[Path, ...] = (
    Path("config/config.toml"),
    Path("cinevault.toml"),
)


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking to keep the common path lock-free.
    """

    _instance: Settings | None = None
    _lock: threading.RLock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance, loading it if necessary."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self) -> Settings:
        """Force a reload of the global settings instance."""
        with self._lock:
            self._instance = load_settings()

        return self._instance


def _load_env_file(env_file: Path = Path(".env")) -> None:
    """Load environment variables from a .env file if one exists.

    Variables already present in the process environment win.
    """
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug("Loaded environment from %s", env_file)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML file or the environment.

    Args:
        config_path: Optional TOML path. When omitted, the default locations
            are tried before falling back to environment variables only.

    Returns:
        Settings instance

    Raises:
        ApplicationError: If an explicit config file is missing or invalid
    """
    _load_env_file()

    if config_path is not None:
        try:
            return Settings.from_toml_file(config_path)
        except FileNotFoundError as e:
            raise ApplicationError(
                code=ErrorCode.MISSING_CONFIG,
                message=str(e),
                context=ErrorContext(
                    operation="load_settings",
                    additional_data={"config_path": str(config_path)},
                ),
                original_error=e,
            ) from e
        except ValueError as e:
            raise ApplicationError(
                code=ErrorCode.INVALID_CONFIG,
                message=f"Invalid configuration file: {e}",
                context=ErrorContext(
                    operation="load_settings",
                    additional_data={"config_path": str(config_path)},
                ),
                original_error=e,
            ) from e

    for default_path in DEFAULT_CONFIG_PATHS:
        if default_path.exists():
            logger.debug("Loading configuration from %s", default_path)
            return Settings.from_toml_file(default_path)

    return Settings()


# Global loader instance
_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance (thread-safe)."""
    return _loader.get_config()


def reload_config() -> Settings:
    """Reload the global settings instance from configuration sources."""
    return _loader.reload_config()
