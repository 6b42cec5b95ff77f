"""Logging configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from cinevault.shared.constants import LogConfig

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(default=LogConfig.DEFAULT_LEVEL, description="Log level")
    file: str | None = Field(default=None, description="JSON-lines log file path")
    use_rich_console: bool = Field(
        default=True,
        description="Use the Rich console handler",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        level = v.upper()
        if level not in _VALID_LEVELS:
            msg = f"Invalid log level: {v}. Must be one of {_VALID_LEVELS}"
            raise ValueError(msg)
        return level


__all__ = ["LoggingSettings"]
