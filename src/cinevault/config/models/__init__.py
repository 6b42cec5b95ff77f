"""Configuration models package.

Domain-specific configuration models, one module per domain.
"""

from __future__ import annotations

from .api_settings import APISettings, TMDBSettings
from .app_settings import LoggingSettings
from .cache_settings import CacheSettings
from .safety_settings import SafetySettings
from .settings import Settings

__all__ = [
    "APISettings",
    "CacheSettings",
    "LoggingSettings",
    "SafetySettings",
    "Settings",
    "TMDBSettings",
]
