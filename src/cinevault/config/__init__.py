"""CineVault Configuration Module

Unified access to configuration models and settings loading.
"""

from __future__ import annotations

from .loader import get_config, load_settings, reload_config
from .models import (
    APISettings,
    CacheSettings,
    LoggingSettings,
    SafetySettings,
    Settings,
    TMDBSettings,
)

__all__ = [
    "APISettings",
    "CacheSettings",
    "LoggingSettings",
    "SafetySettings",
    "Settings",
    "TMDBSettings",
    "get_config",
    "load_settings",
    "reload_config",
]
