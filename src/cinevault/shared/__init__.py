"""CineVault Shared Module.

This package contains shared constants, models, error handling and logging
used across CineVault.
"""

__all__ = ["constants", "errors", "logging", "models"]
