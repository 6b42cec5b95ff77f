"""
Logging Configuration Constants
"""


class LogConfig:
    """Log configuration constants."""

    ROOT_LOGGER = "cinevault"
    DEFAULT_LEVEL = "INFO"
    DEFAULT_ENCODING = "utf-8"
