"""API configuration models (TMDB).

This module contains configuration models for the TMDB API client.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from cinevault.shared.constants import TMDB, TMDBRateLimit


class TMDBSettings(BaseModel):
    """TMDB API configuration.

    Security: api_key is masked in __repr__ to prevent accidental exposure
    in logs.
    """

    api_key: str = Field(
        default="",
        repr=False,
        description="TMDB API key (v3)",
    )
    base_url: str = Field(
        default=TMDB.API_BASE_URL,
        description="TMDB API base URL",
    )
    language: str = Field(
        default=TMDB.DEFAULT_LANGUAGE,
        description="Language sent with every listing request",
    )

    # Request settings
    timeout: float = Field(
        default=TMDBRateLimit.REQUEST_TIMEOUT,
        gt=0,
        description="Per-request timeout in seconds",
    )

    # Rate limiting settings
    burst_limit: int = Field(
        default=TMDBRateLimit.BURST_LIMIT,
        gt=0,
        description="Requests allowed per rate limit window",
    )
    rate_limit_window: float = Field(
        default=TMDBRateLimit.WINDOW_SECONDS,
        gt=0,
        description="Rate limit window in seconds",
    )
    concurrent_requests: int = Field(
        default=TMDBRateLimit.CONCURRENT_REQUESTS,
        gt=0,
        description="Maximum number of requests in flight",
    )

    def __repr__(self) -> str:
        masked_key = "****" if self.api_key else "[empty]"
        return (
            f"TMDBSettings("
            f"api_key={masked_key}, "
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}, "
            f"burst_limit={self.burst_limit})"
        )


class APISettings(BaseModel):
    """API configuration container."""

    tmdb: TMDBSettings = Field(
        default_factory=TMDBSettings,
        description="TMDB API configuration",
    )


__all__ = [
    "APISettings",
    "TMDBSettings",
]
