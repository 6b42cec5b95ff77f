"""Cache configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from cinevault.shared.constants import CacheConfig


class CacheSettings(BaseModel):
    """In-memory cache configuration.

    Covers the certification/rating cache and the genre tier cache.
    """

    certification_ttl: float = Field(
        default=CacheConfig.CERTIFICATION_TTL,
        gt=0,
        description="Certification and TV rating TTL in seconds",
    )
    sweep_interval: float = Field(
        default=CacheConfig.SWEEP_INTERVAL,
        gt=0,
        description="Interval between expired-entry sweeps in seconds",
    )
    tier_ttl: float = Field(
        default=CacheConfig.TIER_TTL,
        gt=0,
        description="Genre tier metadata TTL in seconds",
    )


__all__ = ["CacheSettings"]
