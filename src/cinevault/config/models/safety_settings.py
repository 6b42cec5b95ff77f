"""Child safety configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SafetySettings(BaseModel):
    """Child safety pipeline configuration."""

    max_concurrency: int = Field(
        default=20,
        gt=0,
        description="Maximum certification lookups in flight per batch",
    )
    request_multiplier: int = Field(
        default=2,
        ge=1,
        description="Over-fetch factor when results will be filtered",
    )


__all__ = ["SafetySettings"]
