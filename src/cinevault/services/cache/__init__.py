"""In-memory caches for certifications and genre tier metadata."""

from .rating_cache import RatingCache
from .tier_cache import TierCache, build_tier_cache_key
from .ttl_store import TTLStore

__all__ = ["RatingCache", "TTLStore", "TierCache", "build_tier_cache_key"]
