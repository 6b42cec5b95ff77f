"""
Cache Configuration Constants

TTL and sweep intervals for the in-memory caches used by the discovery
core.
"""

# Base time units for TTL calculations
BASE_SECOND = 1
BASE_MINUTE = 60 * BASE_SECOND
BASE_HOUR = 60 * BASE_MINUTE


class CacheConfig:
    """In-memory cache configuration."""

    # Certifications and TV ratings rarely change
    CERTIFICATION_TTL = BASE_HOUR  # 1 hour
    SWEEP_INTERVAL = 10 * BASE_MINUTE  # 10 minutes

    # Genre tier metadata (total_pages per genre combination)
    TIER_TTL = 6 * BASE_HOUR  # 6 hours

    # Tier cache key separator
    KEY_SEPARATOR = ":"
