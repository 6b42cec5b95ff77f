"""Shared data models for CineVault."""

from .cache import CacheEntry, CacheLookup, CacheSize, CacheStats, RatingCacheStats
from .safety import AdultFilterResult, ContentClass, FilterStats
from .tmdb import Content, ContentRating, GenreTierInfo, TierSelection, TMDBPage

__all__ = [
    "AdultFilterResult",
    "CacheEntry",
    "CacheLookup",
    "CacheSize",
    "CacheStats",
    "Content",
    "ContentClass",
    "ContentRating",
    "FilterStats",
    "GenreTierInfo",
    "RatingCacheStats",
    "TMDBPage",
    "TierSelection",
]
