"""Cache data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    """A cached value with its write time and expiry (clock seconds)."""

    data: T
    timestamp: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


@dataclass(frozen=True)
class CacheLookup(Generic[T]):
    """Tagged result of a cache read.

    ``present=False`` means nothing usable is cached. ``present=True`` with
    ``value=None`` means a previous lookup determined there is no data,
    which the child-safety pipeline must not confuse with a miss.
    """

    present: bool
    value: T | None = None

    @classmethod
    def miss(cls) -> CacheLookup[T]:
        return cls(present=False)

    @classmethod
    def hit(cls, value: T | None) -> CacheLookup[T]:
        return cls(present=True, value=value)


@dataclass(frozen=True)
class CacheStats:
    """Hit/miss counters for one cache."""

    hits: int
    misses: int
    entries: int

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


@dataclass(frozen=True)
class RatingCacheStats:
    """Statistics of the movie and TV sub-caches."""

    movies: CacheStats
    tv: CacheStats

    @property
    def combined(self) -> CacheStats:
        return CacheStats(
            hits=self.movies.hits + self.tv.hits,
            misses=self.movies.misses + self.tv.misses,
            entries=self.movies.entries + self.tv.entries,
        )


@dataclass(frozen=True)
class CacheSize:
    """Current entry counts."""

    movies: int
    tv: int

    @property
    def total(self) -> int:
        return self.movies + self.tv
