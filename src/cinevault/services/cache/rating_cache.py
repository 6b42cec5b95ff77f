"""Certification cache.

In-memory cache for TMDB movie certifications and TV content ratings,
shared across pagination requests so that the same title is looked up at
most once per TTL window.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time

from cinevault.shared.constants import CacheConfig
from cinevault.shared.models.cache import CacheLookup, CacheSize, RatingCacheStats
from cinevault.shared.models.tmdb import ContentRating

from .ttl_store import Clock, TTLStore

logger = logging.getLogger(__name__)


class RatingCache:
    """Dual TTL cache for movie certifications and TV content ratings.

    Reads return a :class:`CacheLookup` so that "not cached" and "cached as
    no data" stay distinguishable.

    Args:
        ttl_seconds: Entry lifetime in seconds (default: 1 hour)
        clock: Monotonic time source, injectable for tests

    Example:
        >>> cache = RatingCache()
        >>> cache.set_movie(550, "R")
        >>> cache.get_movie(550)
        CacheLookup(present=True, value='R')
        >>> cache.get_movie(551).present
        False
    """

    def __init__(
        self,
        ttl_seconds: float = CacheConfig.CERTIFICATION_TTL,
        clock: Clock = time.monotonic,
    ) -> None:
        self._movies: TTLStore[int, str] = TTLStore(ttl_seconds, clock)
        self._tv: TTLStore[int, list[ContentRating]] = TTLStore(ttl_seconds, clock)
        self._sweeper: asyncio.Task[None] | None = None

    @property
    def ttl(self) -> float:
        return self._movies.ttl

    def get_movie(self, movie_id: int) -> CacheLookup[str]:
        return self._movies.get(movie_id)

    def set_movie(self, movie_id: int, certification: str | None) -> None:
        self._movies.set(movie_id, certification)

    def get_tv(self, tv_id: int) -> CacheLookup[list[ContentRating]]:
        return self._tv.get(tv_id)

    def set_tv(self, tv_id: int, ratings: list[ContentRating] | None) -> None:
        # Copy so later mutation by the caller cannot change the cached value
        self._tv.set(tv_id, list(ratings) if ratings is not None else None)

    def clear_expired(self) -> int:
        """Sweep both sub-caches; returns the number of entries removed."""
        removed = self._movies.clear_expired() + self._tv.clear_expired()
        if removed:
            logger.debug("Evicted %d expired certification entries", removed)
        return removed

    def clear(self) -> None:
        """Clear all cached data and reset statistics."""
        self._movies.clear()
        self._tv.clear()

    def get_stats(self) -> RatingCacheStats:
        return RatingCacheStats(movies=self._movies.stats(), tv=self._tv.stats())

    def get_size(self) -> CacheSize:
        return CacheSize(movies=len(self._movies), tv=len(self._tv))

    def start_sweeper(self, interval_seconds: float = CacheConfig.SWEEP_INTERVAL) -> asyncio.Task[None]:
        """Run :meth:`clear_expired` every ``interval_seconds`` on the running loop.

        Bounds memory independently of read traffic. Calling it again while
        a sweeper is active returns the existing task.

        Raises:
            RuntimeError: If called outside a running event loop
        """
        if self._sweeper is not None and not self._sweeper.done():
            return self._sweeper

        async def _sweep() -> None:
            while True:
                await asyncio.sleep(interval_seconds)
                self.clear_expired()

        self._sweeper = asyncio.get_running_loop().create_task(_sweep())
        return self._sweeper

    async def stop_sweeper(self) -> None:
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._sweeper
        self._sweeper = None
