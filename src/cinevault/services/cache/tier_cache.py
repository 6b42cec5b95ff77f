"""Genre tier metadata cache.

Caches the per-tier page counts computed by the cascading genre fetch so
that paging deeper into a listing does not re-probe TMDB.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Sequence

from cinevault.shared.constants import CacheConfig, Endpoint, GenreLogic, MediaType
from cinevault.shared.models.cache import CacheEntry
from cinevault.shared.models.tmdb import GenreTierInfo

from .ttl_store import Clock

logger = logging.getLogger(__name__)

TierKey = str


def build_tier_cache_key(
    endpoint: Endpoint,
    genres: Sequence[str],
    media_type: MediaType,
    child_safe_mode: bool,
    genre_logic: GenreLogic,
) -> TierKey:
    """Compose the tier cache key.

    Genre order is part of the key: it encodes priority, not membership.
    Every dimension is required; dropping one would let distinct cascades
    share page counts.

    Example:
        >>> build_tier_cache_key(Endpoint.DISCOVER, ["action", "comedy"],
        ...                      MediaType.MOVIE, False, GenreLogic.OR)
        'discover:action,comedy:movie:false:OR'
    """
    return CacheConfig.KEY_SEPARATOR.join(
        (
            endpoint.value,
            ",".join(genres),
            media_type.value,
            "true" if child_safe_mode else "false",
            genre_logic.value,
        )
    )


def _retrieve_exception(task: asyncio.Task[list[GenreTierInfo]]) -> None:
    # Consume failures nobody is left to await
    if not task.cancelled():
        task.exception()


class TierCache:
    """TTL cache of ``list[GenreTierInfo]`` keyed by :func:`build_tier_cache_key`.

    Entries are deleted by a ``loop.call_later`` timer when written inside a
    running loop and are also treated as expired on read, so a cache used
    without a loop still honours the TTL.

    Args:
        ttl_seconds: Entry lifetime (default: 6 hours)
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        ttl_seconds: float = CacheConfig.TIER_TTL,
        clock: Clock = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[TierKey, CacheEntry[list[GenreTierInfo]]] = {}
        self._timers: dict[TierKey, asyncio.TimerHandle] = {}
        self._in_flight: dict[TierKey, asyncio.Task[list[GenreTierInfo]]] = {}

    def get(self, key: TierKey) -> list[GenreTierInfo] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            self._evict(key)
            return None
        return list(entry.data)

    def set(self, key: TierKey, tiers: Sequence[GenreTierInfo]) -> None:
        now = self._clock()
        self._entries[key] = CacheEntry(
            data=list(tiers),
            timestamp=now,
            expires_at=now + self.ttl_seconds,
        )
        self._schedule_deletion(key)

    async def get_or_compute(
        self,
        key: TierKey,
        compute: Callable[[], Awaitable[list[GenreTierInfo]]],
    ) -> list[GenreTierInfo]:
        """Return cached tiers or compute them once.

        Concurrent callers for the same missing key await a single
        ``compute()`` running in a task owned by the cache. Cancelling one
        caller does not cancel the computation or the other callers. If it
        raises, every waiter sees the exception and nothing is cached. An
        empty result is returned but not cached, so a cascade whose probes
        all failed is retried on the next call.
        """
        cached = self.get(key)
        if cached is not None:
            return cached

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.get_running_loop().create_task(self._compute_and_store(key, compute))
            task.add_done_callback(_retrieve_exception)
            self._in_flight[key] = task
        else:
            logger.debug("Joining in-flight tier computation for %s", key)

        return list(await asyncio.shield(task))

    async def _compute_and_store(
        self,
        key: TierKey,
        compute: Callable[[], Awaitable[list[GenreTierInfo]]],
    ) -> list[GenreTierInfo]:
        try:
            tiers = await compute()
        finally:
            self._in_flight.pop(key, None)
        if tiers:
            self.set(key, tiers)
        return list(tiers)

    def clear(self) -> None:
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def _schedule_deletion(self, key: TierKey) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return

        previous = self._timers.pop(key, None)
        if previous is not None:
            previous.cancel()
        self._timers[key] = loop.call_later(self.ttl_seconds, self._evict, key)

    def _evict(self, key: TierKey) -> None:
        self._entries.pop(key, None)
        handle = self._timers.pop(key, None)
        if handle is not None:
            handle.cancel()
