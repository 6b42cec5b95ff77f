"""Generic in-memory TTL store with hit/miss accounting."""

from __future__ import annotations

import time
from typing import Callable, Generic, Hashable, TypeVar

from cinevault.shared.models.cache import CacheEntry, CacheLookup, CacheStats

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

Clock = Callable[[], float]


class TTLStore(Generic[K, V]):
    """Map of key to value where each entry expires ``ttl`` seconds after write.

    Expired entries are purged when read and by :meth:`clear_expired`.
    Values are replaced wholesale by :meth:`set`; there is no partial update.

    Args:
        ttl: Entry lifetime in seconds
        clock: Monotonic time source, injectable for tests
    """

    def __init__(self, ttl: float, clock: Clock = time.monotonic) -> None:
        if ttl <= 0:
            msg = f"ttl must be positive, got {ttl}"
            raise ValueError(msg)
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[K, CacheEntry[V | None]] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: K) -> CacheLookup[V]:
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return CacheLookup.miss()

        if entry.is_expired(self._clock()):
            del self._entries[key]
            self._misses += 1
            return CacheLookup.miss()

        self._hits += 1
        return CacheLookup.hit(entry.data)

    def set(self, key: K, value: V | None) -> None:
        now = self._clock()
        self._entries[key] = CacheEntry(data=value, timestamp=now, expires_at=now + self.ttl)

    def clear_expired(self) -> int:
        """Remove every expired entry and return how many were removed."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        """Remove all entries and reset the counters."""
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    def stats(self) -> CacheStats:
        return CacheStats(hits=self._hits, misses=self._misses, entries=len(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
