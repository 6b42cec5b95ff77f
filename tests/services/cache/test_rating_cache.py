"""Tests for the certification / content rating cache."""

from __future__ import annotations

import asyncio

import pytest
from hypothesis import given
from hypothesis import strategies as st

from cinevault.services.cache import RatingCache, TTLStore
from cinevault.shared.models.cache import CacheLookup
from cinevault.shared.models.tmdb import ContentRating
from conftest import FakeClock


class TestTTLStore:
    """Generic TTL store behaviour."""

    def test_rejects_non_positive_ttl(self):
        with pytest.raises(ValueError):
            TTLStore(0)

    def test_expiry_boundary_is_inclusive(self, clock: FakeClock):
        """An entry is still valid exactly at expires_at."""
        store: TTLStore[int, str] = TTLStore(10, clock)
        store.set(1, "a")

        clock.advance(10)
        assert store.get(1) == CacheLookup.hit("a")

        clock.advance(0.001)
        assert store.get(1).present is False
        assert 1 not in store

    def test_overwrite_refreshes_expiry(self, clock: FakeClock):
        store: TTLStore[int, str] = TTLStore(10, clock)
        store.set(1, "a")
        clock.advance(8)
        store.set(1, "b")
        clock.advance(8)

        assert store.get(1) == CacheLookup.hit("b")


class TestRatingCacheMovies:
    """Movie certification sub-cache."""

    def test_set_then_get_returns_value(self, rating_cache: RatingCache):
        rating_cache.set_movie(550, "R")

        lookup = rating_cache.get_movie(550)

        assert lookup.present is True
        assert lookup.value == "R"

    def test_cached_none_is_distinct_from_miss(self, rating_cache: RatingCache):
        """A cached 'no certification' must not look like a miss."""
        rating_cache.set_movie(1, None)

        cached_none = rating_cache.get_movie(1)
        missing = rating_cache.get_movie(2)

        assert cached_none == CacheLookup(present=True, value=None)
        assert missing == CacheLookup(present=False, value=None)

    def test_expired_entry_is_purged_and_counted_as_miss(
        self, rating_cache: RatingCache, clock: FakeClock
    ):
        rating_cache.set_movie(550, "PG")
        clock.advance(3601)

        assert rating_cache.get_movie(550).present is False
        assert rating_cache.get_size().movies == 0
        assert rating_cache.get_stats().movies.misses == 1

    @given(movie_id=st.integers(min_value=1), certification=st.one_of(st.none(), st.text()))
    def test_roundtrip_within_ttl(self, movie_id: int, certification: str | None):
        clock = FakeClock()
        cache = RatingCache(ttl_seconds=3600, clock=clock)

        cache.set_movie(movie_id, certification)
        clock.advance(3599)

        assert cache.get_movie(movie_id) == CacheLookup.hit(certification)

        clock.advance(2)
        assert cache.get_movie(movie_id).present is False


class TestRatingCacheTV:
    """TV content rating sub-cache."""

    def test_set_then_get_returns_ratings(self, rating_cache: RatingCache):
        ratings = [ContentRating("US", "TV-14"), ContentRating("DE", "12")]
        rating_cache.set_tv(1399, ratings)

        assert rating_cache.get_tv(1399).value == ratings

    def test_stored_list_is_isolated_from_caller(self, rating_cache: RatingCache):
        ratings = [ContentRating("US", "TV-PG")]
        rating_cache.set_tv(1, ratings)
        ratings.append(ContentRating("GB", "18"))

        assert rating_cache.get_tv(1).value == [ContentRating("US", "TV-PG")]

    def test_movie_and_tv_ids_do_not_collide(self, rating_cache: RatingCache):
        rating_cache.set_movie(7, "G")
        rating_cache.set_tv(7, None)

        assert rating_cache.get_movie(7).value == "G"
        assert rating_cache.get_tv(7) == CacheLookup.hit(None)


class TestRatingCacheMaintenance:
    """Sweeping, statistics and clearing."""

    def test_clear_expired_sweeps_both_maps(self, rating_cache: RatingCache, clock: FakeClock):
        rating_cache.set_movie(1, "PG")
        rating_cache.set_tv(2, [])
        clock.advance(1800)
        rating_cache.set_movie(3, "G")
        clock.advance(1801)

        removed = rating_cache.clear_expired()

        assert removed == 2
        assert rating_cache.get_size().movies == 1
        assert rating_cache.get_size().tv == 0
        assert rating_cache.get_size().total == 1

    def test_stats_track_hits_and_misses(self, rating_cache: RatingCache):
        rating_cache.set_movie(1, "PG")
        rating_cache.get_movie(1)
        rating_cache.get_movie(1)
        rating_cache.get_movie(2)
        rating_cache.get_tv(3)

        stats = rating_cache.get_stats()

        assert stats.movies.hits == 2
        assert stats.movies.misses == 1
        assert stats.tv.misses == 1
        assert stats.combined.hits == 2
        assert stats.combined.misses == 2
        assert stats.combined.hit_rate == pytest.approx(0.5)

    def test_clear_resets_entries_and_counters(self, rating_cache: RatingCache):
        rating_cache.set_movie(1, "PG")
        rating_cache.get_movie(1)

        rating_cache.clear()

        stats = rating_cache.get_stats()
        assert rating_cache.get_size().total == 0
        assert stats.combined.hits == 0
        assert stats.combined.misses == 0
        assert stats.combined.hit_rate == 0.0

    @pytest.mark.asyncio
    async def test_sweeper_removes_expired_entries(self, clock: FakeClock):
        cache = RatingCache(ttl_seconds=5, clock=clock)
        cache.set_movie(1, "PG")
        clock.advance(10)

        task = cache.start_sweeper(interval_seconds=0.01)
        assert cache.start_sweeper(interval_seconds=0.01) is task

        await asyncio.sleep(0.05)
        await cache.stop_sweeper()

        assert cache.get_size().movies == 0
        assert task.cancelled()
