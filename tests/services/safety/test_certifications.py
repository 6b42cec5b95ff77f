"""Tests for per-item certification lookups and the maturity classifiers."""

from __future__ import annotations

import pytest

from cinevault.services.cache import RatingCache
from cinevault.services.safety import (
    CertificationService,
    has_mature_certification,
    has_mature_rating,
)
from cinevault.shared.errors import ErrorCode, TMDBRequestError
from cinevault.shared.models.cache import CacheLookup
from cinevault.shared.models.tmdb import ContentRating
from conftest import FakeTMDBClient, content_ratings_payload, release_dates_payload


class TestHasMatureCertification:
    """Fail-closed movie classification."""

    @pytest.mark.parametrize("certification", [None, "", "   ", "R", "NC-17", "NR", "UR"])
    def test_missing_or_mature_is_mature(self, certification):
        assert has_mature_certification(certification) is True

    @pytest.mark.parametrize("certification", ["G", "PG", "PG-13"])
    def test_child_safe_allowlist(self, certification):
        assert has_mature_certification(certification) is False

    @pytest.mark.parametrize("certification", ["X", "12A", "pg", "TV-G"])
    def test_unrecognised_is_mature(self, certification):
        assert has_mature_certification(certification) is True


class TestHasMatureRating:
    """TV classification with US preference and fail-closed default."""

    def test_no_data_is_mature(self):
        assert has_mature_rating(None) is True
        assert has_mature_rating([]) is True

    @pytest.mark.parametrize("rating", ["TV-Y", "TV-G", "TV-PG", "TV-14"])
    def test_us_allowed_ratings(self, rating):
        assert has_mature_rating([ContentRating("US", rating)]) is False

    def test_us_tv_ma_is_mature(self):
        assert has_mature_rating([ContentRating("US", "TV-MA")]) is True

    @pytest.mark.parametrize("rating", ["", "  "])
    def test_blank_us_rating_is_mature(self, rating):
        assert has_mature_rating([ContentRating("US", rating)]) is True
        assert has_mature_rating([ContentRating("GB", "12"), ContentRating("US", rating)]) is True

    def test_us_entry_without_rating_field_is_mature(self):
        ratings = [ContentRating.from_dict({"iso_3166_1": "US"})]
        assert has_mature_rating(ratings) is True

    def test_us_rating_overrides_other_regions(self):
        ratings = [ContentRating("DE", "18"), ContentRating("US", "TV-14")]
        assert has_mature_rating(ratings) is False

    def test_any_mature_region_without_us(self):
        ratings = [ContentRating("GB", "12"), ContentRating("AU", "MA15+")]
        assert has_mature_rating(ratings) is True

    @pytest.mark.parametrize("rating", ["16", "15", "12"])
    def test_teen_regional_ratings_allowed(self, rating):
        assert has_mature_rating([ContentRating("DE", rating)]) is False


class TestFetchMovieCertification:
    """Cached movie certification fetch."""

    @pytest.mark.asyncio
    async def test_takes_first_us_certification(
        self, certification_service: CertificationService, fake_client: FakeTMDBClient
    ):
        fake_client.add_route("/movie/550/release_dates", release_dates_payload("R", "NR"))

        result = await certification_service.fetch_movie_certification(550, api_key="k")

        assert result == "R"
        assert fake_client.calls[0].api_key == "k"

    @pytest.mark.asyncio
    async def test_ignores_other_countries(
        self, certification_service: CertificationService, fake_client: FakeTMDBClient
    ):
        fake_client.add_route("/movie/1/release_dates", release_dates_payload("12", country="DE"))

        assert await certification_service.fetch_movie_certification(1) is None

    @pytest.mark.asyncio
    async def test_empty_certification_becomes_none_and_is_cached(
        self,
        certification_service: CertificationService,
        fake_client: FakeTMDBClient,
        rating_cache: RatingCache,
    ):
        fake_client.add_route("/movie/2/release_dates", release_dates_payload(""))

        assert await certification_service.fetch_movie_certification(2) is None
        assert rating_cache.get_movie(2) == CacheLookup.hit(None)

    @pytest.mark.asyncio
    async def test_cache_hit_skips_network(
        self, certification_service: CertificationService, fake_client: FakeTMDBClient
    ):
        fake_client.add_route("/movie/3/release_dates", release_dates_payload("PG"))

        first = await certification_service.fetch_movie_certification(3)
        second = await certification_service.fetch_movie_certification(3)

        assert first == second == "PG"
        assert len(fake_client.calls) == 1

    @pytest.mark.asyncio
    async def test_cached_none_skips_network(
        self,
        certification_service: CertificationService,
        fake_client: FakeTMDBClient,
        rating_cache: RatingCache,
    ):
        rating_cache.set_movie(4, None)

        assert await certification_service.fetch_movie_certification(4) is None
        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_http_error_is_swallowed_and_cached(
        self,
        certification_service: CertificationService,
        fake_client: FakeTMDBClient,
        rating_cache: RatingCache,
    ):
        fake_client.add_route(
            "/movie/5/release_dates",
            TMDBRequestError(ErrorCode.TMDB_API_SERVER_ERROR, "boom", status=500),
        )

        assert await certification_service.fetch_movie_certification(5) is None
        assert rating_cache.get_movie(5) == CacheLookup.hit(None)

    @pytest.mark.asyncio
    async def test_malformed_payload_is_treated_as_failure(
        self, certification_service: CertificationService, fake_client: FakeTMDBClient
    ):
        fake_client.add_route("/movie/6/release_dates", {"id": 6})

        assert await certification_service.fetch_movie_certification(6) is None


class TestFetchTVContentRatings:
    """Cached TV content rating fetch."""

    @pytest.mark.asyncio
    async def test_returns_all_regions(
        self, certification_service: CertificationService, fake_client: FakeTMDBClient
    ):
        fake_client.add_route(
            "/tv/1399/content_ratings",
            content_ratings_payload(("US", "TV-MA"), ("DE", "16")),
        )

        ratings = await certification_service.fetch_tv_content_ratings(1399)

        assert ratings == [ContentRating("US", "TV-MA"), ContentRating("DE", "16")]

    @pytest.mark.asyncio
    async def test_missing_results_is_empty_list(
        self, certification_service: CertificationService, fake_client: FakeTMDBClient
    ):
        fake_client.add_route("/tv/2/content_ratings", {"id": 2})

        assert await certification_service.fetch_tv_content_ratings(2) == []

    @pytest.mark.asyncio
    async def test_failure_is_none_and_cached(
        self,
        certification_service: CertificationService,
        fake_client: FakeTMDBClient,
        rating_cache: RatingCache,
    ):
        # No route registered: the fake answers 404
        assert await certification_service.fetch_tv_content_ratings(3) is None
        assert rating_cache.get_tv(3) == CacheLookup.hit(None)

        assert await certification_service.fetch_tv_content_ratings(3) is None
        assert len(fake_client.calls) == 1
