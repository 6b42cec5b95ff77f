"""
Pytest configuration and shared fixtures for CineVault tests.

Provides an in-memory TMDB transport that records every request and a
controllable clock for cache expiry tests.
"""

from __future__ import annotations

import asyncio
import copy
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Union

import pytest

from cinevault.services.cache import RatingCache, TierCache
from cinevault.services.genres import UnifiedGenreMapper
from cinevault.services.safety import CertificationService, ContentSafetyFilter
from cinevault.shared.errors import ErrorCode, TMDBRequestError

# Set environment variables BEFORE settings are built (for CI without .env)
if "TMDB_API_KEY" not in os.environ:
    os.environ["TMDB_API_KEY"] = "test_api_key_for_ci_testing_only"  # pragma: allowlist secret


Handler = Callable[[dict[str, Any]], Any]
Response = Union[dict[str, Any], Exception, Handler]


@dataclass
class RecordedCall:
    """One request seen by FakeTMDBClient."""

    path: str
    params: dict[str, Any] = field(default_factory=dict)
    api_key: str | None = None


class FakeTMDBClient:
    """TMDBTransport double.

    Routes map a path to a JSON payload, an exception to raise, or a
    callable receiving the query params. Optional per-path delays let tests
    force completion order.
    """

    def __init__(self) -> None:
        self.calls: list[RecordedCall] = []
        self._routes: dict[str, Response] = {}
        self._delays: dict[str, float] = {}

    def add_route(self, path: str, response: Response, delay: float = 0.0) -> None:
        self._routes[path] = response
        if delay:
            self._delays[path] = delay

    def calls_to(self, path: str) -> list[RecordedCall]:
        return [call for call in self.calls if call.path == path]

    async def get_json(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        api_key: str | None = None,
    ) -> dict[str, Any]:
        request_params = dict(params or {})
        self.calls.append(RecordedCall(path=path, params=request_params, api_key=api_key))

        delay = self._delays.get(path, 0.0)
        if delay:
            await asyncio.sleep(delay)
        else:
            # Still yield so concurrent callers interleave like real I/O
            await asyncio.sleep(0)

        if path not in self._routes:
            raise TMDBRequestError(
                code=ErrorCode.TMDB_API_MEDIA_NOT_FOUND,
                message=f"TMDB API error: 404 ({path})",
                status=404,
            )

        response = self._routes[path]
        if callable(response):
            response = response(request_params)
        if isinstance(response, Exception):
            raise response
        return copy.deepcopy(response)


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def release_dates_payload(*certifications: str, country: str = "US") -> dict[str, Any]:
    """Build a ``/movie/{id}/release_dates`` body."""
    return {
        "id": 1,
        "results": [
            {
                "iso_3166_1": country,
                "release_dates": [{"certification": cert, "type": 3} for cert in certifications],
            }
        ],
    }


def content_ratings_payload(*ratings: tuple[str, str]) -> dict[str, Any]:
    """Build a ``/tv/{id}/content_ratings`` body from (country, rating) pairs."""
    return {
        "id": 1,
        "results": [{"iso_3166_1": country, "rating": rating} for country, rating in ratings],
    }


def listing_payload(page: int = 1, total_pages: int = 10, ids: tuple[int, ...] = (1,)) -> dict[str, Any]:
    """Build a discover/trending page body."""
    return {
        "page": page,
        "results": [{"id": item_id, "title": f"Title {item_id}"} for item_id in ids],
        "total_pages": total_pages,
        "total_results": total_pages * 20,
    }


@pytest.fixture
def fake_client() -> FakeTMDBClient:
    return FakeTMDBClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rating_cache(clock: FakeClock) -> RatingCache:
    return RatingCache(ttl_seconds=3600, clock=clock)


@pytest.fixture
def tier_cache(clock: FakeClock) -> TierCache:
    return TierCache(ttl_seconds=21600, clock=clock)


@pytest.fixture
def genre_mapper() -> UnifiedGenreMapper:
    return UnifiedGenreMapper()


@pytest.fixture
def certification_service(
    fake_client: FakeTMDBClient,
    rating_cache: RatingCache,
) -> CertificationService:
    return CertificationService(fake_client, rating_cache)


@pytest.fixture
def safety_filter(certification_service: CertificationService) -> ContentSafetyFilter:
    return ContentSafetyFilter(certification_service, max_concurrency=5)
