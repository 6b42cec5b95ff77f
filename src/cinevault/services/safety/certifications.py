"""Per-item certification lookup for child safety mode.

Fetches the US movie certification or the per-country TV content ratings
for a single title, caches the outcome, and classifies it. Lookups never
raise: a failure is cached as "no data", which the classifiers treat as
mature.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from cinevault.services.cache.rating_cache import RatingCache
from cinevault.services.tmdb_http import TMDBTransport
from cinevault.shared.constants import CertificationPolicy, TVRatingPolicy
from cinevault.shared.errors import CineVaultError
from cinevault.shared.models.tmdb import ContentRating

logger = logging.getLogger(__name__)

# Transport failures and payloads we cannot interpret count as "no data"
_LOOKUP_ERRORS = (CineVaultError, KeyError, TypeError, ValueError, AttributeError, IndexError)


def has_mature_certification(certification: str | None) -> bool:
    """Return True unless the movie certification is known to be child safe.

    Fail-closed allowlist: missing, blank, explicitly mature, or simply
    unrecognised certifications are all mature.

    Example:
        >>> has_mature_certification("PG-13")
        False
        >>> has_mature_certification(None)
        True
    """
    if not certification or not certification.strip():
        return True
    if certification in CertificationPolicy.MATURE:
        return True
    return certification not in CertificationPolicy.CHILD_SAFE


def has_mature_rating(ratings: Sequence[ContentRating] | None) -> bool:
    """Return True if a TV show must be hidden in child safety mode.

    No ratings at all is mature. A US rating, when present, decides on its
    own, and a blank US label counts as no data. Otherwise any region
    reporting a mature label makes the show mature.
    """
    if not ratings:
        return True

    for rating in ratings:
        if rating.iso_3166_1 == TVRatingPolicy.PREFERRED_COUNTRY:
            label = rating.rating.strip()
            return not label or label in TVRatingPolicy.MATURE

    return any(rating.rating in TVRatingPolicy.MATURE for rating in ratings)


def _extract_us_certification(payload: dict[str, Any]) -> str | None:
    for country in payload["results"]:
        if country.get("iso_3166_1") != CertificationPolicy.COUNTRY:
            continue
        release_dates = country.get("release_dates") or []
        if not release_dates:
            return None
        # First entry is usually the theatrical release
        return release_dates[0].get("certification") or None
    return None


class CertificationService:
    """Cached certification and content rating fetcher.

    Args:
        client: TMDB transport used for the per-item lookups
        cache: Shared rating cache
    """

    def __init__(self, client: TMDBTransport, cache: RatingCache) -> None:
        self.client = client
        self.cache = cache

    async def fetch_movie_certification(
        self,
        movie_id: int,
        api_key: str | None = None,
    ) -> str | None:
        """Return the US certification of a movie, or None if undetermined."""
        cached = self.cache.get_movie(movie_id)
        if cached.present:
            return cached.value

        try:
            payload = await self.client.get_json(
                f"/movie/{movie_id}/release_dates",
                api_key=api_key,
            )
            certification = _extract_us_certification(payload)
        except _LOOKUP_ERRORS as e:
            logger.warning(
                "Failed to fetch certification for movie %s: %s",
                movie_id,
                e,
                extra={"operation": "fetch_movie_certification", "context": {"movie_id": movie_id}},
            )
            self.cache.set_movie(movie_id, None)
            return None

        self.cache.set_movie(movie_id, certification)
        return certification

    async def fetch_tv_content_ratings(
        self,
        tv_id: int,
        api_key: str | None = None,
    ) -> list[ContentRating] | None:
        """Return every country's content rating for a show, or None on failure.

        A successful response without ``results`` yields an empty list.
        """
        cached = self.cache.get_tv(tv_id)
        if cached.present:
            return list(cached.value) if cached.value is not None else None

        try:
            payload = await self.client.get_json(
                f"/tv/{tv_id}/content_ratings",
                api_key=api_key,
            )
            ratings = [ContentRating.from_dict(item) for item in payload.get("results") or []]
        except _LOOKUP_ERRORS as e:
            logger.warning(
                "Failed to fetch content ratings for TV show %s: %s",
                tv_id,
                e,
                extra={"operation": "fetch_tv_content_ratings", "context": {"tv_id": tv_id}},
            )
            self.cache.set_tv(tv_id, None)
            return None

        self.cache.set_tv(tv_id, ratings)
        return ratings
