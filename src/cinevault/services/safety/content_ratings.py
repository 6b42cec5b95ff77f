"""Regional content rating classification.

Display-side helpers that read certifications embedded in TMDB detail
payloads (``append_to_response=release_dates`` or ``content_ratings``)
and classify them against per-country tables. Unlike the child-safety
filter these are permissive: an unknown certification is shown.
"""

from __future__ import annotations

from typing import Any

from cinevault.shared.constants import MediaType, RegionalRatings
from cinevault.shared.models.safety import ContentClass

_ALL_RESTRICTED = frozenset(
    RegionalRatings.RESTRICTED_US_MOVIE
    + RegionalRatings.RESTRICTED_US_TV
    + RegionalRatings.RESTRICTED_UK_MOVIE
    + RegionalRatings.RESTRICTED_CA_MOVIE
    + RegionalRatings.RESTRICTED_DE_MOVIE
)


def _safe_table(media_type: MediaType, country: str) -> tuple[str, ...] | None:
    country = country.upper()
    if country == "US":
        if media_type is MediaType.MOVIE:
            return RegionalRatings.SAFE_US_MOVIE
        return RegionalRatings.SAFE_US_TV
    if country in RegionalRatings.UK_ALIASES:
        return RegionalRatings.SAFE_UK_MOVIE
    if country == "CA":
        return RegionalRatings.SAFE_CA_MOVIE
    if country == "DE":
        return RegionalRatings.SAFE_DE_MOVIE
    return None


def is_safe_rating(
    certification: str | None,
    media_type: MediaType,
    country: str = "US",
) -> bool:
    """Check whether a certification is suitable for children.

    Missing certifications are treated as safe. For countries without a
    table, only ratings that appear in some restricted table are blocked.

    Example:
        >>> is_safe_rating("TV-14", MediaType.TV)
        True
        >>> is_safe_rating("R", MediaType.MOVIE)
        False
    """
    if not certification:
        return True

    cert = certification.strip().upper()
    table = _safe_table(media_type, country)
    if table is None:
        return cert not in _ALL_RESTRICTED
    return cert in table


def get_safe_certifications(media_type: MediaType, country: str = "US") -> list[str]:
    """Safe certifications for a country, US ones for unknown countries."""
    table = _safe_table(media_type, country)
    if table is None:
        table = _safe_table(media_type, "US")
    return list(table or ())


def get_movie_certification(movie_data: dict[str, Any], country: str = "US") -> str | None:
    results = (movie_data.get("release_dates") or {}).get("results")
    if not results:
        return None

    country = country.upper()
    for entry in results:
        if entry.get("iso_3166_1") == country:
            release_dates = entry.get("release_dates") or []
            if not release_dates:
                return None
            return release_dates[0].get("certification") or None
    return None


def get_tv_certification(tv_data: dict[str, Any], country: str = "US") -> str | None:
    results = (tv_data.get("content_ratings") or {}).get("results")
    if not results:
        return None

    country = country.upper()
    for entry in results:
        if entry.get("iso_3166_1") == country:
            return entry.get("rating") or None
    return None


def classify_content(
    content: dict[str, Any],
    media_type: MediaType,
    country: str = "US",
) -> ContentClass:
    """Classify a detail payload as safe, restricted or unknown."""
    if content.get("adult") is True:
        return ContentClass.RESTRICTED

    if media_type is MediaType.MOVIE:
        certification = get_movie_certification(content, country)
    else:
        certification = get_tv_certification(content, country)

    if not certification:
        return ContentClass.UNKNOWN

    if is_safe_rating(certification, media_type, country):
        return ContentClass.SAFE
    return ContentClass.RESTRICTED
