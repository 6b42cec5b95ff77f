"""TMDB-related constants."""

from __future__ import annotations

from enum import Enum


class TMDB:
    """TMDB API configuration constants."""

    API_BASE_URL = "https://api.themoviedb.org/3"
    API_KEY_ENV = "TMDB_API_KEY"
    DEFAULT_LANGUAGE = "en-US"
    TRENDING_WINDOW = "week"
    USER_AGENT = "CineVault/0.1.0"


class TMDBRateLimit:
    """TMDB request pacing.

    TMDB allows roughly 40 requests per 10 second window per key.
    """

    BURST_LIMIT = 40
    WINDOW_SECONDS = 10
    REQUEST_TIMEOUT = 10.0  # seconds, per outbound request
    CONCURRENT_REQUESTS = 10


class MediaType(str, Enum):
    """Media types served by the discover and trending endpoints."""

    MOVIE = "movie"
    TV = "tv"


class Endpoint(str, Enum):
    """Logical listing the caller asks for.

    Only TRENDING without genres maps to TMDB's trending route; every other
    combination is served from /discover.
    """

    DISCOVER = "discover"
    TRENDING = "trending"
    TOP_RATED = "top-rated"


class GenreLogic(str, Enum):
    """How several genre ids are combined in ``with_genres``."""

    AND = "AND"
    OR = "OR"

    @property
    def separator(self) -> str:
        """TMDB separator: comma means match all, pipe means match any."""
        return "," if self is GenreLogic.AND else "|"


class SortOrder:
    """Values for the discover ``sort_by`` parameter."""

    POPULARITY_DESC = "popularity.desc"
    VOTE_AVERAGE_DESC = "vote_average.desc"


class VoteCountFloor:
    """Minimum ``vote_count.gte`` applied to discover queries."""

    # Popularity-sorted discover standing in for /trending when genres are set
    TRENDING_WITH_GENRES = 100
    TOP_RATED_MOVIE = 300
    TOP_RATED_TV = 100

    @classmethod
    def top_rated(cls, media_type: MediaType) -> int:
        """Movies collect far more votes than TV shows."""
        if media_type is MediaType.MOVIE:
            return cls.TOP_RATED_MOVIE
        return cls.TOP_RATED_TV


class DiscoverParams:
    """Query parameter names understood by TMDB."""

    API_KEY = "api_key"
    LANGUAGE = "language"
    PAGE = "page"
    SORT_BY = "sort_by"
    WITH_GENRES = "with_genres"
    VOTE_COUNT_GTE = "vote_count.gte"
    CERTIFICATION_COUNTRY = "certification_country"
    CERTIFICATION_LTE = "certification.lte"
    INCLUDE_ADULT = "include_adult"


__all__ = [
    "TMDB",
    "DiscoverParams",
    "Endpoint",
    "GenreLogic",
    "MediaType",
    "SortOrder",
    "TMDBRateLimit",
    "VoteCountFloor",
]
