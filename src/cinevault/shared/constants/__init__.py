"""
CineVault Constants Module

Centralized constants for the CineVault library. Magic values used by the
TMDB client, the caches and the child-safety pipeline are defined here to
keep a single source of truth.
"""

from .cache import BASE_HOUR, BASE_MINUTE, BASE_SECOND, CacheConfig
from .http_codes import HTTPHeaders, HTTPStatusCodes
from .logging import LogConfig
from .ratings import (
    CertificationPolicy,
    RegionalRatings,
    TVRatingPolicy,
)
from .tmdb import (
    TMDB,
    DiscoverParams,
    Endpoint,
    GenreLogic,
    MediaType,
    SortOrder,
    TMDBRateLimit,
    VoteCountFloor,
)

__all__ = [
    "BASE_HOUR",
    "BASE_MINUTE",
    "BASE_SECOND",
    "TMDB",
    "CacheConfig",
    "CertificationPolicy",
    "DiscoverParams",
    "Endpoint",
    "GenreLogic",
    "HTTPHeaders",
    "HTTPStatusCodes",
    "LogConfig",
    "MediaType",
    "RegionalRatings",
    "SortOrder",
    "TMDBRateLimit",
    "TVRatingPolicy",
    "VoteCountFloor",
]
