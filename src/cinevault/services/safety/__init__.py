"""Child safety pipeline: certification lookups, batch filters, rating tables."""

from .certifications import CertificationService, has_mature_certification, has_mature_rating
from .content_filter import (
    ContentSafetyFilter,
    filter_content_by_adult_flag,
    filter_content_with_stats,
    get_request_multiplier,
    is_content_restricted,
)
from .content_ratings import (
    classify_content,
    get_movie_certification,
    get_safe_certifications,
    get_tv_certification,
    is_safe_rating,
)

__all__ = [
    "CertificationService",
    "ContentSafetyFilter",
    "classify_content",
    "filter_content_by_adult_flag",
    "filter_content_with_stats",
    "get_movie_certification",
    "get_request_multiplier",
    "get_safe_certifications",
    "get_tv_certification",
    "has_mature_certification",
    "has_mature_rating",
    "is_content_restricted",
    "is_safe_rating",
]
