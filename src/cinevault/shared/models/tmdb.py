"""TMDB API Response Models.

Dataclasses for the parts of TMDB responses the discovery core reads.
Result items themselves stay raw dictionaries: the core only inspects
``id``, ``adult`` and ``media_type`` and hands everything else through
untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# A raw TMDB result item (movie or TV show)
Content = dict[str, Any]


@dataclass(frozen=True)
class ContentRating:
    """TV content rating reported for one country."""

    iso_3166_1: str
    rating: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContentRating:
        return cls(
            iso_3166_1=str(data.get("iso_3166_1") or ""),
            rating=str(data.get("rating") or ""),
        )


@dataclass
class TMDBPage:
    """One page of a paginated TMDB listing."""

    results: list[Content] = field(default_factory=list)
    page: int = 1
    total_pages: int = 0
    total_results: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TMDBPage:
        """Build a page from a decoded TMDB payload.

        Raises:
            KeyError: If ``results`` is missing
            TypeError, ValueError: If the pagination fields are not integers
        """
        return cls(
            results=list(data["results"]),
            page=int(data.get("page", 1)),
            total_pages=int(data.get("total_pages", 0)),
            total_results=int(data.get("total_results", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": self.results,
            "page": self.page,
            "total_pages": self.total_pages,
            "total_results": self.total_results,
        }


@dataclass(frozen=True)
class GenreTierInfo:
    """Remote page count when filtering by the top ``genre_count`` genres."""

    genre_count: int
    total_pages: int


@dataclass(frozen=True)
class TierSelection:
    """Which tier serves a logical page, and the page to request within it."""

    genre_count: int
    adjusted_page: int
