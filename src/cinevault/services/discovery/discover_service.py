"""Discovery service.

Combines the prioritized genre fetch with the child-safety passes and
returns a page ready for an HTTP handler to serialize.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from cinevault.services.safety.content_filter import ContentSafetyFilter, filter_content_with_stats
from cinevault.shared.constants import Endpoint, GenreLogic, MediaType
from cinevault.shared.errors import CineVaultError
from cinevault.shared.logging import log_operation_error
from cinevault.shared.models.tmdb import Content

from .prioritized_fetch import PrioritizedGenreFetcher

logger = logging.getLogger(__name__)


@dataclass
class DiscoverRequest:
    """One page request from a listing row."""

    media_type: MediaType
    endpoint: Endpoint = Endpoint.DISCOVER
    genres: list[str] = field(default_factory=list)
    page: int = 1
    child_safe_mode: bool = False
    genre_logic: GenreLogic = GenreLogic.OR
    api_key: str | None = field(default=None, repr=False)


@dataclass
class DiscoverPage:
    """A served page, after child-safety filtering when it was requested."""

    results: list[Content]
    page: int
    total_pages: int
    total_results: int
    child_safety_enabled: bool = False
    hidden_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "results": self.results,
            "page": self.page,
            "total_pages": self.total_pages,
            "total_results": self.total_results,
        }
        if self.child_safety_enabled:
            data["child_safety_enabled"] = True
            data["hidden_count"] = self.hidden_count
        return data


class DiscoveryService:
    """Serves discover/trending/top-rated pages with optional child safety.

    Args:
        fetcher: Prioritized genre fetch engine
        safety_filter: Per-item certification filter
    """

    def __init__(self, fetcher: PrioritizedGenreFetcher, safety_filter: ContentSafetyFilter) -> None:
        self.fetcher = fetcher
        self.safety_filter = safety_filter

    async def discover(self, request: DiscoverRequest) -> DiscoverPage:
        """Fetch a page, tag items with ``media_type`` and apply child safety.

        With child safety on, movies first go through the adult-flag pass
        and then the certification pass; TV shows go through the rating
        pass. ``hidden_count`` covers both passes.

        Raises:
            DomainError: Invalid request parameters
            TMDBRequestError: The content request failed
        """
        try:
            page = await self.fetcher.fetch_with_prioritized_genres(
                request.genres,
                request.media_type,
                request.endpoint,
                request.page,
                api_key=request.api_key,
                child_safe_mode=request.child_safe_mode,
                genre_logic=request.genre_logic,
            )
        except CineVaultError as e:
            log_operation_error(
                logger,
                e,
                operation="discover",
                additional_context={
                    "media_type": request.media_type,
                    "endpoint": request.endpoint,
                    "page": request.page,
                },
            )
            raise

        # Validated by the fetcher
        media_type = MediaType(request.media_type)

        results = [{**item, "media_type": media_type.value} for item in page.results]

        if not request.child_safe_mode:
            return DiscoverPage(
                results=results,
                page=page.page,
                total_pages=page.total_pages,
                total_results=page.total_results,
            )

        before = len(results)
        if media_type is MediaType.MOVIE:
            adult_pass = filter_content_with_stats(results, child_safety_mode=True)
            filtered = await self.safety_filter.filter_mature_movies(
                adult_pass.items, request.api_key
            )
            stats = self.safety_filter.get_movie_filter_stats(results, filtered)
        else:
            filtered = await self.safety_filter.filter_mature_tv_shows(results, request.api_key)
            stats = self.safety_filter.get_tv_filter_stats(results, filtered)

        logger.info(
            "Child safety hid %d of %d %s results on page %d",
            stats.hidden,
            before,
            media_type.value,
            request.page,
        )
        return DiscoverPage(
            results=filtered,
            page=page.page,
            total_pages=page.total_pages,
            total_results=page.total_results,
            child_safety_enabled=True,
            hidden_count=stats.hidden,
        )
