"""Batch child-safety filtering of TMDB result pages."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Sequence, TypeVar

from cinevault.shared.constants import MediaType
from cinevault.shared.models.safety import AdultFilterResult, FilterStats
from cinevault.shared.models.tmdb import Content

from .certifications import CertificationService, has_mature_certification, has_mature_rating

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_CONCURRENCY = 20


class ContentSafetyFilter:
    """Removes mature titles from a page using per-item certification lookups.

    Lookups for one page run concurrently (bounded by ``max_concurrency``)
    and results are matched back to items by position, so the surviving
    items keep their input order whatever order the lookups finish in.

    Args:
        certifications: Cached certification fetcher
        max_concurrency: Maximum lookups in flight per batch

    Example:
        >>> safety = ContentSafetyFilter(CertificationService(client, RatingCache()))
        >>> safe = await safety.filter_mature_movies(page.results)
        >>> stats = safety.get_movie_filter_stats(page.results, safe)
    """

    def __init__(
        self,
        certifications: CertificationService,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        if max_concurrency < 1:
            msg = f"max_concurrency must be at least 1, got {max_concurrency}"
            raise ValueError(msg)

        self.certifications = certifications
        self._max_concurrency = max_concurrency

    async def _lookup_all(
        self,
        items: Sequence[Content],
        lookup: Callable[[int], Awaitable[T | None]],
    ) -> list[T | None]:
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def bounded(item: Content) -> T | None:
            item_id = item.get("id")
            if item_id is None:
                return None
            async with semaphore:
                return await lookup(item_id)

        # gather returns results in argument order
        return list(await asyncio.gather(*(bounded(item) for item in items)))

    async def filter_mature_movies(
        self,
        movies: Sequence[Content],
        api_key: str | None = None,
    ) -> list[Content]:
        """Keep only movies with a known child-safe certification.

        Movies whose certification could not be determined are dropped.
        """
        if not movies:
            return []

        certifications = await self._lookup_all(
            movies,
            lambda movie_id: self.certifications.fetch_movie_certification(movie_id, api_key),
        )

        kept = [
            movie
            for movie, certification in zip(movies, certifications)
            if certification and not has_mature_certification(certification)
        ]
        logger.debug("Movie safety pass kept %d of %d", len(kept), len(movies))
        return kept

    async def filter_mature_tv_shows(
        self,
        shows: Sequence[Content],
        api_key: str | None = None,
    ) -> list[Content]:
        """Keep only shows whose content ratings are not mature.

        Shows whose ratings could not be fetched are dropped.
        """
        if not shows:
            return []

        ratings = await self._lookup_all(
            shows,
            lambda tv_id: self.certifications.fetch_tv_content_ratings(tv_id, api_key),
        )

        kept = [
            show
            for show, show_ratings in zip(shows, ratings)
            if show_ratings is not None and not has_mature_rating(show_ratings)
        ]
        logger.debug("TV safety pass kept %d of %d", len(kept), len(shows))
        return kept

    @staticmethod
    def get_movie_filter_stats(
        movies: Sequence[Content],
        filtered_movies: Sequence[Content],
    ) -> FilterStats:
        return FilterStats.from_counts(total=len(movies), shown=len(filtered_movies))

    @staticmethod
    def get_tv_filter_stats(
        shows: Sequence[Content],
        filtered_shows: Sequence[Content],
    ) -> FilterStats:
        return FilterStats.from_counts(total=len(shows), shown=len(filtered_shows))


def filter_content_by_adult_flag(
    items: Sequence[Content],
    child_safety_mode: bool,
) -> list[Content]:
    """Quick first pass: drop movies flagged ``adult``.

    Only movies carry the flag; TV shows are kept and left to the rating
    pass.
    """
    if not child_safety_mode:
        return list(items)

    return [
        item
        for item in items
        if item.get("media_type") != MediaType.MOVIE.value or item.get("adult") is not True
    ]


def filter_content_with_stats(
    items: Sequence[Content],
    child_safety_mode: bool,
) -> AdultFilterResult:
    total_before = len(items)
    if not child_safety_mode:
        return AdultFilterResult(
            items=list(items),
            shown=total_before,
            hidden=0,
            total_before=total_before,
        )

    filtered = filter_content_by_adult_flag(items, child_safety_mode=True)
    return AdultFilterResult(
        items=filtered,
        shown=len(filtered),
        hidden=total_before - len(filtered),
        total_before=total_before,
    )


def is_content_restricted(content: Content, child_safety_mode: bool) -> bool:
    if not child_safety_mode:
        return False
    return content.get("adult") is True


def get_request_multiplier(child_safety_mode: bool, base_amount: int, factor: int = 2) -> int:
    """Number of items to request so ``base_amount`` survive filtering."""
    if not child_safety_mode:
        return base_amount
    return base_amount * factor
