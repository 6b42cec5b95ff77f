"""Prioritized genre fetch with cascading tiers.

A caller asks for logical page N of a listing filtered by up to three
genres in priority order. The listing is served by progressively broader
queries:

* pages 1..A use all genres (most specific)
* pages A+1..A+B use the top two genres
* later pages use the top genre only (effectively unbounded)

The per-tier page counts (A, B, ...) are probed once with a concurrent
``page=1`` request per tier and cached in a :class:`TierCache`.

TMDB's ``/trending`` route does not accept genre filters, so trending with
genres is approximated by a popularity-sorted ``/discover`` query with a
vote-count floor.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Sequence

from cinevault.services.cache.tier_cache import TierCache, build_tier_cache_key
from cinevault.services.genres import GenreMapper, format_genres_for_api
from cinevault.services.tmdb_http import TMDBTransport
from cinevault.shared.constants import (
    TMDB,
    CertificationPolicy,
    DiscoverParams,
    Endpoint,
    GenreLogic,
    MediaType,
    SortOrder,
    VoteCountFloor,
)
from cinevault.shared.errors import (
    CineVaultError,
    DomainError,
    ErrorCode,
    ErrorContext,
    TMDBRequestError,
    create_validation_error,
)
from cinevault.shared.logging import log_operation_success
from cinevault.shared.models.tmdb import GenreTierInfo, TierSelection, TMDBPage

logger = logging.getLogger(__name__)

QueryParams = dict[str, str | int]


def find_genre_tier(page: int, tiers: Sequence[GenreTierInfo]) -> TierSelection:
    """Map a logical page onto a tier and the page to request within it.

    Tiers are walked in order while accumulating their page counts. If the
    page lies beyond every tier, the single-genre tier is used with the
    residual offset.

    Example:
        >>> tiers = [GenreTierInfo(3, 5), GenreTierInfo(2, 8), GenreTierInfo(1, 500)]
        >>> find_genre_tier(7, tiers)
        TierSelection(genre_count=2, adjusted_page=2)
    """
    cumulative = 0
    for tier in tiers:
        if page <= cumulative + tier.total_pages:
            return TierSelection(genre_count=tier.genre_count, adjusted_page=page - cumulative)
        cumulative += tier.total_pages

    return TierSelection(genre_count=1, adjusted_page=page - cumulative)


def _coerce_request(
    media_type: MediaType | str,
    endpoint: Endpoint | str,
    genre_logic: GenreLogic | str,
) -> tuple[MediaType, Endpoint, GenreLogic]:
    try:
        media = MediaType(media_type)
    except ValueError as e:
        raise DomainError(
            ErrorCode.TMDB_API_INVALID_MEDIA_TYPE,
            f"Unsupported media type: {media_type!r}",
            ErrorContext(operation="fetch_with_prioritized_genres"),
            original_error=e,
        ) from e
    try:
        kind = Endpoint(endpoint)
    except ValueError as e:
        raise create_validation_error(
            f"Unsupported endpoint: {endpoint!r}",
            field="endpoint",
            operation="fetch_with_prioritized_genres",
            original_error=e,
        ) from e
    try:
        logic = GenreLogic(genre_logic)
    except ValueError as e:
        raise create_validation_error(
            f"Unsupported genre logic: {genre_logic!r}",
            field="genre_logic",
            operation="fetch_with_prioritized_genres",
            original_error=e,
        ) from e
    return media, kind, logic


class PrioritizedGenreFetcher:
    """Serves paginated TMDB listings across prioritized genres.

    Args:
        client: TMDB transport
        genre_mapper: Translates unified genre ids to TMDB ids
        tier_cache: Cache for per-tier page counts
        language: ``language`` sent with every request
    """

    def __init__(
        self,
        client: TMDBTransport,
        genre_mapper: GenreMapper,
        tier_cache: TierCache,
        language: str = TMDB.DEFAULT_LANGUAGE,
    ) -> None:
        self.client = client
        self.genre_mapper = genre_mapper
        self.tier_cache = tier_cache
        self.language = language

    async def fetch_with_prioritized_genres(
        self,
        genres: Sequence[str],
        media_type: MediaType | str,
        endpoint: Endpoint | str,
        page: int,
        api_key: str | None = None,
        child_safe_mode: bool = False,
        genre_logic: GenreLogic | str = GenreLogic.OR,
    ) -> TMDBPage:
        """Fetch one logical page.

        Args:
            genres: Unified genre ids in priority order
            media_type: ``movie`` or ``tv``
            endpoint: ``discover``, ``trending`` or ``top-rated``
            page: Logical page, starting at 1
            api_key: TMDB key for this request
            child_safe_mode: Constrain the query to child-safe content
            genre_logic: Combine genre ids with AND (``,``) or OR (``|``)

        Returns:
            The TMDB page served by the selected tier

        Raises:
            DomainError: Invalid page, media type, endpoint or genre logic
            TMDBRequestError: The content request failed (``status`` is set
                for non-OK responses); not retried
        """
        media, kind, logic = _coerce_request(media_type, endpoint, genre_logic)
        if page < 1:
            raise DomainError(
                ErrorCode.INVALID_PAGE,
                f"Page must be at least 1, got {page}",
                ErrorContext(
                    operation="fetch_with_prioritized_genres",
                    additional_data={"page": page},
                ),
            )

        started = time.perf_counter()
        genres = list(genres)

        if not genres:
            result = await self._fetch_without_genres(media, kind, page, api_key, child_safe_mode)
            selection = TierSelection(genre_count=0, adjusted_page=page)
        elif len(genres) == 1:
            result = await self._fetch_with_genres(
                genres, media, kind, page, api_key, child_safe_mode, logic
            )
            selection = TierSelection(genre_count=1, adjusted_page=page)
        else:
            tiers = await self.get_genre_tiers(genres, media, kind, api_key, child_safe_mode, logic)
            selection = find_genre_tier(page, tiers)
            result = await self._fetch_with_genres(
                genres[: selection.genre_count],
                media,
                kind,
                selection.adjusted_page,
                api_key,
                child_safe_mode,
                logic,
            )

        log_operation_success(
            logger,
            operation="fetch_with_prioritized_genres",
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            result_info={
                "genre_count": selection.genre_count,
                "adjusted_page": selection.adjusted_page,
                "results": len(result.results),
            },
            context={"endpoint": kind.value, "media_type": media.value, "page": page},
        )
        return result

    async def get_genre_tiers(
        self,
        genres: Sequence[str],
        media_type: MediaType,
        endpoint: Endpoint,
        api_key: str | None = None,
        child_safe_mode: bool = False,
        genre_logic: GenreLogic = GenreLogic.OR,
    ) -> list[GenreTierInfo]:
        """Cached tier list for this exact combination of inputs."""
        key = build_tier_cache_key(endpoint, genres, media_type, child_safe_mode, genre_logic)
        return await self.tier_cache.get_or_compute(
            key,
            lambda: self._calculate_genre_tiers(
                genres, media_type, endpoint, api_key, child_safe_mode, genre_logic
            ),
        )

    async def _calculate_genre_tiers(
        self,
        genres: Sequence[str],
        media_type: MediaType,
        endpoint: Endpoint,
        api_key: str | None,
        child_safe_mode: bool,
        genre_logic: GenreLogic,
    ) -> list[GenreTierInfo]:
        counts = range(len(genres), 0, -1)
        probes = await asyncio.gather(
            *(
                self._probe_tier(
                    genres[:count], count, media_type, endpoint, api_key, child_safe_mode, genre_logic
                )
                for count in counts
            )
        )
        tiers = [tier for tier in probes if tier is not None]
        logger.debug(
            "Computed %d of %d genre tiers for %s",
            len(tiers),
            len(genres),
            ",".join(genres),
        )
        return tiers

    async def _probe_tier(
        self,
        genres: Sequence[str],
        genre_count: int,
        media_type: MediaType,
        endpoint: Endpoint,
        api_key: str | None,
        child_safe_mode: bool,
        genre_logic: GenreLogic,
    ) -> GenreTierInfo | None:
        path, params = self.build_genre_request(
            genres, media_type, endpoint, 1, child_safe_mode, genre_logic
        )
        try:
            payload = await self.client.get_json(path, params, api_key=api_key)
            total_pages = int(payload["total_pages"])
        except (CineVaultError, KeyError, TypeError, ValueError) as e:
            logger.warning(
                "Failed to fetch tier info for %d genres: %s",
                genre_count,
                e,
                extra={"operation": "probe_genre_tier", "context": {"genre_count": genre_count}},
            )
            return None
        return GenreTierInfo(genre_count=genre_count, total_pages=total_pages)

    def _base_params(self, page: int) -> QueryParams:
        return {DiscoverParams.LANGUAGE: self.language, DiscoverParams.PAGE: page}

    @staticmethod
    def _apply_child_safety(params: QueryParams, media_type: MediaType) -> None:
        if media_type is MediaType.MOVIE:
            params[DiscoverParams.CERTIFICATION_COUNTRY] = CertificationPolicy.COUNTRY
            params[DiscoverParams.CERTIFICATION_LTE] = CertificationPolicy.CEILING
        # TMDB has no TV certification ceiling at discover time
        params[DiscoverParams.INCLUDE_ADULT] = "false"

    def build_listing_request(
        self,
        media_type: MediaType,
        endpoint: Endpoint,
        page: int,
        child_safe_mode: bool,
    ) -> tuple[str, QueryParams]:
        """Path and query for a listing without genre filters."""
        params = self._base_params(page)
        if endpoint is Endpoint.TRENDING:
            path = f"/trending/{media_type.value}/{TMDB.TRENDING_WINDOW}"
        elif endpoint is Endpoint.TOP_RATED:
            path = f"/discover/{media_type.value}"
            params[DiscoverParams.SORT_BY] = SortOrder.VOTE_AVERAGE_DESC
            params[DiscoverParams.VOTE_COUNT_GTE] = VoteCountFloor.top_rated(media_type)
        else:
            path = f"/discover/{media_type.value}"
            params[DiscoverParams.SORT_BY] = SortOrder.POPULARITY_DESC

        if child_safe_mode:
            self._apply_child_safety(params, media_type)
        return path, params

    def build_genre_request(
        self,
        genres: Sequence[str],
        media_type: MediaType,
        endpoint: Endpoint,
        page: int,
        child_safe_mode: bool,
        genre_logic: GenreLogic,
    ) -> tuple[str, QueryParams]:
        """Path and query for a genre-filtered listing (always ``/discover``)."""
        path = f"/discover/{media_type.value}"
        params = self._base_params(page)

        if endpoint is Endpoint.TOP_RATED:
            params[DiscoverParams.SORT_BY] = SortOrder.VOTE_AVERAGE_DESC
            params[DiscoverParams.VOTE_COUNT_GTE] = VoteCountFloor.top_rated(media_type)
        else:
            params[DiscoverParams.SORT_BY] = SortOrder.POPULARITY_DESC
            if endpoint is Endpoint.TRENDING:
                params[DiscoverParams.VOTE_COUNT_GTE] = VoteCountFloor.TRENDING_WITH_GENRES

        genre_ids = self.genre_mapper.translate(genres, media_type)
        if genre_ids:
            params[DiscoverParams.WITH_GENRES] = format_genres_for_api(genre_ids, genre_logic)
        else:
            logger.debug("No TMDB genre ids for %s on %s", list(genres), media_type.value)

        if child_safe_mode:
            self._apply_child_safety(params, media_type)
        return path, params

    async def _fetch_without_genres(
        self,
        media_type: MediaType,
        endpoint: Endpoint,
        page: int,
        api_key: str | None,
        child_safe_mode: bool,
    ) -> TMDBPage:
        path, params = self.build_listing_request(media_type, endpoint, page, child_safe_mode)
        return await self._fetch_page(path, params, api_key)

    async def _fetch_with_genres(
        self,
        genres: Sequence[str],
        media_type: MediaType,
        endpoint: Endpoint,
        page: int,
        api_key: str | None,
        child_safe_mode: bool,
        genre_logic: GenreLogic,
    ) -> TMDBPage:
        path, params = self.build_genre_request(
            genres, media_type, endpoint, page, child_safe_mode, genre_logic
        )
        return await self._fetch_page(path, params, api_key)

    async def _fetch_page(
        self,
        path: str,
        params: QueryParams,
        api_key: str | None,
    ) -> TMDBPage:
        payload = await self.client.get_json(path, params, api_key=api_key)
        try:
            return TMDBPage.from_dict(payload)
        except (KeyError, TypeError, ValueError) as e:
            raise TMDBRequestError(
                code=ErrorCode.TMDB_API_INVALID_RESPONSE,
                message=f"Malformed TMDB page from {path}",
                context=ErrorContext(operation="fetch_page", additional_data={"endpoint": path}),
                original_error=e,
            ) from e
