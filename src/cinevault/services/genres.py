"""Unified genre mapping.

Users pick one set of genre names regardless of media type; TMDB uses
different genre ids for movies and TV (e.g. Fantasy is 14 for movies but
part of 10765 "Sci-Fi & Fantasy" for TV). This module owns that table and
the translations the discovery engine needs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

from cinevault.shared.constants import GenreLogic, MediaType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnifiedGenre:
    """A user-facing genre with its TMDB ids per media type."""

    id: str
    name: str
    movie_ids: tuple[int, ...]
    tv_ids: tuple[int, ...]
    child_safe: bool

    def ids_for(self, media_type: MediaType) -> tuple[int, ...]:
        return self.movie_ids if media_type is MediaType.MOVIE else self.tv_ids


UNIFIED_GENRES: tuple[UnifiedGenre, ...] = (
    UnifiedGenre("action", "Action", (28,), (10759,), child_safe=True),
    UnifiedGenre("adventure", "Adventure", (12,), (10759,), child_safe=True),
    UnifiedGenre("animation", "Animation", (16,), (16,), child_safe=True),
    UnifiedGenre("comedy", "Comedy", (35,), (35,), child_safe=True),
    UnifiedGenre("crime", "Crime", (80,), (80,), child_safe=False),
    UnifiedGenre("documentary", "Documentary", (99,), (99,), child_safe=True),
    UnifiedGenre("drama", "Drama", (18,), (18,), child_safe=True),
    UnifiedGenre("family", "Family", (10751,), (10751,), child_safe=True),
    # TV folds fantasy and sci-fi into 10765
    UnifiedGenre("fantasy", "Fantasy", (14,), (10765,), child_safe=True),
    UnifiedGenre("history", "History", (36,), (99,), child_safe=True),
    # TMDB has no TV horror genre
    UnifiedGenre("horror", "Horror", (27,), (10765, 9648), child_safe=False),
    UnifiedGenre("kids", "Kids", (10751, 16), (10762,), child_safe=True),
    UnifiedGenre("music", "Music", (10402,), (10402,), child_safe=True),
    UnifiedGenre("mystery", "Mystery", (9648,), (9648,), child_safe=True),
    UnifiedGenre("news", "News", (99,), (10763,), child_safe=False),
    UnifiedGenre("reality", "Reality", (99,), (10764,), child_safe=False),
    UnifiedGenre("romance", "Romance", (10749,), (18,), child_safe=True),
    UnifiedGenre("scifi", "Science Fiction", (878,), (10765,), child_safe=True),
    UnifiedGenre("soap", "Soap", (10749, 18), (10766,), child_safe=False),
    UnifiedGenre("thriller", "Thriller", (53,), (9648, 80), child_safe=False),
    UnifiedGenre("war", "War", (10752,), (10768,), child_safe=True),
    UnifiedGenre("politics", "Politics", (18, 36), (10768,), child_safe=False),
    UnifiedGenre("western", "Western", (37,), (37,), child_safe=True),
)


class GenreMapper(Protocol):
    """Translates unified genre names into TMDB genre ids."""

    def translate(self, genres: Sequence[str], media_type: MediaType) -> list[int]: ...


def format_genres_for_api(genre_ids: Iterable[int], logic: GenreLogic) -> str:
    """Join TMDB genre ids for ``with_genres``.

    Example:
        >>> format_genres_for_api([28, 12], GenreLogic.AND)
        '28,12'
        >>> format_genres_for_api([28, 12], GenreLogic.OR)
        '28|12'
    """
    return logic.separator.join(str(genre_id) for genre_id in genre_ids)


class UnifiedGenreMapper:
    """GenreMapper backed by a table of :class:`UnifiedGenre`.

    Args:
        genres: Genre table, defaults to :data:`UNIFIED_GENRES`
    """

    def __init__(self, genres: Sequence[UnifiedGenre] = UNIFIED_GENRES) -> None:
        self._genres = tuple(genres)
        self._by_id = {genre.id: genre for genre in self._genres}

    def find(self, genre_id: str) -> UnifiedGenre | None:
        return self._by_id.get(genre_id)

    def translate(self, genres: Sequence[str], media_type: MediaType) -> list[int]:
        """Translate unified genre ids to TMDB ids for ``media_type``.

        Unknown ids are skipped. The result is deduplicated while keeping
        the order of first appearance, so genre priority survives.

        Example:
            >>> UnifiedGenreMapper().translate(["fantasy", "scifi"], MediaType.TV)
            [10765]
        """
        tmdb_ids: dict[int, None] = {}
        for genre_id in genres:
            genre = self.find(genre_id)
            if genre is None:
                logger.debug("Skipping unknown genre id %r", genre_id)
                continue
            for tmdb_id in genre.ids_for(media_type):
                tmdb_ids.setdefault(tmdb_id, None)
        return list(tmdb_ids)

    def translate_for_both(self, genres: Sequence[str]) -> dict[MediaType, list[int]]:
        return {media_type: self.translate(genres, media_type) for media_type in MediaType}

    def convert_legacy_genres(
        self,
        tmdb_genre_ids: Iterable[int],
        media_type: MediaType,
    ) -> list[str]:
        """Map stored TMDB genre ids back to unified ids (first match wins)."""
        unified: dict[str, None] = {}
        for tmdb_id in tmdb_genre_ids:
            genre = self.find_by_tmdb_id(tmdb_id, media_type)
            if genre is not None:
                unified.setdefault(genre.id, None)
        return list(unified)

    def find_by_tmdb_id(self, tmdb_id: int, media_type: MediaType) -> UnifiedGenre | None:
        for genre in self._genres:
            if tmdb_id in genre.ids_for(media_type):
                return genre
        return None

    def is_available_for_media_type(self, genre_id: str, media_type: MediaType) -> bool:
        genre = self.find(genre_id)
        return genre is not None and len(genre.ids_for(media_type)) > 0

    def get_display_name(self, genre_id: str) -> str | None:
        genre = self.find(genre_id)
        return genre.name if genre is not None else None

    def validate_genre_ids(self, genre_ids: Iterable[str]) -> list[str]:
        """Drop ids that are not in the table, keeping order."""
        return [genre_id for genre_id in genre_ids if genre_id in self._by_id]

    def get_genres(self, child_safe_mode: bool = False) -> list[UnifiedGenre]:
        """All genres, or only child-safe ones when ``child_safe_mode`` is set.

        The list does not depend on media type: a genre without ids for the
        selected type simply returns no results.
        """
        if child_safe_mode:
            return [genre for genre in self._genres if genre.child_safe]
        return list(self._genres)


__all__ = [
    "UNIFIED_GENRES",
    "GenreMapper",
    "UnifiedGenre",
    "UnifiedGenreMapper",
    "format_genres_for_api",
]
