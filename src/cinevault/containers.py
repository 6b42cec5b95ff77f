"""Dependency Injection container for CineVault.

Wires the discovery core from settings using dependency-injector:

- Settings (process-wide instance from the settings loader)
- Rating and tier caches (Singleton, process-wide)
- TMDB HTTP client (Singleton, owns one aiohttp session)
- Genre mapper, certification service, safety filter, fetcher, discovery service
"""

from __future__ import annotations

from dependency_injector import containers, providers

from cinevault.config.loader import get_config
from cinevault.services.cache import RatingCache, TierCache
from cinevault.services.discovery import DiscoveryService, PrioritizedGenreFetcher
from cinevault.services.genres import UnifiedGenreMapper
from cinevault.services.safety import CertificationService, ContentSafetyFilter
from cinevault.services.tmdb_http import TMDBHttpClient


class Container(containers.DeclarativeContainer):
    """Dependency Injection container for CineVault services.

    Example:
        >>> container = Container()
        >>> service = container.discovery_service()
        >>> page = await service.discover(DiscoverRequest(media_type=MediaType.MOVIE))
        >>> await container.tmdb_client().close()
    """

    # Configuration
    config = providers.Callable(get_config)

    # Caches
    rating_cache = providers.Singleton(
        RatingCache,
        ttl_seconds=providers.Callable(
            lambda config: config.cache.certification_ttl,
            config=config,
        ),
    )

    tier_cache = providers.Singleton(
        TierCache,
        ttl_seconds=providers.Callable(
            lambda config: config.cache.tier_ttl,
            config=config,
        ),
    )

    # TMDB client
    tmdb_client = providers.Singleton(
        TMDBHttpClient,
        settings=providers.Callable(
            lambda config: config.api.tmdb,
            config=config,
        ),
    )

    genre_mapper = providers.Singleton(UnifiedGenreMapper)

    # Child safety
    certification_service = providers.Factory(
        CertificationService,
        client=tmdb_client,
        cache=rating_cache,
    )

    safety_filter = providers.Factory(
        ContentSafetyFilter,
        certifications=certification_service,
        max_concurrency=providers.Callable(
            lambda config: config.safety.max_concurrency,
            config=config,
        ),
    )

    # Discovery
    genre_fetcher = providers.Factory(
        PrioritizedGenreFetcher,
        client=tmdb_client,
        genre_mapper=genre_mapper,
        tier_cache=tier_cache,
        language=providers.Callable(
            lambda config: config.api.tmdb.language,
            config=config,
        ),
    )

    discovery_service = providers.Factory(
        DiscoveryService,
        fetcher=genre_fetcher,
        safety_filter=safety_filter,
    )
