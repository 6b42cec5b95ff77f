"""Discovery: prioritized genre pagination and the page-serving service."""

from .discover_service import DiscoverPage, DiscoverRequest, DiscoveryService
from .prioritized_fetch import PrioritizedGenreFetcher, find_genre_tier

__all__ = [
    "DiscoverPage",
    "DiscoverRequest",
    "DiscoveryService",
    "PrioritizedGenreFetcher",
    "find_genre_tier",
]
