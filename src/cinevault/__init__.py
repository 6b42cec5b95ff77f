"""
CineVault - TMDB Discovery Core

Prioritized genre pagination over TMDB with a fail-closed child safety
pipeline and in-memory certification caching.
"""

__version__ = "0.1.0"
__author__ = "CineVault Team"

from .services.discovery import DiscoverPage, DiscoverRequest, DiscoveryService
from .shared.constants import Endpoint, GenreLogic, MediaType

__all__ = [
    "DiscoverPage",
    "DiscoverRequest",
    "DiscoveryService",
    "Endpoint",
    "GenreLogic",
    "MediaType",
]
