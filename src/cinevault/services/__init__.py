"""CineVault services: TMDB transport, caches, genres, safety, discovery."""

from .tmdb_http import TMDBHttpClient, TMDBTransport

__all__ = ["TMDBHttpClient", "TMDBTransport"]
