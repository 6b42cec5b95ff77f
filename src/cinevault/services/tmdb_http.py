"""Async TMDB HTTP client.

Thin aiohttp wrapper that issues GET requests against the TMDB v3 API with
token-bucket rate limiting, a concurrency cap and a bounded per-request
timeout. Every non-OK response or transport failure is converted into a
TMDBRequestError; nothing is retried here, retry policy belongs to the
caller.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Mapping, Protocol

import aiohttp
from aiolimiter import AsyncLimiter

from cinevault.config.models.api_settings import TMDBSettings
from cinevault.shared.constants import HTTPHeaders, HTTPStatusCodes, TMDB, DiscoverParams
from cinevault.shared.errors import ErrorCode, ErrorContext, TMDBRequestError
from cinevault.shared.logging import log_api_call

logger = logging.getLogger(__name__)

QueryParams = Mapping[str, str | int]


class TMDBTransport(Protocol):
    """Anything that can GET a TMDB path and return decoded JSON."""

    async def get_json(
        self,
        path: str,
        params: QueryParams | None = None,
        api_key: str | None = None,
    ) -> dict[str, Any]: ...


def _error_code_for_status(status: int) -> ErrorCode:
    if status == HTTPStatusCodes.UNAUTHORIZED:
        return ErrorCode.TMDB_API_AUTHENTICATION_ERROR
    if status == HTTPStatusCodes.NOT_FOUND:
        return ErrorCode.TMDB_API_MEDIA_NOT_FOUND
    if status == HTTPStatusCodes.TOO_MANY_REQUESTS:
        return ErrorCode.TMDB_API_RATE_LIMIT_EXCEEDED
    if HTTPStatusCodes.is_server_error(status):
        return ErrorCode.TMDB_API_SERVER_ERROR
    return ErrorCode.TMDB_API_REQUEST_FAILED


class TMDBHttpClient:
    """TMDB API client using aiohttp.

    The session is created lazily on first use and must be released with
    :meth:`close` (or by using the client as an async context manager).

    Args:
        settings: TMDB settings (base url, default key, timeout, rate limits)
        session: Optional externally owned session; it is not closed by us
        rate_limiter: Optional shared AsyncLimiter
    """

    def __init__(
        self,
        settings: TMDBSettings | None = None,
        session: aiohttp.ClientSession | None = None,
        rate_limiter: AsyncLimiter | None = None,
    ) -> None:
        self.settings = settings or TMDBSettings()
        self._session = session
        self._owns_session = session is None
        self._rate_limiter = rate_limiter or AsyncLimiter(
            self.settings.burst_limit,
            self.settings.rate_limit_window,
        )
        self._concurrency_limiter = asyncio.Semaphore(self.settings.concurrent_requests)
        self._request_count = 0

    @property
    def request_count(self) -> int:
        return self._request_count

    async def __aenter__(self) -> TMDBHttpClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.timeout),
                headers={
                    HTTPHeaders.ACCEPT: "application/json",
                    HTTPHeaders.USER_AGENT: TMDB.USER_AGENT,
                },
            )
            self._owns_session = True
            logger.debug("aiohttp.ClientSession created for %s", self.settings.base_url)
        return self._session

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    def _resolve_api_key(self, api_key: str | None, context: ErrorContext) -> str:
        key = api_key or self.settings.api_key
        if not key:
            raise TMDBRequestError(
                code=ErrorCode.API_KEY_MISSING,
                message="No TMDB API key supplied",
                context=context,
            )
        return key

    async def get_json(
        self,
        path: str,
        params: QueryParams | None = None,
        api_key: str | None = None,
    ) -> dict[str, Any]:
        """GET a TMDB path and return the decoded JSON body.

        Args:
            path: API path relative to the base URL, e.g. ``/discover/movie``
            params: Query parameters (the API key is added here)
            api_key: Key for this call; defaults to the configured key

        Returns:
            Decoded JSON object

        Raises:
            TMDBRequestError: On non-OK status (``status`` set), transport
                failure, timeout or an undecodable body
        """
        context = ErrorContext(
            operation="tmdb_get",
            additional_data={"endpoint": path},
        )
        key = self._resolve_api_key(api_key, context)
        url = f"{self.settings.base_url.rstrip('/')}/{path.lstrip('/')}"
        request_params = {DiscoverParams.API_KEY: key, **(params or {})}

        started = time.perf_counter()
        async with self._rate_limiter:
            async with self._concurrency_limiter:
                try:
                    session = self._get_session()
                    async with session.get(url, params=request_params) as response:
                        duration_ms = (time.perf_counter() - started) * 1000
                        log_api_call(
                            logger,
                            endpoint=path,
                            status_code=response.status,
                            duration_ms=round(duration_ms, 2),
                        )
                        if not HTTPStatusCodes.is_success(response.status):
                            raise TMDBRequestError(
                                code=_error_code_for_status(response.status),
                                message=f"TMDB API error: {response.status}",
                                context=context,
                                status=response.status,
                            )
                        self._request_count += 1
                        data = await response.json()
                except TMDBRequestError:
                    raise
                except asyncio.TimeoutError as e:
                    raise TMDBRequestError(
                        code=ErrorCode.TMDB_API_TIMEOUT,
                        message=f"TMDB request timed out after {self.settings.timeout}s",
                        context=context,
                        original_error=e,
                    ) from e
                except aiohttp.ContentTypeError as e:
                    raise TMDBRequestError(
                        code=ErrorCode.TMDB_API_INVALID_RESPONSE,
                        message="TMDB returned a non-JSON body",
                        context=context,
                        original_error=e,
                    ) from e
                except aiohttp.ClientError as e:
                    raise TMDBRequestError(
                        code=ErrorCode.TMDB_API_CONNECTION_ERROR,
                        message=f"TMDB connection failed: {e}",
                        context=context,
                        original_error=e,
                    ) from e
                except ValueError as e:
                    raise TMDBRequestError(
                        code=ErrorCode.TMDB_API_INVALID_RESPONSE,
                        message=f"TMDB returned malformed JSON: {e}",
                        context=context,
                        original_error=e,
                    ) from e

        if not isinstance(data, dict):
            raise TMDBRequestError(
                code=ErrorCode.TMDB_API_INVALID_RESPONSE,
                message=f"Expected a JSON object, got {type(data).__name__}",
                context=context,
            )
        return data
