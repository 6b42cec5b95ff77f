"""Error types for the CineVault discovery core.

Every failure the library raises is a :class:`CineVaultError` carrying an
:class:`ErrorCode` and an :class:`ErrorContext`. Domain errors describe a
bad request from the caller; infrastructure errors describe TMDB or the
network misbehaving; application errors describe broken configuration.
The original exception, when there is one, is kept on ``original_error``
and chained with ``raise ... from``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Values allowed in ErrorContext.additional_data
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Every error code the library can report."""

    # TMDB request failures
    TMDB_API_CONNECTION_ERROR = "TMDB_API_CONNECTION_ERROR"
    TMDB_API_AUTHENTICATION_ERROR = "TMDB_API_AUTHENTICATION_ERROR"
    TMDB_API_RATE_LIMIT_EXCEEDED = "TMDB_API_RATE_LIMIT_EXCEEDED"
    TMDB_API_REQUEST_FAILED = "TMDB_API_REQUEST_FAILED"
    TMDB_API_TIMEOUT = "TMDB_API_TIMEOUT"
    TMDB_API_SERVER_ERROR = "TMDB_API_SERVER_ERROR"
    TMDB_API_INVALID_RESPONSE = "TMDB_API_INVALID_RESPONSE"
    TMDB_API_MEDIA_NOT_FOUND = "TMDB_API_MEDIA_NOT_FOUND"
    TMDB_API_INVALID_MEDIA_TYPE = "TMDB_API_INVALID_MEDIA_TYPE"
    API_KEY_MISSING = "API_KEY_MISSING"

    # Request validation
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_PAGE = "INVALID_PAGE"

    # Configuration
    MISSING_CONFIG = "MISSING_CONFIG"
    INVALID_CONFIG = "INVALID_CONFIG"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Normalise ``additional_data`` to JSON-safe primitives.

    Paths become strings, enums their values and decimals floats. Anything
    else that is not a str, int, float or bool is rejected.

    Raises:
        TypeError: ``value`` is not a dict or holds an unsupported value
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        raise TypeError(f"additional_data must be dict, got {type(value).__name__}")

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        else:
            raise TypeError(
                f"Cannot store {type(val).__name__} in error context for key {key!r}"
            )

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Where an error happened and the request details that matter.

    ``additional_data`` holds primitives only, so it can go straight into a
    JSON log line. API keys never belong here.

    Attributes:
        operation: Name of the failing operation, e.g. ``"tmdb_get"``
        additional_data: Request details such as the endpoint or page
    """

    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        if self.additional_data is not None:
            object.__setattr__(self, "additional_data", _coerce_primitives(self.additional_data))

    def safe_dict(self) -> dict[str, Any]:
        """Context as a plain dict; ``additional_data`` is always present.

        Example:
            >>> ErrorContext(operation="probe").safe_dict()
            {'operation': 'probe', 'additional_data': {}}
        """
        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = dict(self.additional_data or {})
        return data


class CineVaultError(Exception):
    """Base class for every error raised by the library.

    Args:
        code: Error code
        message: Human-readable description
        context: Operation and request details
        original_error: Exception that triggered this one
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error
        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(CineVaultError):
    """The caller asked for something the discovery domain does not allow,
    such as page 0 or an unsupported media type."""


class InfrastructureError(CineVaultError):
    """An external system (TMDB, the network, the file system) failed."""


class TMDBRequestError(InfrastructureError):
    """A TMDB request that did not produce usable content.

    Carries the HTTP status when the provider answered with a non-OK
    response. ``status`` is ``None`` for transport failures (connection
    reset, timeout) where no response was received.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(code, message, context, original_error)
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["status"] = self.status
        return data


class ApplicationError(CineVaultError):
    """Configuration or wiring is broken."""


def create_validation_error(
    message: str,
    field: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> DomainError:
    """Build a ``VALIDATION_ERROR`` naming the offending request field."""
    context = ErrorContext(
        operation=operation,
        additional_data={"field": field} if field else None,
    )
    return DomainError(ErrorCode.VALIDATION_ERROR, message, context, original_error)
