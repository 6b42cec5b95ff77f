"""
Tests for CineVault error handling system.
"""

from dataclasses import FrozenInstanceError
from decimal import Decimal
from pathlib import Path

import pytest

from cinevault.shared.constants import MediaType
from cinevault.shared.errors import (
    CineVaultError,
    DomainError,
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    TMDBRequestError,
    create_validation_error,
)


class TestErrorContext:
    """Test cases for ErrorContext frozen dataclass."""

    def test_empty_context(self):
        context = ErrorContext()
        assert context.operation is None
        assert context.additional_data is None

    def test_frozen_immutability(self):
        context = ErrorContext(operation="probe")

        with pytest.raises(FrozenInstanceError):
            context.operation = "other"

    def test_additional_data_is_coerced(self):
        context = ErrorContext(
            additional_data={
                "path": Path("/tmp/x"),
                "media": MediaType.TV,
                "ratio": Decimal("1.5"),
                "page": 3,
            }
        )

        assert context.additional_data == {
            "path": str(Path("/tmp/x")),
            "media": "tv",
            "ratio": 1.5,
            "page": 3,
        }

    def test_non_primitive_rejected(self):
        with pytest.raises(TypeError):
            ErrorContext(additional_data={"items": [1, 2]})

    def test_safe_dict_always_has_additional_data(self):
        assert ErrorContext(operation="discover").safe_dict() == {
            "operation": "discover",
            "additional_data": {},
        }
        assert ErrorContext(additional_data={"page": 2}).safe_dict() == {
            "additional_data": {"page": 2},
        }


class TestErrorHierarchy:
    def test_message_format(self):
        error = DomainError(ErrorCode.INVALID_PAGE, "Page must be at least 1")

        assert str(error) == "INVALID_PAGE: Page must be at least 1"
        assert isinstance(error, CineVaultError)

    def test_tmdb_request_error_carries_status(self):
        error = TMDBRequestError(ErrorCode.TMDB_API_SERVER_ERROR, "TMDB API error: 502", status=502)

        assert isinstance(error, InfrastructureError)
        assert error.status == 502
        assert error.to_dict()["status"] == 502
        assert error.to_dict()["code"] == "TMDB_API_SERVER_ERROR"

    def test_to_dict_includes_original_error(self):
        cause = ValueError("bad json")
        error = InfrastructureError(ErrorCode.TMDB_API_INVALID_RESPONSE, "failed", original_error=cause)

        assert error.to_dict()["original_error"] == "bad json"


class TestCreateValidationError:
    def test_names_the_field(self):
        cause = ValueError("bad")
        error = create_validation_error(
            "bad endpoint", field="endpoint", operation="discover", original_error=cause
        )

        assert isinstance(error, DomainError)
        assert error.code is ErrorCode.VALIDATION_ERROR
        assert error.context.operation == "discover"
        assert error.context.additional_data == {"field": "endpoint"}
        assert error.original_error is cause

    def test_without_field(self):
        error = create_validation_error("bad request")

        assert error.context.additional_data is None
