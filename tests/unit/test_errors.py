"""
Tests for the domain error hierarchy and error responses.
"""

import pytest

from youthconnect.core.errors import (
    AuthenticationError,
    ConflictError,
    ErrorType,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
    YouthConnectError,
    create_error_response,
)


@pytest.mark.unit
class TestErrorHandling:
    """Test the error handling implementation."""

    def test_error_type_enum(self) -> None:
        """Test error type enum values."""
        assert ErrorType.VALIDATION_ERROR.value == "validation_error"
        assert ErrorType.AUTHORIZATION_ERROR.value == "authorization_error"
        assert ErrorType.NOT_FOUND.value == "not_found"
        assert ErrorType.STORAGE_ERROR.value == "storage_error"
        assert ErrorType.UNKNOWN_ERROR.value == "unknown_error"

    @pytest.mark.parametrize(
        "error_class, status_code, error_type",
        [
            (ValidationError, 400, ErrorType.VALIDATION_ERROR),
            (AuthenticationError, 401, ErrorType.AUTHENTICATION_ERROR),
            (PermissionDeniedError, 403, ErrorType.AUTHORIZATION_ERROR),
            (NotFoundError, 404, ErrorType.NOT_FOUND),
            (ConflictError, 409, ErrorType.CONFLICT),
            (StorageError, 502, ErrorType.STORAGE_ERROR),
        ],
    )
    def test_status_codes(self, error_class, status_code, error_type) -> None:
        """Test that every domain error maps onto an HTTP status."""
        error = error_class("boom")

        assert isinstance(error, YouthConnectError)
        assert error.status_code == status_code
        assert error.error_type == error_type
        assert error.message == "boom"
        assert error.details == {}
        assert str(error) == "boom"

    def test_base_error_defaults(self) -> None:
        error = YouthConnectError("unexpected", details={"step": "scoring"})
        assert error.status_code == 500
        assert error.error_type == ErrorType.UNKNOWN_ERROR
        assert error.details == {"step": "scoring"}

    def test_create_error_response(self) -> None:
        """Test error response structure."""
        response = create_error_response(
            ErrorType.NOT_FOUND,
            "Course not found",
            path="/api/v1/recommendations/courses",
            details={"course_id": "abc"},
        )

        assert response["success"] is False
        assert response["error"] == "not_found"
        assert response["message"] == "Course not found"
        assert response["path"] == "/api/v1/recommendations/courses"
        assert response["details"] == {"course_id": "abc"}
        assert "timestamp" in response

    def test_create_error_response_without_details(self) -> None:
        response = create_error_response(ErrorType.UNKNOWN_ERROR, "Internal server error")
        assert "details" not in response
        assert response["path"] is None
