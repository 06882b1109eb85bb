"""
General error handling for YouthConnect.

This module provides the domain exception hierarchy raised by services and
the error response structure the API returns for them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class ErrorType(Enum):
    """Types of errors that can occur in the system."""

    VALIDATION_ERROR = "validation_error"  # Invalid input/data format
    AUTHENTICATION_ERROR = "authentication_error"  # Authentication failure
    AUTHORIZATION_ERROR = "authorization_error"  # Authorization failure
    NOT_FOUND = "not_found"  # Missing resource
    CONFLICT = "conflict"  # State conflict
    STORAGE_ERROR = "storage_error"  # Object store failure
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"  # Too many requests
    UNKNOWN_ERROR = "unknown_error"  # Unexpected errors


class YouthConnectError(Exception):
    """Base class for errors that map onto an HTTP response."""

    error_type: ErrorType = ErrorType.UNKNOWN_ERROR
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(YouthConnectError):
    """Input failed validation."""

    error_type = ErrorType.VALIDATION_ERROR
    status_code = 400


class AuthenticationError(YouthConnectError):
    """Caller is not authenticated."""

    error_type = ErrorType.AUTHENTICATION_ERROR
    status_code = 401


class PermissionDeniedError(YouthConnectError):
    """Caller is authenticated but not allowed."""

    error_type = ErrorType.AUTHORIZATION_ERROR
    status_code = 403


class NotFoundError(YouthConnectError):
    """Requested resource does not exist."""

    error_type = ErrorType.NOT_FOUND
    status_code = 404


class ConflictError(YouthConnectError):
    error_type = ErrorType.CONFLICT
    status_code = 409


class StorageError(YouthConnectError):
    """The object store rejected or failed an operation."""

    error_type = ErrorType.STORAGE_ERROR
    status_code = 502


def create_error_response(
    error_type: ErrorType,
    message: str,
    path: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Create error response data structure."""
    response: Dict[str, Any] = {
        "success": False,
        "error": error_type.value,
        "message": message,
        "path": path,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if details:
        response["details"] = details
    return response
