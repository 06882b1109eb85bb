"""
Core module for YouthConnect.

This module contains the fundamental components of the service including
configuration management, logging setup, error types and the data layer.
"""

from .config import YouthConnectConfig, get_config
from .errors import (
    ErrorType,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
    YouthConnectError,
    create_error_response,
)
from .logging import get_logger, setup_logging

__all__ = [
    "YouthConnectConfig",
    "get_config",
    "setup_logging",
    "get_logger",
    "ErrorType",
    "YouthConnectError",
    "ValidationError",
    "PermissionDeniedError",
    "NotFoundError",
    "StorageError",
    "create_error_response",
]
