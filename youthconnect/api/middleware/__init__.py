"""HTTP middleware for the YouthConnect API."""

from .request_logging import RequestLoggingMiddleware
from .security import RateLimitMiddleware, SecurityHeadersMiddleware

__all__ = [
    "RateLimitMiddleware",
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
]
