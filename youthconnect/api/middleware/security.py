"""
Security middleware for the YouthConnect API.

Adds hardening headers to every response and rate limits the
authentication endpoints per client address.
"""

import time
from typing import Any, Callable, Dict, List, cast

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from ...core.errors import ErrorType, create_error_response
from ...core.logging import get_logger, security_logger

AUTH_PATH_PREFIX = "/api/v1/auth"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Any]
    ) -> Response:
        """Dispatch request with security headers."""
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = (
            "geolocation=(), microphone=(), camera=()"
        )

        # Remove server information
        if "server" in response.headers:
            del response.headers["server"]

        return cast(Response, response)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding window rate limiting for auth endpoints."""

    def __init__(
        self,
        app: ASGIApp,
        max_requests: int = 10,
        window_seconds: int = 60,
        path_prefix: str = AUTH_PATH_PREFIX,
    ) -> None:
        """Initialize rate limiting middleware."""
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.path_prefix = path_prefix
        self.requests: Dict[str, List[float]] = {}
        self.logger = get_logger(__name__)

    def _prune(self, now: float) -> None:
        self.requests = {
            ip: timestamps
            for ip, timestamps in self.requests.items()
            if timestamps and now - timestamps[-1] < self.window_seconds
        }

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Any]
    ) -> Response:
        """Dispatch request with rate limiting for auth endpoints."""
        if not request.url.path.startswith(self.path_prefix):
            return cast(Response, await call_next(request))

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()
        self._prune(now)

        recent = [
            ts
            for ts in self.requests.get(client_ip, [])
            if now - ts < self.window_seconds
        ]

        if len(recent) >= self.max_requests:
            self.requests[client_ip] = recent
            security_logger.log_rate_limit_exceeded(
                client_ip, request.url.path, request=request
            )
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content=create_error_response(
                    ErrorType.RATE_LIMIT_EXCEEDED,
                    (
                        f"Too many requests. Limit: {self.max_requests} "
                        f"per {self.window_seconds} seconds"
                    ),
                    path=request.url.path,
                ),
                headers={"Retry-After": str(self.window_seconds)},
            )

        recent.append(now)
        self.requests[client_ip] = recent
        return cast(Response, await call_next(request))
