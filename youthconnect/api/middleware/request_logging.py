"""Request logging middleware with per-request correlation ids."""

import time
from typing import Any, Callable, cast

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from ...core.logging import correlation_id_var, get_logger, new_correlation_id
from ..versioning import get_api_version

CORRELATION_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request and tag its log lines with a correlation id."""

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self.logger = get_logger("api.middleware")

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Any]
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or new_correlation_id()
        token = correlation_id_var.set(correlation_id)
        start_time = time.perf_counter()

        try:
            self.logger.info(
                "Request started",
                method=request.method,
                path=request.url.path,
                api_version=get_api_version(request).value,
                client=request.client.host if request.client else "unknown",
            )
            response = cast(Response, await call_next(request))

            self.logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            response.headers[CORRELATION_HEADER] = correlation_id
            return response
        finally:
            correlation_id_var.reset(token)
