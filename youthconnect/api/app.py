"""
FastAPI application factory for the YouthConnect read API.

``create_app`` wires the middleware stack, maps exceptions onto the
``ErrorResponse`` body and mounts the auth, health and domain routers.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional, Union

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..core.config import Environment, YouthConnectConfig, get_config
from ..core.database.connection import close_database, init_database
from ..core.errors import ErrorType, YouthConnectError, create_error_response
from ..core.logging import get_logger, setup_logging
from .middleware import (
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from .models import ErrorResponse
from .versioning import get_version_info

API_DESCRIPTION = """
Read side of the YouthConnect youth employment and education platform.

* **Recommendations**: courses, job offers and startups ranked for the caller
* **Discovery**: filtered startup directory with facets, trending and search
* **Analytics**: platform report for administrators, activity summary per role
* **Storage**: presigned upload and download URLs for the object store

Sign in through `/api/v1/auth/cookie/login` for a session cookie or
`/api/v1/auth/jwt/login` for a bearer token. Login and registration are
rate-limited per client address.
"""

_HTTP_ERROR_TYPES = {
    status.HTTP_400_BAD_REQUEST: ErrorType.VALIDATION_ERROR,
    status.HTTP_401_UNAUTHORIZED: ErrorType.AUTHENTICATION_ERROR,
    status.HTTP_403_FORBIDDEN: ErrorType.AUTHORIZATION_ERROR,
    status.HTTP_404_NOT_FOUND: ErrorType.NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorType.CONFLICT,
    status.HTTP_429_TOO_MANY_REQUESTS: ErrorType.RATE_LIMIT_EXCEEDED,
}

# Documented on every route; bodies come from create_error_response
ERROR_RESPONSES: Dict[Union[int, str], Dict[str, Any]] = {
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 500)
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config = get_config()
    setup_logging(
        level=config.logging.level,
        log_file=config.logging.log_file,
        json_output=config.logging.json_output,
    )
    logger = get_logger("api.app")
    logger.info(
        "Starting YouthConnect API server",
        environment=config.environment.value,
        version=__version__,
    )

    if config.database.create_tables_on_startup:
        await init_database()

    if config.storage.initialize_on_startup:
        from ..core.dependencies import get_storage_service

        await get_storage_service().initialize_buckets()

    yield

    logger.info("Shutting down YouthConnect API server")
    await close_database()


def create_app(environment: Optional[str] = None) -> FastAPI:
    """
    Build the application.

    ``environment`` overrides the configured environment, mainly so tests
    and scripts can force ``testing`` or ``production`` behaviour.
    """
    config = get_config()
    if environment:
        config.environment = Environment(environment)

    show_docs = not config.is_production()
    app = FastAPI(
        title="YouthConnect API",
        description=API_DESCRIPTION,
        version=__version__,
        docs_url="/docs" if show_docs else None,
        redoc_url="/redoc" if show_docs else None,
        lifespan=lifespan,
        responses=ERROR_RESPONSES,
    )

    @app.get("/api/version", tags=["version"])
    async def get_api_version_info() -> Dict[str, Any]:
        return get_version_info()

    _setup_middleware(app, config)
    _setup_exception_handlers(app)
    _setup_routes(app)

    return app


def _setup_middleware(app: FastAPI, config: YouthConnectConfig) -> None:
    # add_middleware wraps, so the last one added runs first
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=config.security.auth_rate_limit,
        window_seconds=config.security.auth_rate_window_seconds,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_resolved,
        allow_credentials=config.api.cors_credentials,
        allow_methods=config.cors_methods_resolved,
        allow_headers=["*"],
        max_age=config.api.cors_max_age,
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    # Outermost, so the correlation id covers every other middleware
    app.add_middleware(RequestLoggingMiddleware)


def _error_json(
    status_code: int,
    error_type: ErrorType,
    message: str,
    request: Request,
    details: Optional[Dict[str, Any]] = None,
    **extra: Any,
) -> JSONResponse:
    content = create_error_response(error_type, message, request.url.path, details)
    content.update(extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def _setup_exception_handlers(app: FastAPI) -> None:
    logger = get_logger("api.exceptions")

    @app.exception_handler(YouthConnectError)
    async def domain_exception_handler(
        request: Request, exc: YouthConnectError
    ) -> JSONResponse:
        logger.warning(
            "Request failed",
            error_type=exc.error_type.value,
            status_code=exc.status_code,
            message=exc.message,
            path=request.url.path,
        )
        return _error_json(
            exc.status_code, exc.error_type, exc.message, request, exc.details
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = jsonable_encoder(exc.errors())
        logger.warning("Validation error", errors=errors, path=request.url.path)
        return _error_json(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            ErrorType.VALIDATION_ERROR,
            "Validation error",
            request,
            {"errors": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        logger.warning(
            "HTTP exception", status_code=exc.status_code, detail=str(exc.detail)
        )
        # fastapi-users clients read error codes from "detail"
        response = _error_json(
            exc.status_code,
            _HTTP_ERROR_TYPES.get(exc.status_code, ErrorType.UNKNOWN_ERROR),
            str(exc.detail),
            request,
            detail=exc.detail,
        )
        if getattr(exc, "headers", None):
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "Unexpected error", path=request.url.path, error=str(exc), exc_info=True
        )
        return _error_json(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorType.UNKNOWN_ERROR,
            "Internal server error",
            request,
        )


def _setup_routes(app: FastAPI) -> None:
    from ..core.auth.fastapi_users import bearer_backend, cookie_backend, fastapi_users
    from ..core.auth.schemas import UserCreate, UserRead, UserUpdate
    from .routes import analytics, discovery, health, recommendations, storage

    app.include_router(health.router)

    app.include_router(
        fastapi_users.get_auth_router(cookie_backend),
        prefix="/api/v1/auth/cookie",
        tags=["auth"],
    )
    app.include_router(
        fastapi_users.get_auth_router(bearer_backend),
        prefix="/api/v1/auth/jwt",
        tags=["auth"],
    )
    app.include_router(
        fastapi_users.get_register_router(UserRead, UserCreate),
        prefix="/api/v1/auth",
        tags=["auth"],
    )
    app.include_router(
        fastapi_users.get_users_router(UserRead, UserUpdate),
        prefix="/api/v1/users",
        tags=["users"],
    )

    for module in (recommendations, discovery, analytics, storage):
        app.include_router(module.router)


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run(
        "youthconnect.api.app:create_app",
        factory=True,
        host=config.api.host,
        port=config.api.port,
        reload=config.api.reload and config.is_development(),
        log_level="info",
    )
