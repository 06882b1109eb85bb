"""
Probes for load balancers and orchestrators.

``/health`` and ``/health/live`` never touch a backing service;
``/health/ready`` and ``/health/detailed`` ping the database.
"""

import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text

from ... import __version__
from ...core.config import get_config
from ...core.database.connection import get_async_engine
from ...core.logging import get_logger
from ..models import HealthResponse

SERVICE_NAME = "YouthConnect API"
STARTED_AT = time.monotonic()

HEALTHY = "healthy"
UNHEALTHY = "unhealthy"

router = APIRouter(prefix="/api/v1", tags=["health"])
logger = get_logger("api.health")


def _probe(state: str, **extra: Any) -> Dict[str, Any]:
    return {
        "status": state,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
        **extra,
    }


async def check_database() -> str:
    """``healthy`` when ``SELECT 1`` succeeds on the shared engine."""
    try:
        async with get_async_engine().connect() as connection:
            await connection.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        return UNHEALTHY
    return HEALTHY


def _environment() -> Optional[str]:
    try:
        return get_config().environment.value
    except Exception as e:
        logger.error("Configuration could not be loaded", error=str(e))
        return None


@router.get("/health", response_model=HealthResponse, summary="Service is up")
async def health_check() -> HealthResponse:
    return HealthResponse(status=HEALTHY, service=SERVICE_NAME, version=__version__)


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Component status and uptime",
)
async def detailed_health_check() -> HealthResponse:
    """
    Check the API, its configuration and the database.

    Any unhealthy component turns the overall status to ``degraded``;
    the response code stays 200 so dashboards can still read it.
    """
    started = time.perf_counter()
    environment = _environment()
    components = {
        "api": HEALTHY,
        "configuration": HEALTHY if environment else UNHEALTHY,
        "database": await check_database(),
    }
    metrics = {
        "response_time_ms": round((time.perf_counter() - started) * 1000, 2),
        "uptime_seconds": int(time.monotonic() - STARTED_AT),
    }
    overall = "degraded" if UNHEALTHY in components.values() else HEALTHY

    logger.info("Health check completed", status=overall, **metrics)
    return HealthResponse(
        status=overall,
        service=SERVICE_NAME,
        version=__version__,
        environment=environment,
        components=components,
        metrics=metrics,
    )


@router.get("/health/ready", response_model=None, summary="Ready to serve traffic")
async def readiness_check() -> Union[Dict[str, Any], JSONResponse]:
    if await check_database() == HEALTHY:
        return _probe("ready", checks={"configuration": "ready", "database": "ready"})
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_probe(
            "not_ready", checks={"configuration": "ready", "database": "unavailable"}
        ),
    )


@router.get("/health/live", response_model=Dict[str, Any], summary="Process is alive")
async def liveness_check() -> Dict[str, Any]:
    return _probe("alive")
