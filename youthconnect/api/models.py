"""
Response envelopes shared by every router.

Single objects come back in ``APIResponse``, ranked lists in ``ListResponse``
and failures in the ``ErrorResponse`` shape built by
``core.errors.create_error_response``.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class APIResponse(BaseModel, Generic[T]):
    """Envelope for a single payload."""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""

    success: bool = False
    error: str = Field(..., description="ErrorType value", examples=["not_found"])
    message: str = Field(..., examples=["Profile not found"])
    path: Optional[str] = Field(None, examples=["/api/v1/recommendations/jobs"])
    details: Optional[Dict[str, Any]] = None
    timestamp: datetime = Field(default_factory=_utcnow)


class ListMeta(BaseModel):
    type: str = Field(..., description="Ranking strategy that produced the list")
    total: int = Field(..., description="Number of items returned")
    generated_at: datetime = Field(default_factory=_utcnow)


class ListResponse(BaseModel, Generic[T]):
    """Ranked items, best first."""

    success: bool = True
    data: List[T]
    meta: ListMeta


class HealthResponse(BaseModel):
    """Health probe result; components and metrics only on the detailed probe."""

    status: str = Field(..., examples=["healthy", "degraded"])
    service: str = Field(..., examples=["YouthConnect API"])
    version: str
    environment: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)
    components: Optional[Dict[str, str]] = Field(
        None, examples=[{"api": "healthy", "configuration": "healthy", "database": "healthy"}]
    )
    metrics: Optional[Dict[str, Any]] = Field(
        None, examples=[{"response_time_ms": 15.2, "uptime_seconds": 3600}]
    )
