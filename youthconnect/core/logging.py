"""
Structured logging for YouthConnect.

Every log line is a structlog event carrying the request correlation id and
service metadata. JSON is rendered in production and whenever
``LOG_JSON_OUTPUT`` is set; developers get the colored console renderer.
Security-relevant events go through ``security_logger`` so they share one
schema and can be filtered on ``event_type``.
"""

import asyncio
import contextvars
import functools
import logging
import socket
import sys
import time
import uuid
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import structlog

from .. import __version__
from .config import get_config

SERVICE_NAME = "youthconnect"

# Client libraries that log every request at INFO/DEBUG
QUIET_LOGGERS = ("boto3", "botocore", "s3transfer", "urllib3", "aiosqlite")

correlation_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "correlation_id", default=None
)


def new_correlation_id() -> str:
    """Start a new correlation ID for the current context and return it."""
    correlation_id = uuid.uuid4().hex[:12]
    correlation_id_var.set(correlation_id)
    return correlation_id


def _add_correlation_id(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    correlation_id = correlation_id_var.get()
    if correlation_id is not None:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict


def _add_service_metadata(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    event_dict["service_name"] = SERVICE_NAME
    event_dict["service_version"] = __version__
    event_dict["environment"] = get_config().environment.value
    event_dict["hostname"] = _hostname()
    return event_dict


@functools.lru_cache(maxsize=1)
def _hostname() -> str:
    try:
        return socket.gethostname()
    except OSError:
        return "unknown"


def _processors(json_output: bool) -> List[Any]:
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_correlation_id,
        _add_service_metadata,
        renderer,
    ]


def _configure_stdlib(level: int, log_file: Optional[Path]) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(format="%(message)s", level=level, handlers=handlers, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    json_output: Optional[bool] = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Arguments override the ``LOG_*`` settings. Production always renders
    JSON.
    """
    config = get_config()

    level_name = (level or config.logging.level).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)
    if json_output is None:
        json_output = config.logging.json_output
    json_output = json_output or config.is_production()
    if log_file is None and config.logging.log_file:
        log_file = Path(config.logging.log_file)

    _configure_stdlib(numeric_level, log_file)
    structlog.configure(
        processors=_processors(json_output),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    get_logger(__name__).info(
        "Logging initialized",
        level=level_name,
        json_output=json_output,
        log_file=str(log_file) if log_file else None,
    )


def get_logger(name: str) -> Any:
    """Structured logger bound to ``name``."""
    return structlog.get_logger(name)


def log_performance(
    func_name: Optional[str] = None, slow_ms: float = 1000.0
) -> Callable:
    """
    Time a function or coroutine.

    Logs ``Function completed`` or ``Function failed`` with the duration,
    plus a ``Slow call`` warning when it took longer than ``slow_ms``.
    Exceptions are re-raised.
    """

    def decorator(func: Callable) -> Callable:
        name = func_name or func.__qualname__
        logger = get_logger("performance")

        def _finish(start: float, exc: Optional[Exception] = None) -> None:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            if exc is None:
                logger.info(
                    "Function completed",
                    function=name,
                    duration_ms=duration_ms,
                    success=True,
                )
            else:
                logger.error(
                    "Function failed",
                    function=name,
                    duration_ms=duration_ms,
                    error_type=type(exc).__name__,
                    success=False,
                )
            if duration_ms > slow_ms:
                logger.warning("Slow call", function=name, duration_ms=duration_ms)

        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                start = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _finish(start, e)
                    raise
                _finish(start)
                return result

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _finish(start, e)
                raise
            _finish(start)
            return result

        return wrapper

    return decorator


# Security events


class SecurityEventType(Enum):
    AUTH_SUCCESS = "auth_success"
    AUTH_FAILURE = "auth_failure"
    USER_CREATED = "user_created"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    ACCESS_DENIED = "access_denied"
    ADMIN_ACTION = "admin_action"
    INJECTION_ATTEMPT = "injection_attempt"
    WEAK_PASSWORD_REJECTED = "weak_password_rejected"  # nosec B105
    FILE_ACCESS = "file_access"


class SecuritySeverity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# structlog method used for each severity
_SEVERITY_LEVELS = {
    SecuritySeverity.LOW: "info",
    SecuritySeverity.MEDIUM: "warning",
    SecuritySeverity.HIGH: "error",
    SecuritySeverity.CRITICAL: "critical",
}


def client_address(request: Optional[Any]) -> Optional[str]:
    """First ``X-Forwarded-For`` hop, else the socket peer."""
    if request is None:
        return None
    headers = getattr(request, "headers", None) or {}
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    client = getattr(request, "client", None)
    return client.host if client else "unknown"


class SecurityLogger:
    """
    Audit trail on the ``security`` logger.

    Every event carries an ``event_id`` (returned to the caller), a type, a
    severity, the acting user and the client address and agent when a
    request is at hand. Severity picks the log level.
    """

    def __init__(self) -> None:
        self.logger = structlog.get_logger("security")

    def log_security_event(
        self,
        event_type: SecurityEventType,
        user_id: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        severity: SecuritySeverity = SecuritySeverity.MEDIUM,
        request: Optional[Any] = None,
    ) -> str:
        if request is not None:
            ip_address = ip_address or client_address(request)
            headers = getattr(request, "headers", None)
            if user_agent is None and headers is not None:
                user_agent = headers.get("user-agent", "unknown")

        event_id = str(uuid.uuid4())
        emit = getattr(self.logger, _SEVERITY_LEVELS[severity])
        emit(
            "Security event",
            event_id=event_id,
            event_type=event_type.value,
            timestamp=datetime.now(timezone.utc).isoformat(),
            severity=severity.value,
            user_id=user_id,
            ip_address=ip_address,
            user_agent=user_agent,
            details=details or {},
        )
        return event_id

    def log_auth_success(
        self, user_id: str, request: Optional[Any] = None, **details: Any
    ) -> str:
        return self.log_security_event(
            SecurityEventType.AUTH_SUCCESS,
            user_id=user_id,
            request=request,
            details=details,
            severity=SecuritySeverity.LOW,
        )

    def log_auth_failure(
        self,
        email: str,
        reason: str = "Invalid credentials",
        request: Optional[Any] = None,
    ) -> str:
        return self.log_security_event(
            SecurityEventType.AUTH_FAILURE,
            request=request,
            details={"email": email, "reason": reason},
        )

    def log_access_denied(
        self,
        user_id: Optional[str],
        resource: str,
        reason: str,
        request: Optional[Any] = None,
    ) -> str:
        return self.log_security_event(
            SecurityEventType.ACCESS_DENIED,
            user_id=user_id,
            request=request,
            details={"resource": resource, "reason": reason},
        )

    def log_rate_limit_exceeded(
        self,
        ip_address: Optional[str] = None,
        endpoint: str = "unknown",
        request: Optional[Any] = None,
    ) -> str:
        return self.log_security_event(
            SecurityEventType.RATE_LIMIT_EXCEEDED,
            ip_address=ip_address,
            request=request,
            details={"endpoint": endpoint},
        )

    def log_injection_attempt(
        self,
        field: str,
        threats: List[str],
        user_id: Optional[str] = None,
        request: Optional[Any] = None,
    ) -> str:
        """Input matched an XSS or SQL injection pattern."""
        return self.log_security_event(
            SecurityEventType.INJECTION_ATTEMPT,
            user_id=user_id,
            request=request,
            details={"field": field, "threats": threats},
            severity=SecuritySeverity.HIGH,
        )

    def log_file_access(
        self,
        user_id: str,
        action: str,
        bucket: str,
        key: str,
        request: Optional[Any] = None,
    ) -> str:
        """A presigned URL was handed out."""
        return self.log_security_event(
            SecurityEventType.FILE_ACCESS,
            user_id=user_id,
            request=request,
            details={"action": action, "bucket": bucket, "key": key},
            severity=SecuritySeverity.LOW,
        )

    def log_admin_action(
        self,
        user_id: str,
        action: str,
        request: Optional[Any] = None,
        **details: Any,
    ) -> str:
        return self.log_security_event(
            SecurityEventType.ADMIN_ACTION,
            user_id=user_id,
            request=request,
            details={"action": action, **details},
            severity=SecuritySeverity.LOW,
        )


security_logger = SecurityLogger()
