"""Tests for the logging system."""

from types import SimpleNamespace

import pytest
from structlog.testing import capture_logs

from youthconnect.core.logging import (
    _add_correlation_id,
    correlation_id_var,
    get_logger,
    log_performance,
    new_correlation_id,
    security_logger,
)


@pytest.mark.unit
class TestLogging:
    """Test logging functionality."""

    def test_get_logger(self) -> None:
        """Test that get_logger returns a structlog logger."""
        logger = get_logger("test_module")
        assert hasattr(logger, "info")
        assert hasattr(logger, "error")
        logger.info("test message")

    async def test_log_performance_async(self) -> None:
        """Test timing of coroutine functions."""

        @log_performance("score_courses")
        async def score() -> int:
            return 3

        with capture_logs() as logs:
            assert await score() == 3

        assert logs[0]["event"] == "Function completed"
        assert logs[0]["function"] == "score_courses"
        assert logs[0]["success"] is True

    def test_log_performance_failure(self) -> None:
        """Test that failures are logged and re-raised."""

        @log_performance()
        def explode() -> None:
            raise RuntimeError("boom")

        with capture_logs() as logs:
            with pytest.raises(RuntimeError):
                explode()

        assert logs[0]["event"] == "Function failed"
        assert logs[0]["error_type"] == "RuntimeError"
        assert logs[0]["function"].endswith("explode")

    def test_log_performance_flags_slow_calls(self) -> None:
        @log_performance("rank", slow_ms=-1)
        def rank() -> None:
            return None

        with capture_logs() as logs:
            rank()

        assert [log["event"] for log in logs] == ["Function completed", "Slow call"]
        assert logs[1]["log_level"] == "warning"

    def test_correlation_id_processor(self) -> None:
        token = correlation_id_var.set(None)
        try:
            assert "correlation_id" not in _add_correlation_id(None, "info", {})

            correlation_id = new_correlation_id()
            event = _add_correlation_id(None, "info", {})

            assert event["correlation_id"] == correlation_id
            assert len(correlation_id) == 12
        finally:
            correlation_id_var.reset(token)


@pytest.mark.unit
class TestSecurityLogger:
    """Test structured security events."""

    def test_access_denied(self) -> None:
        request = SimpleNamespace(
            headers={"x-forwarded-for": "10.0.0.1, 10.0.0.2", "user-agent": "pytest"},
            client=SimpleNamespace(host="127.0.0.1"),
        )

        with capture_logs() as logs:
            event_id = security_logger.log_access_denied(
                "user-1", resource="/api/v1/analytics/platform", reason="role", request=request
            )

        log = logs[0]
        assert log["event_id"] == event_id
        assert log["event_type"] == "access_denied"
        assert log["log_level"] == "warning"
        assert log["ip_address"] == "10.0.0.1"
        assert log["user_agent"] == "pytest"
        assert log["details"]["resource"] == "/api/v1/analytics/platform"

    def test_injection_attempt_is_high_severity(self) -> None:
        with capture_logs() as logs:
            security_logger.log_injection_attempt("q", ["XSS"])

        assert logs[0]["log_level"] == "error"
        assert logs[0]["severity"] == "high"
        assert logs[0]["details"] == {"field": "q", "threats": ["XSS"]}
