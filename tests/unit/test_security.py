"""
Unit tests for security features.

This module tests the security middleware, headers, rate limiting and the
role checks used by protected endpoints.
"""

import re

from fastapi import FastAPI
from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from tests.shared.builders import make_user
from youthconnect.api.app import create_app
from youthconnect.api.middleware import RateLimitMiddleware
from youthconnect.core.auth.roles import check_user_role, is_admin
from youthconnect.core.models import UserRole


def rate_limited_app(max_requests: int) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, max_requests=max_requests, window_seconds=60)

    @app.get("/api/v1/auth/ping")
    async def ping():
        return {"ok": True}

    @app.get("/api/v1/recommendations/ping")
    async def other():
        return {"ok": True}

    return app


class TestSecurityFeatures:
    """Test security features implementation."""

    def test_security_headers_middleware(self):
        """Test that security headers are added to responses."""
        client = TestClient(create_app())

        response = client.get("/api/version")

        assert response.status_code == 200
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-XSS-Protection"] == "1; mode=block"
        assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
        assert "Permissions-Policy" in response.headers
        assert "server" not in response.headers

    def test_rate_limiting_middleware(self):
        """Test that auth endpoints reject requests past the limit."""
        client = TestClient(rate_limited_app(max_requests=3))

        for _ in range(3):
            assert client.get("/api/v1/auth/ping").status_code == 200

        response = client.get("/api/v1/auth/ping")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "60"
        body = response.json()
        assert body["error"] == "rate_limit_exceeded"
        assert body["path"] == "/api/v1/auth/ping"

    def test_rate_limit_only_applies_to_auth(self):
        client = TestClient(rate_limited_app(max_requests=1))

        for _ in range(3):
            assert client.get("/api/v1/recommendations/ping").status_code == 200

    def test_request_id_is_echoed(self):
        """Test that a caller's correlation id comes back on the response."""
        client = TestClient(create_app())

        response = client.get("/api/version", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"

    def test_request_id_is_generated(self):
        client = TestClient(create_app())

        response = client.get("/api/version")

        assert re.fullmatch(r"[0-9a-f]{12}", response.headers["X-Request-ID"])

    def test_request_log_carries_api_version(self):
        client = TestClient(create_app())

        with capture_logs() as logs:
            client.get("/api/v1/health")

        started = next(log for log in logs if log["event"] == "Request started")
        assert started["api_version"] == "v1"
        assert started["path"] == "/api/v1/health"


class TestRoles:
    """Test role checking."""

    def test_role_checks(self):
        youth = make_user(UserRole.YOUTH)
        company = make_user(UserRole.COMPANIES)

        assert check_user_role(youth, UserRole.YOUTH)
        assert not check_user_role(youth, UserRole.COMPANIES, UserRole.INSTITUTION)
        assert check_user_role(company, UserRole.YOUTH, UserRole.COMPANIES)

    def test_admins_pass_every_check(self):
        """Test that superadmins and superusers bypass role lists."""
        superadmin = make_user(UserRole.SUPERADMIN)
        superuser = make_user(UserRole.YOUTH, is_superuser=True)

        assert is_admin(superadmin)
        assert is_admin(superuser)
        assert check_user_role(superuser, UserRole.INSTITUTION)
        assert not is_admin(make_user(UserRole.INSTITUTION))
