"""Tests for the analytics endpoints."""

from datetime import datetime

from structlog.testing import capture_logs

from youthconnect.core.dependencies import (
    get_platform_analytics_service,
    get_role_analytics_service,
)
from youthconnect.core.repositories import DateRange
from youthconnect.core.services.analytics_service import SECTIONS


class TestPlatformAnalytics:
    """Test GET /api/v1/analytics/platform."""

    def test_admin_report(self, client_for, admin, services):
        service = services[get_platform_analytics_service]
        service.get_analytics.return_value = {"overview": {"total_users": 12}}

        with capture_logs() as logs:
            response = client_for(admin).get(
                "/api/v1/analytics/platform",
                params={
                    "start_date": "2024-01-01T00:00:00",
                    "sections": "overview, Demographics,overview",
                },
            )

        assert response.status_code == 200
        assert response.json()["data"] == {"overview": {"total_users": 12}}
        service.get_analytics.assert_awaited_once_with(
            DateRange(start=datetime(2024, 1, 1), end=None),
            ["overview", "demographics"],
        )
        assert any(log.get("event_type") == "admin_action" for log in logs)

    def test_defaults_to_all_sections(self, client_for, admin, services):
        service = services[get_platform_analytics_service]
        service.get_analytics.return_value = {}

        client_for(admin).get("/api/v1/analytics/platform")

        service.get_analytics.assert_awaited_once_with(None, list(SECTIONS))

    def test_unknown_section(self, client_for, admin, services):
        response = client_for(admin).get("/api/v1/analytics/platform?sections=revenue")

        assert response.status_code == 400
        assert response.json()["details"] == {"allowed": list(SECTIONS)}
        services[get_platform_analytics_service].get_analytics.assert_not_awaited()

    def test_non_admin_forbidden(self, client_for, youth, services):
        """Test that the report is refused and the denial logged."""
        with capture_logs() as logs:
            response = client_for(youth).get("/api/v1/analytics/platform")

        assert response.status_code == 403
        assert response.json()["error"] == "authorization_error"
        services[get_platform_analytics_service].get_analytics.assert_not_awaited()
        assert any(log.get("event_type") == "access_denied" for log in logs)

    def test_invalid_date(self, client_for, admin, services):
        response = client_for(admin).get("/api/v1/analytics/platform?end_date=yesterday")
        assert response.status_code == 422


class TestMyAnalytics:
    def test_role_summary(self, client_for, youth, services):
        service = services[get_role_analytics_service]
        service.for_user.return_value = {"role": "YOUTH", "applications": {"total": 2}}

        response = client_for(youth).get("/api/v1/analytics/me")

        assert response.status_code == 200
        assert response.json()["data"]["applications"] == {"total": 2}
        service.for_user.assert_awaited_once_with(youth)
