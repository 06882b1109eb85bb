"""Tests for the startup discovery endpoints."""

from structlog.testing import capture_logs

from tests.shared.builders import make_startup
from youthconnect.core.dependencies import get_discovery_service
from youthconnect.core.models import BusinessStage
from youthconnect.core.recommendations.base import Recommendation
from youthconnect.core.repositories import StartupFilters


class TestDiscoverStartups:
    """Test GET /api/v1/discovery/startups."""

    def test_filters_and_response_shape(self, client_for, youth, services):
        startup = make_startup("EcoBox", category="Green", website="https://ecobox.bo")
        hot = make_startup("HotSauce", views_count=80)
        service = services[get_discovery_service]
        service.discover.return_value = {
            "startups": [startup],
            "total": 1,
            "facets": {
                "categories": [{"name": "Green", "count": 1}],
                "business_stages": [{"name": "IDEA", "count": 1}],
            },
            "trending": [Recommendation(item=hot, score=0.123456, reason="Trending")],
            "recommendations": [Recommendation(item=startup, score=21.0, reason="Interests")],
        }

        response = client_for(youth).get(
            "/api/v1/discovery/startups",
            params={
                "search": "eco",
                "category": "Green",
                "business_stage": "IDEA",
                "has_website": "true",
                "sort_by": "views_count",
                "sort_order": "asc",
                "limit": 5,
                "offset": 10,
            },
        )

        assert response.status_code == 200
        assert response.json()["success"] is True
        body = response.json()["data"]
        assert body["total"] == 1
        assert body["limit"] == 5
        assert body["offset"] == 10
        assert body["startups"][0]["website"] == "https://ecobox.bo"
        assert body["facets"]["categories"] == [{"name": "Green", "count": 1}]
        assert body["trending"][0]["name"] == "HotSauce"
        assert body["trending"][0]["score"] == 0.1235
        assert body["recommendations"][0]["name"] == "EcoBox"
        assert body["recommendations"][0]["reason"] == "Interests"

        service.discover.assert_awaited_once_with(
            StartupFilters(
                search="eco",
                category="Green",
                business_stage=BusinessStage.IDEA,
                has_website=True,
                sort_by="views_count",
                sort_order="asc",
                limit=5,
                offset=10,
            ),
            youth,
        )

    def test_invalid_sort_field(self, client_for, youth, services):
        response = client_for(youth).get("/api/v1/discovery/startups?sort_by=owner_id")

        assert response.status_code == 422
        services[get_discovery_service].discover.assert_not_awaited()

    def test_injection_in_search_rejected(self, client_for, youth, services):
        """Test that a script payload is refused and logged as a security event."""
        with capture_logs() as logs:
            response = client_for(youth).get(
                "/api/v1/discovery/startups",
                params={"search": "<script>alert(1)</script>"},
            )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"] == {"field": "search"}
        services[get_discovery_service].discover.assert_not_awaited()
        assert any(
            log.get("event_type") == "injection_attempt" and log.get("user_id") == str(youth.id)
            for log in logs
        )


class TestTrendingAndSearch:
    def test_trending(self, client_for, youth, services):
        startup = make_startup()
        service = services[get_discovery_service]
        service.trending.return_value = [
            Recommendation(item=startup, score=0.59, reason="Trending")
        ]

        response = client_for(youth).get("/api/v1/discovery/trending?limit=3")

        assert response.status_code == 200
        assert response.json()["meta"]["type"] == "trending"
        assert response.json()["data"][0]["id"] == str(startup.id)
        service.trending.assert_awaited_once_with(3)

    def test_search(self, client_for, youth, services):
        """Test that the query is trimmed before ranking."""
        service = services[get_discovery_service]
        service.search.return_value = []

        response = client_for(youth).get("/api/v1/discovery/search?q=%20coffee%20")

        assert response.status_code == 200
        assert response.json()["meta"] == {
            "type": "search",
            "total": 0,
            "generated_at": response.json()["meta"]["generated_at"],
        }
        service.search.assert_awaited_once_with("coffee", 20)

    def test_search_requires_query(self, client_for, youth, services):
        response = client_for(youth).get("/api/v1/discovery/search")
        assert response.status_code == 422

    def test_search_rejects_sql_injection(self, client_for, youth, services):
        response = client_for(youth).get(
            "/api/v1/discovery/search", params={"q": "x' OR 1=1"}
        )

        assert response.status_code == 400
        services[get_discovery_service].search.assert_not_awaited()

    def test_long_query_is_not_clipped(self, client_for, youth, services):
        service = services[get_discovery_service]
        service.search.return_value = []
        query = "solar " * 30 + "panels"

        response = client_for(youth).get("/api/v1/discovery/search", params={"q": query})

        assert response.status_code == 200
        service.search.assert_awaited_once_with(query, 20)

    def test_query_over_limit(self, client_for, youth, services):
        response = client_for(youth).get(
            "/api/v1/discovery/search", params={"q": "a" * 201}
        )
        assert response.status_code == 422


class TestDiscoveryAnalytics:
    """Test GET /api/v1/discovery/analytics."""

    def test_directory_statistics(self, client_for, youth, services):
        service = services[get_discovery_service]
        service.analytics.return_value = {
            "total_startups": 12,
            "category_stats": [{"name": "Green", "count": 7}, {"name": "Food", "count": 5}],
            "stage_stats": [{"name": "IDEA", "count": 12}],
            "location_stats": [{"name": "Cochabamba", "count": 12}],
            "department_stats": [],
            "recent_activity": 3,
            "recent_activity_days": 7,
        }

        response = client_for(youth).get("/api/v1/discovery/analytics")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total_startups"] == 12
        assert data["category_stats"][0] == {"name": "Green", "count": 7}
        assert data["stage_stats"] == [{"name": "IDEA", "count": 12}]
        assert data["recent_activity"] == 3
        service.analytics.assert_awaited_once_with()

    def test_requires_login(self, client_for, services):
        response = client_for().get("/api/v1/discovery/analytics")

        assert response.status_code == 401
        services[get_discovery_service].analytics.assert_not_awaited()
