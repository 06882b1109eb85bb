"""Unit tests for startup discovery."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from tests.shared.builders import NOW, make_startup, make_user
from youthconnect.core.recommendations.base import Recommendation
from youthconnect.core.repositories.entrepreneurship_repository import StartupFilters
from youthconnect.core.services import DiscoveryService


@pytest.fixture
def mock_entrepreneurship_repository():
    repo = AsyncMock()
    repo.discover.return_value = ([], 0)
    repo.get_facets.return_value = {"category": []}
    repo.get_trending_candidates.return_value = []
    repo.search.return_value = []
    repo.count_public.return_value = 0
    return repo


@pytest.fixture
def service(mock_entrepreneurship_repository):
    return DiscoveryService(mock_entrepreneurship_repository)


class TestDiscover:
    """Test the filtered startup listing."""

    async def test_page_is_clamped(self, service, mock_entrepreneurship_repository):
        filters = StartupFilters(limit=500, offset=-5)

        await service.discover(filters)

        passed = mock_entrepreneurship_repository.discover.await_args.args[0]
        assert passed.limit == 100
        assert passed.offset == 0

    async def test_result_shape(self, service, mock_entrepreneurship_repository):
        """Test that listings come with facets and five trending startups."""
        startup = make_startup()
        mock_entrepreneurship_repository.discover.return_value = ([startup], 1)

        result = await service.discover(StartupFilters())

        assert result["startups"] == [startup]
        assert result["total"] == 1
        assert result["facets"] == {"category": []}
        assert result["trending"] == []
        assert result["recommendations"] == []
        assert mock_entrepreneurship_repository.get_trending_candidates.await_args.args[1] == 10


    async def test_recommendations_for_caller(self, mock_entrepreneurship_repository):
        """Test that the caller gets the top five startup recommendations."""
        user = make_user()
        pick = Recommendation(item=make_startup(), score=30.0, reason="Interests")
        recommender = AsyncMock()
        recommender.recommend.return_value = [pick]
        service = DiscoveryService(mock_entrepreneurship_repository, recommender)

        result = await service.discover(StartupFilters(), user)

        assert result["recommendations"] == [pick]
        recommender.recommend.assert_awaited_once_with(user, 5)

    async def test_no_recommendations_without_user(self, mock_entrepreneurship_repository):
        recommender = AsyncMock()
        service = DiscoveryService(mock_entrepreneurship_repository, recommender)

        result = await service.discover(StartupFilters())

        assert result["recommendations"] == []
        recommender.recommend.assert_not_awaited()


class TestDiscoveryAnalytics:
    """Test the directory statistics."""

    async def test_statistics(self, service, mock_entrepreneurship_repository):
        mock_entrepreneurship_repository.get_facets.return_value = {
            "category": [{"name": "Tech", "count": 4}],
            "business_stage": [{"name": "IDEA", "count": 3}, {"name": "GROWING", "count": 1}],
            "municipality": [{"name": "La Paz", "count": 4}],
            "department": [],
        }
        mock_entrepreneurship_repository.count_public.side_effect = [4, 1]

        stats = await service.analytics(now=NOW)

        assert stats["total_startups"] == 4
        assert stats["category_stats"] == [{"name": "Tech", "count": 4}]
        assert stats["stage_stats"][0] == {"name": "IDEA", "count": 3}
        assert stats["location_stats"] == [{"name": "La Paz", "count": 4}]
        assert stats["department_stats"] == []
        assert stats["recent_activity"] == 1
        assert stats["recent_activity_days"] == 7
        assert mock_entrepreneurship_repository.count_public.await_args_list[1].args == (
            NOW - timedelta(days=7),
        )

class TestTrending:
    """Test trending startups."""

    async def test_ranked_by_trend_score(self, service, mock_entrepreneurship_repository):
        fresh = make_startup("Fresh", views_count=80, created_at=NOW - timedelta(days=1))
        stale = make_startup("Stale", views_count=90, created_at=NOW - timedelta(days=29))
        mock_entrepreneurship_repository.get_trending_candidates.return_value = [
            stale,
            fresh,
        ]

        results = await service.trending(10, now=NOW)

        assert [r.item for r in results] == [fresh, stale]
        mock_entrepreneurship_repository.get_trending_candidates.assert_awaited_once_with(
            NOW - timedelta(days=30), 20
        )

    async def test_limit(self, service, mock_entrepreneurship_repository):
        mock_entrepreneurship_repository.get_trending_candidates.return_value = [
            make_startup(views_count=v) for v in (10, 30, 20)
        ]

        results = await service.trending(2, now=NOW)

        assert [r.item.views_count for r in results] == [30, 20]


class TestSearch:
    """Test free-text startup search."""

    async def test_blank_query(self, service, mock_entrepreneurship_repository):
        assert await service.search("   ") == []
        mock_entrepreneurship_repository.search.assert_not_awaited()

    async def test_ranking_drops_unweighted_matches(
        self, service, mock_entrepreneurship_repository
    ):
        """Test that name matches outrank description matches."""
        by_name = make_startup("EcoBox")
        by_description = make_startup("Verde", description="An eco brand")
        unweighted = make_startup("Other")
        mock_entrepreneurship_repository.search.return_value = [
            unweighted,
            by_description,
            by_name,
        ]

        results = await service.search("eco")

        assert [r.item for r in results] == [by_name, by_description]
        assert [r.score for r in results] == [10.0, 5.0]
        mock_entrepreneurship_repository.search.assert_awaited_once_with("eco", 40)
