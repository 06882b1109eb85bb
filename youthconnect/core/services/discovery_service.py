"""
Startup discovery service.

Backs the public startup directory: filtered and faceted listings with the
trending strip and the caller's recommendations, free-text search and the
directory-wide statistics.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from ..auth.models import User
from ..logging import get_logger, log_performance
from ..models.entrepreneurship import Entrepreneurship
from ..recommendations.base import Recommendation, top
from ..recommendations.startups import (
    TREND_WINDOW_DAYS,
    startup_search_score,
    startup_trend_score,
)
from ..repositories.entrepreneurship_repository import (
    EntrepreneurshipRepository,
    StartupFilters,
)
from .startup_recommendation_service import StartupRecommendationService

logger = get_logger(__name__)

MAX_PAGE_SIZE = 100
DISCOVERY_TRENDING = 5
DISCOVERY_RECOMMENDED = 5
RECENT_ACTIVITY_DAYS = 7


class DiscoveryService:
    """Search and rank public startups."""

    def __init__(
        self,
        entrepreneurship_repository: EntrepreneurshipRepository,
        startup_recommendations: Optional[StartupRecommendationService] = None,
    ):
        self.entrepreneurship_repository = entrepreneurship_repository
        self.startup_recommendations = startup_recommendations

    @log_performance("startup_discovery")
    async def discover(
        self, filters: StartupFilters, user: Optional[User] = None
    ) -> Dict[str, Any]:
        """
        List public startups matching the filters.

        Args:
            filters: Search terms, attribute filters, sort and page
            user: Caller whose profile drives ``recommendations``

        Returns:
            Dictionary with ``startups``, ``total``, ``facets``, the top
            five ``trending`` startups and up to five ``recommendations``
            (empty without a user or a profile)
        """
        filters.limit = max(1, min(filters.limit, MAX_PAGE_SIZE))
        filters.offset = max(0, filters.offset)

        startups, total = await self.entrepreneurship_repository.discover(filters)
        facets = await self.entrepreneurship_repository.get_facets()
        trending = await self.trending(DISCOVERY_TRENDING)
        recommendations: List[Recommendation] = []
        if user is not None and self.startup_recommendations is not None:
            recommendations = await self.startup_recommendations.recommend(
                user, DISCOVERY_RECOMMENDED
            )

        logger.debug(
            "Startup discovery completed",
            total=total,
            returned=len(startups),
            search=filters.search,
        )
        return {
            "startups": startups,
            "total": total,
            "facets": facets,
            "trending": trending,
            "recommendations": recommendations,
        }

    async def analytics(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Directory totals, per-facet counts and startups added in the last week."""
        now = now or datetime.now(timezone.utc)
        repository = self.entrepreneurship_repository
        facets = await repository.get_facets()
        return {
            "total_startups": await repository.count_public(),
            "category_stats": facets.get("category", []),
            "stage_stats": facets.get("business_stage", []),
            "location_stats": facets.get("municipality", []),
            "department_stats": facets.get("department", []),
            "recent_activity": await repository.count_public(
                now - timedelta(days=RECENT_ACTIVITY_DAYS)
            ),
            "recent_activity_days": RECENT_ACTIVITY_DAYS,
        }

    async def trending(
        self, limit: int = 10, now: Optional[datetime] = None
    ) -> List[Recommendation]:
        """
        Startups with views and activity in the last 30 days.

        Candidates are the most viewed recent startups; they are then ranked
        by trend score.
        """
        now = now or datetime.now(timezone.utc)
        since = now - timedelta(days=TREND_WINDOW_DAYS)
        candidates = await self.entrepreneurship_repository.get_trending_candidates(
            since, limit * 2
        )
        return top(
            [
                Recommendation(
                    item=startup,
                    score=startup_trend_score(startup, now),
                    reason="Trending this month",
                    source="trending",
                )
                for startup in candidates
            ],
            limit,
        )

    async def search(self, query: str, limit: int = 20) -> List[Recommendation]:
        """
        Rank startups by where the query appears.

        Startups that only matched fields without a search weight are
        dropped.
        """
        if not query.strip():
            return []

        candidates: List[Entrepreneurship] = await self.entrepreneurship_repository.search(
            query, limit * 2
        )
        scored = [
            Recommendation(
                item=startup,
                score=startup_search_score(startup, query),
                reason="Matches your search",
                source="search",
            )
            for startup in candidates
        ]
        return top([rec for rec in scored if rec.score > 0], limit)
