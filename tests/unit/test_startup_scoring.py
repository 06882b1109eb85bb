"""Unit tests for startup trend, search and recommendation scores."""

from datetime import timedelta

import pytest

from tests.shared.builders import NOW, make_startup
from youthconnect.core.recommendations.base import days_since
from youthconnect.core.recommendations.startups import (
    startup_reason,
    startup_recommendation_score,
    startup_search_score,
    startup_trend_score,
)


class TestTrendScore:
    """Test the trend blend of views, age and rating."""

    def test_blend(self):
        startup = make_startup(
            views_count=50, rating=4.0, created_at=NOW - timedelta(days=15)
        )
        # 0.5 * 0.4 + 0.5 * 0.3 + 0.8 * 0.3
        assert startup_trend_score(startup, NOW) == pytest.approx(0.59)

    def test_old_startup_keeps_only_views(self):
        """Test that views saturate and age decays to zero."""
        startup = make_startup(
            views_count=500, rating=None, created_at=NOW - timedelta(days=60)
        )
        assert startup_trend_score(startup, NOW) == pytest.approx(0.4)

    def test_naive_timestamps_are_utc(self):
        """Test that naive datetimes from the database compare with aware now."""
        naive = (NOW - timedelta(days=3)).replace(tzinfo=None)
        assert days_since(naive, NOW) == pytest.approx(3.0)
        assert days_since(None, NOW) == float("inf")


class TestSearchScore:
    """Test search relevance by matched field."""

    def test_field_weights(self):
        startup = make_startup(
            name="EcoBox Delivery",
            category="Logistics",
            description="Eco friendly boxes",
            subcategory="eco packaging",
        )
        # name 10 + description 5 + subcategory 3
        assert startup_search_score(startup, "eco") == 18.0
        assert startup_search_score(startup, "logistics") == 8.0

    def test_blank_query(self):
        assert startup_search_score(make_startup(), "   ") == 0.0


class TestRecommendationScore:
    """Test personal startup recommendations."""

    def test_interest_skill_rating_and_views(self):
        startup = make_startup(
            name="PyLab",
            description="Python tutoring for teens",
            category="Tech",
            subcategory="AI",
            rating=4.5,
            views_count=250,
        )

        rec = startup_recommendation_score(startup, ["tech", "ai"], ["python"])

        # 10 category + 5 subcategory + 3 skill + 9 rating + 2.5 views
        assert rec.score == pytest.approx(29.5)
        assert rec.reason == "Matches your interest in Tech"

    def test_views_capped(self):
        rec = startup_recommendation_score(make_startup(views_count=10_000), [], [])
        assert rec.score == pytest.approx(5.0)

    @pytest.mark.parametrize(
        "overrides, expected",
        [
            ({"rating": 4.5}, "Highly rated"),
            ({"views_count": 150}, "Popular in the community"),
            ({}, "Recommended for you"),
        ],
    )
    def test_reason(self, overrides, expected):
        assert startup_reason(make_startup(**overrides), []) == expected
