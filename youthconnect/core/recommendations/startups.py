"""Startup scoring for discovery, trending and personal recommendations."""

from datetime import datetime
from typing import Optional, Sequence

from ..models.entrepreneurship import Entrepreneurship
from .base import Recommendation, days_since, normalize_terms

TREND_WINDOW_DAYS = 30
MAX_SCORE = 100.0


def startup_trend_score(
    startup: Entrepreneurship, now: Optional[datetime] = None
) -> float:
    """
    Blend popularity, freshness and quality into a 0..1 trend score.

    Views count for 40% (saturating at 100 views), age for 30% (decaying to
    zero over 30 days) and rating for 30% (out of 5).
    """
    views = startup.views_count or 0
    rating = startup.rating or 0.0
    age_days = days_since(startup.created_at, now)

    view_score = min(views / 100, 1.0)
    recency_score = max(0.0, 1.0 - age_days / TREND_WINDOW_DAYS)
    return view_score * 0.4 + recency_score * 0.3 + (rating / 5) * 0.3


def startup_search_score(startup: Entrepreneurship, query: str) -> float:
    """Relevance of a startup to a search query, by field matched."""
    needle = query.strip().lower()
    if not needle:
        return 0.0

    score = 0.0
    if needle in (startup.name or "").lower():
        score += 10
    if needle in (startup.category or "").lower():
        score += 8
    if needle in (startup.description or "").lower():
        score += 5
    if needle in (startup.subcategory or "").lower():
        score += 3
    return score


def startup_reason(startup: Entrepreneurship, interests: Sequence[str]) -> str:
    wanted = normalize_terms(interests)
    if startup.category and startup.category.lower() in wanted:
        return f"Matches your interest in {startup.category}"
    if (startup.rating or 0) > 4:
        return "Highly rated"
    if (startup.views_count or 0) > 100:
        return "Popular in the community"
    return "Recommended for you"


def startup_recommendation_score(
    startup: Entrepreneurship,
    interests: Sequence[str],
    skills: Sequence[str],
) -> Recommendation:
    """
    Score a startup for a user with the given interests and skills.

    10 when the category is an interest, 5 when the subcategory is, 3 per
    skill mentioned in the name or description, twice the rating, and up to
    5 for views (one point per 100). Capped at 100.
    """
    wanted = normalize_terms(interests)
    score = 0.0

    if startup.category and startup.category.lower() in wanted:
        score += 10
    if startup.subcategory and startup.subcategory.lower() in wanted:
        score += 5

    text = f"{startup.name or ''} {startup.description or ''}".lower()
    score += sum(3 for skill in normalize_terms(skills) if skill in text)

    score += (startup.rating or 0) * 2
    score += min((startup.views_count or 0) / 100, 5.0)

    return Recommendation(
        item=startup,
        score=min(score, MAX_SCORE),
        reason=startup_reason(startup, interests),
        source="startup",
    )
