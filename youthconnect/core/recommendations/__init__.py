"""
Recommendation scoring for YouthConnect.

Pure functions that rank courses, jobs and startups with weighted heuristics
over skill overlap, popularity and recency.
"""

from .base import Recommendation, text_similarity
from .courses import (
    combine_recommendations,
    content_course_score,
    personalized_course_score,
    similar_course_score,
    skill_course_score,
    target_course_level,
    trending_score,
)
from .jobs import match_percentage, score_job
from .startups import (
    startup_recommendation_score,
    startup_search_score,
    startup_trend_score,
)

__all__ = [
    "Recommendation",
    "combine_recommendations",
    "content_course_score",
    "match_percentage",
    "personalized_course_score",
    "score_job",
    "similar_course_score",
    "skill_course_score",
    "startup_recommendation_score",
    "startup_search_score",
    "startup_trend_score",
    "target_course_level",
    "text_similarity",
    "trending_score",
]
