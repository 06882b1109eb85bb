"""
Service layer for YouthConnect.

This package contains the recommendation, discovery and analytics services
that turn repository queries into ranked and aggregated results.
"""

from .analytics_service import PlatformAnalyticsService, RoleAnalyticsService
from .course_recommendation_service import (
    CourseRecommendationService,
    CourseRecommendationType,
)
from .discovery_service import DiscoveryService
from .factory import ServiceFactory
from .job_recommendation_service import JobRecommendationService
from .startup_recommendation_service import StartupRecommendationService

__all__ = [
    "CourseRecommendationService",
    "CourseRecommendationType",
    "DiscoveryService",
    "JobRecommendationService",
    "PlatformAnalyticsService",
    "RoleAnalyticsService",
    "ServiceFactory",
    "StartupRecommendationService",
]
