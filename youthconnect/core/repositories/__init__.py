"""
Repository layer for YouthConnect.

This module provides the read-side data access used by the recommendation,
discovery and analytics services.
"""

from .analytics_repository import AnalyticsRepository, DateRange
from .base import BaseRepository
from .course_repository import CourseRepository
from .entrepreneurship_repository import EntrepreneurshipRepository, StartupFilters
from .factory import RepositoryFactory, get_repository_factory
from .job_repository import JobRepository
from .profile_repository import ProfileRepository

__all__ = [
    "AnalyticsRepository",
    "BaseRepository",
    "CourseRepository",
    "DateRange",
    "EntrepreneurshipRepository",
    "JobRepository",
    "ProfileRepository",
    "RepositoryFactory",
    "StartupFilters",
    "get_repository_factory",
]
