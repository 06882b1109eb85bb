"""
Repository factory for YouthConnect.

This module provides a factory for creating repository instances
and managing their lifecycle for dependency injection.
"""

from typing import Any, Dict, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from .analytics_repository import AnalyticsRepository
from .course_repository import CourseRepository
from .entrepreneurship_repository import EntrepreneurshipRepository
from .job_repository import JobRepository
from .profile_repository import ProfileRepository

# Generic type for repositories
R = TypeVar("R")

SUPPORTED_REPOSITORIES = (
    AnalyticsRepository,
    CourseRepository,
    EntrepreneurshipRepository,
    JobRepository,
    ProfileRepository,
)


class RepositoryFactory:
    """
    Factory for creating repository instances.

    Repositories are created lazily and cached, so every service built from
    one factory shares the same session.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository factory with database session.

        Args:
            session: Async database session
        """
        self.session = session
        self._repositories: Dict[type, Any] = {}

    def get_repository(self, repository_class: Type[R]) -> R:
        """
        Get repository instance by class.

        Args:
            repository_class: Repository class to instantiate

        Returns:
            Repository instance

        Raises:
            ValueError: If repository class is not supported
        """
        if repository_class not in SUPPORTED_REPOSITORIES:
            raise ValueError(f"Unsupported repository class: {repository_class}")

        if repository_class not in self._repositories:
            self._repositories[repository_class] = repository_class(self.session)  # type: ignore[call-arg]
        return self._repositories[repository_class]  # type: ignore[no-any-return]

    def get_profile_repository(self) -> ProfileRepository:
        return self.get_repository(ProfileRepository)

    def get_course_repository(self) -> CourseRepository:
        return self.get_repository(CourseRepository)

    def get_job_repository(self) -> JobRepository:
        return self.get_repository(JobRepository)

    def get_entrepreneurship_repository(self) -> EntrepreneurshipRepository:
        return self.get_repository(EntrepreneurshipRepository)

    def get_analytics_repository(self) -> AnalyticsRepository:
        return self.get_repository(AnalyticsRepository)


# Dependency function for FastAPI
def get_repository_factory(session: AsyncSession) -> RepositoryFactory:
    """
    Get repository factory instance for dependency injection.

    Args:
        session: Async database session

    Returns:
        RepositoryFactory instance
    """
    return RepositoryFactory(session)
