"""
Unit tests for repository factory functionality.

This module tests the RepositoryFactory class and its repository creation methods.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from youthconnect.core.repositories.analytics_repository import AnalyticsRepository
from youthconnect.core.repositories.course_repository import CourseRepository
from youthconnect.core.repositories.entrepreneurship_repository import (
    EntrepreneurshipRepository,
)
from youthconnect.core.repositories.factory import RepositoryFactory, get_repository_factory
from youthconnect.core.repositories.job_repository import JobRepository
from youthconnect.core.repositories.profile_repository import ProfileRepository


@pytest.fixture
def mock_session():
    """Create a mock async session."""
    session = AsyncMock(spec=AsyncSession)
    return session


@pytest.fixture
def repository_factory(mock_session):
    """Create a repository factory instance."""
    return RepositoryFactory(mock_session)


class TestRepositoryFactory:
    """Test repository factory functionality."""

    def test_init(self, mock_session):
        """Test factory initialization."""
        factory = RepositoryFactory(mock_session)
        assert factory.session == mock_session

    @pytest.mark.parametrize(
        "getter, repository_class, model_name",
        [
            ("get_profile_repository", ProfileRepository, "Profile"),
            ("get_course_repository", CourseRepository, "Course"),
            ("get_job_repository", JobRepository, "JobOffer"),
            ("get_entrepreneurship_repository", EntrepreneurshipRepository, "Entrepreneurship"),
        ],
    )
    def test_model_repositories(self, repository_factory, getter, repository_class, model_name):
        """Test getting each model repository."""
        # Act
        repo = getattr(repository_factory, getter)()

        # Assert
        assert isinstance(repo, repository_class)
        assert repo.session == repository_factory.session
        assert repo.model.__name__ == model_name

    def test_get_analytics_repository(self, repository_factory):
        repo = repository_factory.get_analytics_repository()

        assert isinstance(repo, AnalyticsRepository)
        assert repo.session is repository_factory.session

    def test_get_repository_unsupported_class(self, repository_factory):
        """Test getting repository with unsupported class."""
        # Act & Assert
        with pytest.raises(ValueError, match="Unsupported repository class"):
            repository_factory.get_repository(str)

    def test_repositories_are_cached(self, repository_factory):
        """Test that one factory hands out one repository per class."""
        # Act
        first = repository_factory.get_course_repository()
        second = repository_factory.get_repository(CourseRepository)

        # Assert
        assert first is second


class TestGetRepositoryFactory:
    """Test get_repository_factory dependency function."""

    def test_get_repository_factory(self, mock_session):
        """Test getting repository factory from dependency function."""
        # Act
        factory = get_repository_factory(mock_session)

        # Assert
        assert isinstance(factory, RepositoryFactory)
        assert factory.session is mock_session

    def test_get_repository_factory_creates_new_instance(self, mock_session):
        """Test that dependency function creates new factory instances."""
        # Act
        factory1 = get_repository_factory(mock_session)
        factory2 = get_repository_factory(mock_session)

        # Assert
        assert factory1 is not factory2
        assert factory1.session == factory2.session
