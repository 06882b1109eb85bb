"""
Unit tests for service factory functionality.

This module tests the ServiceFactory class and its service creation methods.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from youthconnect.core.config import RecommendationConfig, YouthConnectConfig
from youthconnect.core.repositories.course_repository import CourseRepository
from youthconnect.core.repositories.factory import RepositoryFactory
from youthconnect.core.repositories.profile_repository import ProfileRepository
from youthconnect.core.services import (
    CourseRecommendationService,
    DiscoveryService,
    JobRecommendationService,
    PlatformAnalyticsService,
    RoleAnalyticsService,
    ServiceFactory,
    StartupRecommendationService,
)


@pytest.fixture
def mock_repository_factory():
    """Create a mock repository factory."""
    factory = MagicMock(spec=RepositoryFactory)
    factory.get_course_repository.return_value = AsyncMock(spec=CourseRepository)
    factory.get_profile_repository.return_value = AsyncMock(spec=ProfileRepository)
    return factory


@pytest.fixture
def config():
    return YouthConnectConfig(
        environment="testing", recommendation=RecommendationConfig(max_limit=25)
    )


@pytest.fixture
def service_factory(mock_repository_factory, config):
    """Create a service factory instance."""
    return ServiceFactory(mock_repository_factory, config)


class TestServiceFactory:
    """Test service factory functionality."""

    def test_init(self, mock_repository_factory, config):
        """Test factory initialization."""
        factory = ServiceFactory(mock_repository_factory, config)
        assert factory.repository_factory == mock_repository_factory
        assert factory._services == {}

    def test_get_service_first_time(self, service_factory, mock_repository_factory):
        """Test getting a service for the first time."""
        # Act
        service = service_factory.get_service(CourseRecommendationService)

        # Assert
        assert isinstance(service, CourseRecommendationService)
        mock_repository_factory.get_course_repository.assert_called_once()
        assert CourseRecommendationService in service_factory._services
        assert service.config.max_limit == 25

    def test_get_service_cached(self, service_factory, mock_repository_factory):
        """Test getting a service from cache."""
        # Arrange - Get service once to populate cache
        first_service = service_factory.get_service(CourseRecommendationService)

        # Act - Get service again
        second_service = service_factory.get_service(CourseRecommendationService)

        # Assert
        assert first_service is second_service
        mock_repository_factory.get_course_repository.assert_called_once()

    @pytest.mark.parametrize(
        "service_class",
        [
            JobRecommendationService,
            StartupRecommendationService,
            DiscoveryService,
            PlatformAnalyticsService,
            RoleAnalyticsService,
        ],
    )
    def test_get_service_by_class(self, service_factory, service_class):
        """Test getting each supported service by class."""
        assert isinstance(service_factory.get_service(service_class), service_class)

    def test_discovery_uses_startup_recommendations(self, service_factory):
        discovery = service_factory.get_service(DiscoveryService)
        assert discovery.startup_recommendations is service_factory.get_service(
            StartupRecommendationService
        )

    def test_role_analytics_shares_platform_service(self, service_factory):
        role = service_factory.get_service(RoleAnalyticsService)
        assert role.platform is service_factory.get_service(PlatformAnalyticsService)

    def test_get_service_unsupported_class(self, service_factory):
        """Test getting unsupported service class."""
        # Act & Assert
        with pytest.raises(ValueError, match="Unsupported service class"):
            service_factory.get_service(str)

    def test_reset_services(self, service_factory):
        """Test resetting service cache."""
        # Arrange - Create a service to populate cache
        service_factory.get_service(DiscoveryService)

        # Act
        service_factory.reset_services()

        # Assert
        assert service_factory._services == {}
