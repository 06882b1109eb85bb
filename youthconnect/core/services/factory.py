"""
Service factory for YouthConnect.

This module provides a factory for creating service instances
with proper dependency injection and configuration.
"""

from typing import Any, Callable, Dict, Optional, Type, TypeVar

from ..config import YouthConnectConfig, get_config
from ..repositories.factory import RepositoryFactory
from .analytics_service import PlatformAnalyticsService, RoleAnalyticsService
from .course_recommendation_service import CourseRecommendationService
from .discovery_service import DiscoveryService
from .job_recommendation_service import JobRecommendationService
from .startup_recommendation_service import StartupRecommendationService

T = TypeVar("T")


class ServiceFactory:
    """
    Factory for creating service instances.

    Services are cached per factory. A factory wraps one repository factory,
    and so one database session, so it lives for a single request.
    """

    def __init__(
        self,
        repository_factory: RepositoryFactory,
        config: Optional[YouthConnectConfig] = None,
    ):
        """
        Initialize service factory.

        Args:
            repository_factory: Repository factory instance
            config: Application configuration, the global one by default
        """
        self.repository_factory = repository_factory
        self.config = config or get_config()
        self._services: Dict[Type, Any] = {}
        self._builders: Dict[Type, Callable[[], Any]] = {
            CourseRecommendationService: self._build_course_recommendations,
            JobRecommendationService: self._build_job_recommendations,
            StartupRecommendationService: self._build_startup_recommendations,
            DiscoveryService: self._build_discovery,
            PlatformAnalyticsService: self._build_platform_analytics,
            RoleAnalyticsService: self._build_role_analytics,
        }

    def _build_course_recommendations(self) -> CourseRecommendationService:
        return CourseRecommendationService(
            self.repository_factory.get_course_repository(),
            self.repository_factory.get_profile_repository(),
            self.config.recommendation,
        )

    def _build_job_recommendations(self) -> JobRecommendationService:
        return JobRecommendationService(
            self.repository_factory.get_job_repository(),
            self.repository_factory.get_profile_repository(),
            self.config.recommendation,
        )

    def _build_startup_recommendations(self) -> StartupRecommendationService:
        return StartupRecommendationService(
            self.repository_factory.get_entrepreneurship_repository(),
            self.repository_factory.get_profile_repository(),
            self.config.recommendation,
        )

    def _build_discovery(self) -> DiscoveryService:
        return DiscoveryService(
            self.repository_factory.get_entrepreneurship_repository(),
            self.get_service(StartupRecommendationService),
        )

    def _build_platform_analytics(self) -> PlatformAnalyticsService:
        return PlatformAnalyticsService(self.repository_factory.get_analytics_repository())

    def _build_role_analytics(self) -> RoleAnalyticsService:
        return RoleAnalyticsService(
            self.repository_factory.get_analytics_repository(),
            self.get_service(PlatformAnalyticsService),
        )

    def get_service(self, service_class: Type[T]) -> T:
        """
        Get service instance by class.

        Args:
            service_class: Service class to instantiate

        Returns:
            Service instance

        Raises:
            ValueError: If service class is not supported
        """
        builder = self._builders.get(service_class)
        if builder is None:
            raise ValueError(f"Unsupported service class: {service_class}")

        if service_class not in self._services:
            self._services[service_class] = builder()
        return self._services[service_class]  # type: ignore[no-any-return]

    def reset_services(self) -> None:
        """Reset all cached service instances."""
        self._services.clear()
