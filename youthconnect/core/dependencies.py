"""
Dependency injection for YouthConnect.

This module provides the FastAPI dependencies that hand routes their
services, each built on the request's database session.
"""

from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from .config import get_config
from .database.connection import get_async_session
from .repositories.factory import RepositoryFactory
from .services import (
    CourseRecommendationService,
    DiscoveryService,
    JobRecommendationService,
    PlatformAnalyticsService,
    RoleAnalyticsService,
    ServiceFactory,
    StartupRecommendationService,
)
from .storage import StorageService

_storage_service: Optional[StorageService] = None


def get_service_factory(
    session: AsyncSession = Depends(get_async_session),
) -> ServiceFactory:
    """
    Get a service factory bound to the request's session.

    Args:
        session: Async database session

    Returns:
        ServiceFactory instance
    """
    return ServiceFactory(RepositoryFactory(session), get_config())


def get_course_recommendation_service(
    factory: ServiceFactory = Depends(get_service_factory),
) -> CourseRecommendationService:
    return factory.get_service(CourseRecommendationService)


def get_job_recommendation_service(
    factory: ServiceFactory = Depends(get_service_factory),
) -> JobRecommendationService:
    return factory.get_service(JobRecommendationService)


def get_startup_recommendation_service(
    factory: ServiceFactory = Depends(get_service_factory),
) -> StartupRecommendationService:
    return factory.get_service(StartupRecommendationService)


def get_discovery_service(
    factory: ServiceFactory = Depends(get_service_factory),
) -> DiscoveryService:
    return factory.get_service(DiscoveryService)


def get_platform_analytics_service(
    factory: ServiceFactory = Depends(get_service_factory),
) -> PlatformAnalyticsService:
    return factory.get_service(PlatformAnalyticsService)


def get_role_analytics_service(
    factory: ServiceFactory = Depends(get_service_factory),
) -> RoleAnalyticsService:
    return factory.get_service(RoleAnalyticsService)


def get_storage_service() -> StorageService:
    """
    Get the shared storage service.

    The boto3 client is thread safe, so one instance serves every request.

    Returns:
        StorageService instance
    """
    global _storage_service

    if _storage_service is None:
        _storage_service = StorageService(config=get_config().storage)
    return _storage_service


def reset_storage_service() -> None:
    """Drop the shared storage service so the next call rebuilds it."""
    global _storage_service
    _storage_service = None
