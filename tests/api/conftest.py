"""
Fixtures for HTTP tests.

Each test gets a fresh application. Authentication is replaced by a fixed
user and services by AsyncMocks through ``app.dependency_overrides``, so no
database or object store is touched.
"""

from typing import Callable, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tests.shared.builders import make_user
from youthconnect.api.app import create_app
from youthconnect.core.auth.fastapi_users import current_active_user
from youthconnect.core.auth.models import User
from youthconnect.core.config import StorageConfig
from youthconnect.core.dependencies import (
    get_course_recommendation_service,
    get_discovery_service,
    get_job_recommendation_service,
    get_platform_analytics_service,
    get_role_analytics_service,
    get_startup_recommendation_service,
    get_storage_service,
)
from youthconnect.core.models import UserRole
from youthconnect.core.services import (
    CourseRecommendationService,
    DiscoveryService,
    JobRecommendationService,
    PlatformAnalyticsService,
    RoleAnalyticsService,
    StartupRecommendationService,
)
from youthconnect.core.storage import StorageService


def _provide(value):
    def dependency():
        return value

    return dependency


@pytest.fixture
def app() -> FastAPI:
    return create_app()


@pytest.fixture
def youth() -> User:
    return make_user(UserRole.YOUTH)


@pytest.fixture
def admin() -> User:
    return make_user(UserRole.SUPERADMIN)


@pytest.fixture
def services(app):
    """AsyncMock services wired into the app."""
    mocks = {
        get_course_recommendation_service: AsyncMock(spec=CourseRecommendationService),
        get_job_recommendation_service: AsyncMock(spec=JobRecommendationService),
        get_startup_recommendation_service: AsyncMock(spec=StartupRecommendationService),
        get_discovery_service: AsyncMock(spec=DiscoveryService),
        get_platform_analytics_service: AsyncMock(spec=PlatformAnalyticsService),
        get_role_analytics_service: AsyncMock(spec=RoleAnalyticsService),
    }
    for dependency, mock in mocks.items():
        app.dependency_overrides[dependency] = _provide(mock)
    return mocks


@pytest.fixture
def s3_client(app) -> MagicMock:
    """Mock boto3 client behind a real StorageService."""
    client = MagicMock()
    client.generate_presigned_url.return_value = "https://minio.test/signed"
    config = StorageConfig(
        endpoint="minio", port=9000, public_url="https://files.example.org"
    )
    storage = StorageService(client=client, config=config)
    app.dependency_overrides[get_storage_service] = lambda: storage
    return client


@pytest.fixture
def client_for(app) -> Callable[[Optional[User]], TestClient]:
    """Build a client signed in as the given user, or anonymous."""

    def _client(user: Optional[User] = None) -> TestClient:
        if user is not None:
            app.dependency_overrides[current_active_user] = lambda: user
        return TestClient(app, raise_server_exceptions=False)

    return _client
