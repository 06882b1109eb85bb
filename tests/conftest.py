"""
Pytest configuration and fixtures for YouthConnect tests.

Unit tests run against mocked repositories; the repository tests use an
in-memory SQLite database through aiosqlite. Nothing here needs Postgres or
MinIO.
"""

import os

# Settings are read lazily, so these must be in place before the first
# get_config() call.
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SECURITY_SECRET_KEY", "test-secret-key-for-youthconnect-suite-abcdefghijkl")
os.environ.setdefault("SECURITY_COOKIE_SECURE", "false")
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_JSON_OUTPUT", "false")

from typing import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import youthconnect.core.auth.models  # noqa: F401,E402
import youthconnect.core.models  # noqa: F401,E402
from youthconnect.core.config import RecommendationConfig  # noqa: E402
from youthconnect.core.database.models import Base  # noqa: E402


def pytest_configure(config):
    """Register the markers applied by directory."""
    config.addinivalue_line("markers", "unit: fast tests with mocked collaborators")
    config.addinivalue_line("markers", "api: HTTP tests against the FastAPI app")


# Test markers
def pytest_collection_modifyitems(config, items):
    """Add markers to tests based on their location."""
    for item in items:
        path = str(item.fspath)
        if os.sep + "api" + os.sep in path:
            item.add_marker(pytest.mark.api)
        elif os.sep + "unit" + os.sep in path:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def recommendation_config() -> RecommendationConfig:
    """Recommendation settings with the documented defaults."""
    return RecommendationConfig(
        default_limit=10, max_limit=50, trending_window_days=30, min_job_score=20.0
    )


@pytest.fixture
def mock_profile_repository():
    """Create a mock profile repository for unit tests."""
    repo = AsyncMock()
    repo.get_by_user_id = AsyncMock(return_value=None)
    return repo


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """A session on a fresh in-memory database with every table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()
