"""
Lazily built async engine and session factory.

Both are created from ``get_config().database`` on first use and live for
the process; ``reset_database_factories`` drops them after a config change.
"""

from typing import Any, AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from ..config import get_config
from ..logging import get_logger

logger = get_logger("core.database")

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def _log_pool_events(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "checkout")
    def on_checkout(dbapi_connection: Any, record: Any, proxy: Any) -> None:
        logger.debug("Database connection checked out")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection: Any, record: Any) -> None:
        logger.debug("Database connection checked in")


def get_async_engine() -> AsyncEngine:
    """Shared engine for the configured ``DB_URL`` (or the URL built from its parts)."""
    global _engine
    if _engine is None:
        settings = get_config().database
        # Connections are not shared across event loops (tests, alembic)
        _engine = create_async_engine(
            settings.async_url, poolclass=NullPool, echo=settings.echo
        )
        _log_pool_events(_engine)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            bind=get_async_engine(), autoflush=False, expire_on_commit=False
        )
    return _session_factory


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, rolled back on error."""
    async with get_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_database() -> None:
    """Create missing tables; migrations remain the normal path."""
    # Importing the model modules registers their tables on Base.metadata
    from .. import models  # noqa: F401
    from ..auth import models as auth_models  # noqa: F401
    from .models import Base

    try:
        async with get_async_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        logger.error("Failed to create database tables", error=str(e))
        raise
    logger.info("Database tables created")


async def close_database() -> None:
    if _engine is not None:
        await _engine.dispose()
        logger.info("Database connections closed")


def reset_database_factories() -> None:
    """Forget the engine and session factory so the next call rebuilds them."""
    global _engine, _session_factory
    _engine = None
    _session_factory = None
