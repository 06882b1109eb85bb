"""
Database package for YouthConnect.

This package provides the SQLAlchemy declarative base and async session
management.
"""

from .connection import (
    close_database,
    get_async_engine,
    get_async_session,
    init_database,
    reset_database_factories,
)
from .models import Base

__all__ = [
    "Base",
    "close_database",
    "get_async_engine",
    "get_async_session",
    "init_database",
    "reset_database_factories",
]
