"""
Base repository interface for YouthConnect.

This module provides the base repository pattern implementation that all
data access repositories extend.
"""

from abc import ABC
from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT], ABC):
    """
    Base repository providing common read operations.

    Subclasses add the aggregate queries their services need.
    """

    def __init__(self, session: AsyncSession, model: Type[ModelT]):
        """
        Initialize repository with database session and model.

        Args:
            session: Async database session
            model: SQLAlchemy model class
        """
        self.session = session
        self.model = model

    async def get_by_id(self, entity_id: UUID) -> Optional[ModelT]:
        """
        Get entity by ID.

        Args:
            entity_id: Entity identifier

        Returns:
            Entity instance or None if not found
        """
        return await self.session.get(self.model, entity_id)

    async def find_one_by(self, **filters: Any) -> Optional[ModelT]:
        """
        Find single entity by filters.

        Args:
            **filters: Field-value pairs to filter by

        Returns:
            Matching entity or None if not found
        """
        stmt = select(self.model)
        for field, value in filters.items():
            stmt = stmt.where(getattr(self.model, field) == value)

        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none()
