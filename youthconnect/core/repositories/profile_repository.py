"""
Profile repository for YouthConnect.

This module provides access to the youth profiles recommendations are
personalised on.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.profile import Profile
from .base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """Profile repository keyed by owning user."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Profile)

    async def get_by_user_id(self, user_id: UUID) -> Optional[Profile]:
        """
        Get the profile that belongs to a user.

        Args:
            user_id: Owning user's ID

        Returns:
            Profile instance or None if the user has none
        """
        return await self.find_one_by(user_id=user_id)
