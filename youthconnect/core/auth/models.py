"""
FastAPI Users models for YouthConnect.

This module defines the user table, extending the FastAPI Users base table
with the platform role.
"""

from datetime import datetime

from fastapi_users.db import SQLAlchemyBaseUserTableUUID
from fastapi_users_db_sqlalchemy.generics import TIMESTAMPAware, now_utc
from sqlalchemy import Enum
from sqlalchemy.orm import Mapped, mapped_column

from ..database.models import Base
from ..models.enums import UserRole


class User(SQLAlchemyBaseUserTableUUID, Base):
    """User model extending FastAPI Users base."""

    __tablename__ = "user"

    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, native_enum=False, length=32),
        nullable=False,
        default=UserRole.YOUTH,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(TIMESTAMPAware, default=now_utc)
