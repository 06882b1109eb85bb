"""Startups registered by young entrepreneurs."""

import uuid
from datetime import datetime
from typing import Optional

from fastapi_users_db_sqlalchemy.generics import GUID, TIMESTAMPAware, now_utc
from sqlalchemy import Boolean, Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..database.models import Base
from .enums import BusinessStage


class Entrepreneurship(Base):
    __tablename__ = "entrepreneurship"

    id: Mapped[uuid.UUID] = mapped_column(GUID, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        GUID, ForeignKey("user.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[Optional[str]] = mapped_column(Text)
    category: Mapped[Optional[str]] = mapped_column(String(120), index=True)
    subcategory: Mapped[Optional[str]] = mapped_column(String(120))
    business_stage: Mapped[BusinessStage] = mapped_column(
        Enum(BusinessStage, native_enum=False, length=32),
        default=BusinessStage.IDEA,
        index=True,
    )
    website: Mapped[Optional[str]] = mapped_column(String(255))
    municipality: Mapped[Optional[str]] = mapped_column(String(120))
    department: Mapped[Optional[str]] = mapped_column(String(120))
    employees: Mapped[Optional[int]] = mapped_column(Integer)
    annual_revenue: Mapped[Optional[float]] = mapped_column(Float)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    views_count: Mapped[int] = mapped_column(Integer, default=0)
    rating: Mapped[Optional[float]] = mapped_column(Float)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMPAware, default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMPAware, default=now_utc, onupdate=now_utc
    )
