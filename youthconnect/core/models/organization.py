"""Companies and institutions, the two kinds of approved publishers."""

import uuid
from datetime import datetime
from typing import Optional

from fastapi_users_db_sqlalchemy.generics import GUID, TIMESTAMPAware, now_utc
from sqlalchemy import Boolean, Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from ..database.models import Base
from .enums import ApprovalStatus, InstitutionType


class Company(Base):
    __tablename__ = "company"

    id: Mapped[uuid.UUID] = mapped_column(GUID, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200), unique=True)
    business_sector: Mapped[Optional[str]] = mapped_column(String(120))
    approval_status: Mapped[ApprovalStatus] = mapped_column(
        Enum(ApprovalStatus, native_enum=False, length=32),
        default=ApprovalStatus.PENDING,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=False)
    owner_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        GUID, ForeignKey("user.id", ondelete="SET NULL"), index=True
    )
    created_at: Mapped[datetime] = mapped_column(TIMESTAMPAware, default=now_utc)


class Institution(Base):
    __tablename__ = "institution"

    id: Mapped[uuid.UUID] = mapped_column(GUID, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200), unique=True)
    institution_type: Mapped[Optional[InstitutionType]] = mapped_column(
        Enum(InstitutionType, native_enum=False, length=32)
    )
    approval_status: Mapped[ApprovalStatus] = mapped_column(
        Enum(ApprovalStatus, native_enum=False, length=32),
        default=ApprovalStatus.PENDING,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=False)
    owner_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        GUID, ForeignKey("user.id", ondelete="SET NULL"), index=True
    )
    created_at: Mapped[datetime] = mapped_column(TIMESTAMPAware, default=now_utc)
