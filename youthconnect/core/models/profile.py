"""Youth profile table: the inputs personal recommendations are scored on."""

import uuid
from datetime import date, datetime
from typing import List, Optional

from fastapi_users_db_sqlalchemy.generics import GUID, TIMESTAMPAware, now_utc
from sqlalchemy import JSON, Date, Enum, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from ..database.models import Base
from .enums import ContractType, EducationLevel, ExperienceLevel, WorkModality


class Profile(Base):
    """Personal and career data attached to one user."""

    __tablename__ = "profile"

    id: Mapped[uuid.UUID] = mapped_column(GUID, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        GUID, ForeignKey("user.id", ondelete="CASCADE"), unique=True, index=True
    )
    first_name: Mapped[Optional[str]] = mapped_column(String(100))
    last_name: Mapped[Optional[str]] = mapped_column(String(100))
    city: Mapped[Optional[str]] = mapped_column(String(120))
    birth_date: Mapped[Optional[date]] = mapped_column(Date)
    education_level: Mapped[Optional[EducationLevel]] = mapped_column(
        Enum(EducationLevel, native_enum=False, length=32)
    )
    experience_level: Mapped[Optional[ExperienceLevel]] = mapped_column(
        Enum(ExperienceLevel, native_enum=False, length=32)
    )
    skills: Mapped[List[str]] = mapped_column(JSON, default=list)
    interests: Mapped[List[str]] = mapped_column(JSON, default=list)
    industry: Mapped[Optional[str]] = mapped_column(String(120))
    salary_expectation: Mapped[Optional[float]] = mapped_column(Float)
    work_modality: Mapped[Optional[WorkModality]] = mapped_column(
        Enum(WorkModality, native_enum=False, length=32)
    )
    contract_type: Mapped[Optional[ContractType]] = mapped_column(
        Enum(ContractType, native_enum=False, length=32)
    )
    created_at: Mapped[datetime] = mapped_column(TIMESTAMPAware, default=now_utc)
