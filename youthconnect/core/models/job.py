"""Job offers published by companies and the applications they receive."""

import uuid
from datetime import datetime
from typing import List, Optional

from fastapi_users_db_sqlalchemy.generics import GUID, TIMESTAMPAware, now_utc
from sqlalchemy import JSON, Boolean, Enum, Float, ForeignKey, String, Text
from sqlalchemy import UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ..database.models import Base
from .enums import (
    ApplicationStatus,
    ContractType,
    EducationLevel,
    ExperienceLevel,
    JobStatus,
    WorkModality,
)


class JobOffer(Base):
    __tablename__ = "job_offer"

    id: Mapped[uuid.UUID] = mapped_column(GUID, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[Optional[str]] = mapped_column(Text)
    skills_required: Mapped[List[str]] = mapped_column(JSON, default=list)
    salary_min: Mapped[Optional[float]] = mapped_column(Float)
    salary_max: Mapped[Optional[float]] = mapped_column(Float)
    contract_type: Mapped[Optional[ContractType]] = mapped_column(
        Enum(ContractType, native_enum=False, length=32)
    )
    work_modality: Mapped[Optional[WorkModality]] = mapped_column(
        Enum(WorkModality, native_enum=False, length=32)
    )
    location: Mapped[Optional[str]] = mapped_column(String(200))
    experience_level: Mapped[Optional[ExperienceLevel]] = mapped_column(
        Enum(ExperienceLevel, native_enum=False, length=32), index=True
    )
    education_level: Mapped[Optional[EducationLevel]] = mapped_column(
        Enum(EducationLevel, native_enum=False, length=32)
    )
    status: Mapped[JobStatus] = mapped_column(
        Enum(JobStatus, native_enum=False, length=32),
        default=JobStatus.DRAFT,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    company_id: Mapped[uuid.UUID] = mapped_column(
        GUID, ForeignKey("company.id", ondelete="CASCADE"), index=True
    )
    created_at: Mapped[datetime] = mapped_column(TIMESTAMPAware, default=now_utc)


class JobApplication(Base):
    __tablename__ = "job_application"
    __table_args__ = (UniqueConstraint("job_offer_id", "applicant_id"),)

    id: Mapped[uuid.UUID] = mapped_column(GUID, primary_key=True, default=uuid.uuid4)
    job_offer_id: Mapped[uuid.UUID] = mapped_column(
        GUID, ForeignKey("job_offer.id", ondelete="CASCADE"), index=True
    )
    applicant_id: Mapped[uuid.UUID] = mapped_column(
        GUID, ForeignKey("user.id", ondelete="CASCADE"), index=True
    )
    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(ApplicationStatus, native_enum=False, length=32),
        default=ApplicationStatus.SENT,
        index=True,
    )
    applied_at: Mapped[datetime] = mapped_column(TIMESTAMPAware, default=now_utc)
