"""Course catalogue and enrollments."""

import uuid
from datetime import datetime
from typing import List, Optional

from fastapi_users_db_sqlalchemy.generics import GUID, TIMESTAMPAware, now_utc
from sqlalchemy import JSON, Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy import UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ..database.models import Base
from .enums import CourseLevel, CourseStatus


class Course(Base):
    __tablename__ = "course"

    id: Mapped[uuid.UUID] = mapped_column(GUID, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[Optional[str]] = mapped_column(Text)
    category: Mapped[Optional[str]] = mapped_column(String(120), index=True)
    level: Mapped[CourseLevel] = mapped_column(
        Enum(CourseLevel, native_enum=False, length=32), default=CourseLevel.BEGINNER
    )
    tags: Mapped[List[str]] = mapped_column(JSON, default=list)
    status: Mapped[CourseStatus] = mapped_column(
        Enum(CourseStatus, native_enum=False, length=32),
        default=CourseStatus.DRAFT,
        index=True,
    )
    module_count: Mapped[int] = mapped_column(Integer, default=0)
    rating: Mapped[Optional[float]] = mapped_column(Float)
    institution_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        GUID, ForeignKey("institution.id", ondelete="SET NULL"), index=True
    )
    created_at: Mapped[datetime] = mapped_column(TIMESTAMPAware, default=now_utc)


class CourseEnrollment(Base):
    """A student's enrollment in a course; completed once completed_at is set."""

    __tablename__ = "course_enrollment"
    __table_args__ = (UniqueConstraint("course_id", "student_id"),)

    id: Mapped[uuid.UUID] = mapped_column(GUID, primary_key=True, default=uuid.uuid4)
    course_id: Mapped[uuid.UUID] = mapped_column(
        GUID, ForeignKey("course.id", ondelete="CASCADE"), index=True
    )
    student_id: Mapped[uuid.UUID] = mapped_column(
        GUID, ForeignKey("user.id", ondelete="CASCADE"), index=True
    )
    progress: Mapped[float] = mapped_column(Float, default=0.0)
    enrolled_at: Mapped[datetime] = mapped_column(TIMESTAMPAware, default=now_utc)
    completed_at: Mapped[Optional[datetime]] = mapped_column(TIMESTAMPAware)
