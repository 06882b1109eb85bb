"""
Analytics repository for YouthConnect.

This module provides the counting and grouping queries behind platform and
per-role analytics. Every query accepts an optional ``DateRange`` applied to
the row's creation timestamp.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.models import User
from ..models.course import Course, CourseEnrollment
from ..models.job import JobApplication, JobOffer
from ..models.organization import Company, Institution
from ..models.profile import Profile


@dataclass(frozen=True)
class DateRange:
    """Inclusive creation-time window; either bound may be open."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None


def _timestamp(model: Any) -> Any:
    if model is JobApplication:
        return JobApplication.applied_at
    if model is CourseEnrollment:
        return CourseEnrollment.enrolled_at
    return model.created_at


def _key(value: Any) -> str:
    """Group key as a plain string; enum members use their value."""
    if value is None:
        return "Unknown"
    return str(getattr(value, "value", value))


class AnalyticsRepository:
    """Aggregate queries across the platform tables."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _in_range(self, model: Any, date_range: Optional[DateRange]) -> List[Any]:
        if date_range is None:
            return []
        column = _timestamp(model)
        conditions = []
        if date_range.start is not None:
            conditions.append(column >= date_range.start)
        if date_range.end is not None:
            conditions.append(column <= date_range.end)
        return conditions

    async def count(
        self,
        model: Any,
        *conditions: Any,
        date_range: Optional[DateRange] = None,
    ) -> int:
        """
        Count rows of a model.

        Args:
            model: Mapped class to count
            *conditions: Extra WHERE clauses
            date_range: Optional creation-time window

        Returns:
            Number of matching rows
        """
        stmt = (
            select(func.count())
            .select_from(model)
            .where(*conditions, *self._in_range(model, date_range))
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def count_by(
        self,
        column: Any,
        *conditions: Any,
        date_range: Optional[DateRange] = None,
    ) -> Dict[str, int]:
        """
        Count rows grouped by one column.

        Args:
            column: Mapped column to group on
            *conditions: Extra WHERE clauses
            date_range: Optional creation-time window

        Returns:
            Mapping of group value to row count; NULL groups are "Unknown"
        """
        model = column.class_
        stmt = (
            select(column, func.count())
            .where(*conditions, *self._in_range(model, date_range))
            .group_by(column)
        )
        result = await self.session.execute(stmt)
        counts: Dict[str, int] = {}
        for value, total in result.all():
            key = _key(value)
            counts[key] = counts.get(key, 0) + int(total)
        return counts

    async def application_dates(
        self, date_range: Optional[DateRange] = None
    ) -> List[datetime]:
        """Timestamps of every job application in the window."""
        stmt = select(JobApplication.applied_at).where(
            *self._in_range(JobApplication, date_range)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def applications_by_experience_level(
        self, date_range: Optional[DateRange] = None
    ) -> Dict[str, int]:
        """Applications grouped by the experience level their job asks for."""
        stmt = (
            select(JobOffer.experience_level, func.count())
            .select_from(JobApplication)
            .join(JobOffer, JobOffer.id == JobApplication.job_offer_id)
            .where(*self._in_range(JobApplication, date_range))
            .group_by(JobOffer.experience_level)
        )
        result = await self.session.execute(stmt)
        counts: Dict[str, int] = {}
        for value, total in result.all():
            key = _key(value)
            counts[key] = counts.get(key, 0) + int(total)
        return counts

    async def top_hiring_companies(
        self, limit: int = 10, date_range: Optional[DateRange] = None
    ) -> List[Tuple[str, int]]:
        """Companies ranked by applications received."""
        applications = func.count(JobApplication.id).label("applications")
        stmt = (
            select(Company.name, applications)
            .select_from(JobApplication)
            .join(JobOffer, JobOffer.id == JobApplication.job_offer_id)
            .join(Company, Company.id == JobOffer.company_id)
            .where(*self._in_range(JobApplication, date_range))
            .group_by(Company.name)
            .order_by(applications.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(name, int(total)) for name, total in result.all()]

    async def top_courses(
        self, limit: int = 10, date_range: Optional[DateRange] = None
    ) -> List[Tuple[str, int, int]]:
        """
        Courses ranked by enrollments.

        Returns:
            (course title, enrollments, completions) tuples
        """
        enrollments = func.count(CourseEnrollment.id).label("enrollments")
        completions = func.sum(
            case((CourseEnrollment.completed_at.is_not(None), 1), else_=0)
        ).label("completions")
        stmt = (
            select(Course.title, enrollments, completions)
            .select_from(CourseEnrollment)
            .join(Course, Course.id == CourseEnrollment.course_id)
            .where(*self._in_range(CourseEnrollment, date_range))
            .group_by(Course.id, Course.title)
            .order_by(enrollments.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [
            (title, int(total), int(done or 0)) for title, total, done in result.all()
        ]

    async def top_values(
        self,
        column: Any,
        limit: int = 10,
        date_range: Optional[DateRange] = None,
    ) -> List[Tuple[str, int]]:
        """Most frequent values of a column, NULLs grouped as "Unknown"."""
        counts = await self.count_by(column, date_range=date_range)
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return ranked[:limit]

    async def birth_dates(
        self, date_range: Optional[DateRange] = None
    ) -> List[Optional[date]]:
        """Birth dates of every profile in the window, None when unknown."""
        stmt = select(Profile.birth_date).where(*self._in_range(Profile, date_range))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def users_by_role(
        self, date_range: Optional[DateRange] = None
    ) -> Dict[str, int]:
        return await self.count_by(User.role, date_range=date_range)

    async def get_company_for_owner(self, owner_id: UUID) -> Optional[Company]:
        stmt = select(Company).where(Company.owner_id == owner_id).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_institution_for_owner(self, owner_id: UUID) -> Optional[Institution]:
        stmt = select(Institution).where(Institution.owner_id == owner_id).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def average_course_rating(self, institution_id: UUID) -> float:
        """Mean rating of an institution's courses, unrated courses as 0."""
        stmt = select(func.avg(func.coalesce(Course.rating, 0.0))).where(
            Course.institution_id == institution_id
        )
        result = await self.session.execute(stmt)
        average = result.scalar_one_or_none()
        return float(average) if average is not None else 0.0
