"""
Course repository for YouthConnect.

This module provides the catalogue and enrollment queries that course
recommendations are computed from.
"""

from datetime import datetime
from typing import Collection, Dict, List, Optional, Set, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.course import Course, CourseEnrollment
from ..models.enums import CourseStatus
from .base import BaseRepository


class CourseRepository(BaseRepository[Course]):
    """Course repository with enrollment aggregates."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Course)

    async def get_active_courses(
        self,
        exclude_ids: Collection[UUID] = (),
        limit: Optional[int] = None,
    ) -> List[Course]:
        """
        Get published courses.

        Args:
            exclude_ids: Course IDs to leave out
            limit: Maximum number of courses to return

        Returns:
            Active courses, newest first
        """
        stmt = (
            select(Course)
            .where(Course.status == CourseStatus.ACTIVE)
            .order_by(Course.created_at.desc())
        )
        if exclude_ids:
            stmt = stmt.where(Course.id.not_in(list(exclude_ids)))
        if limit:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_courses_by_ids(self, course_ids: Collection[UUID]) -> List[Course]:
        if not course_ids:
            return []
        stmt = select(Course).where(Course.id.in_(list(course_ids)))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_enrolled_course_ids(self, student_id: UUID) -> Set[UUID]:
        """IDs of every course a student is enrolled in."""
        stmt = select(CourseEnrollment.course_id).where(
            CourseEnrollment.student_id == student_id
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def get_completed_courses(self, student_id: UUID) -> List[Course]:
        """Courses a student has finished."""
        stmt = (
            select(Course)
            .join(CourseEnrollment, CourseEnrollment.course_id == Course.id)
            .where(
                CourseEnrollment.student_id == student_id,
                CourseEnrollment.completed_at.is_not(None),
            )
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_enrollment_counts(
        self,
        course_ids: Optional[Collection[UUID]] = None,
        since: Optional[datetime] = None,
    ) -> Dict[UUID, int]:
        """
        Count enrollments per course.

        Args:
            course_ids: Restrict to these courses, all courses when None
            since: Only count enrollments made at or after this time

        Returns:
            Mapping of course ID to enrollment count; courses without
            enrollments are absent
        """
        stmt = select(CourseEnrollment.course_id, func.count()).group_by(
            CourseEnrollment.course_id
        )
        if course_ids is not None:
            if not course_ids:
                return {}
            stmt = stmt.where(CourseEnrollment.course_id.in_(list(course_ids)))
        if since is not None:
            stmt = stmt.where(CourseEnrollment.enrolled_at >= since)

        result = await self.session.execute(stmt)
        return {course_id: int(count) for course_id, count in result.all()}

    async def get_popular_courses(
        self, limit: int, exclude_ids: Collection[UUID] = ()
    ) -> List[Tuple[Course, int]]:
        """
        Get active courses ordered by total enrollments.

        Returns:
            (course, enrollment count) pairs, most enrolled first
        """
        enrollments = func.count(CourseEnrollment.id).label("enrollments")
        stmt = (
            select(Course, enrollments)
            .outerjoin(CourseEnrollment, CourseEnrollment.course_id == Course.id)
            .where(Course.status == CourseStatus.ACTIVE)
            .group_by(Course.id)
            .order_by(enrollments.desc(), Course.created_at.desc())
        )
        if exclude_ids:
            stmt = stmt.where(Course.id.not_in(list(exclude_ids)))
        stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return [(course, int(count)) for course, count in result.all()]

    async def get_co_enrollments(self, student_id: UUID) -> Tuple[Dict[UUID, int], int]:
        """
        Find what students who share a course with this student also took.

        Returns:
            Tuple of (similar-student count per course ID the student is not
            enrolled in, number of similar students)
        """
        own_courses = select(CourseEnrollment.course_id).where(
            CourseEnrollment.student_id == student_id
        )
        similar_students = (
            select(CourseEnrollment.student_id)
            .where(
                CourseEnrollment.course_id.in_(own_courses),
                CourseEnrollment.student_id != student_id,
            )
            .distinct()
        )

        count_result = await self.session.execute(
            select(func.count()).select_from(similar_students.subquery())
        )
        similar_count = int(count_result.scalar_one())
        if similar_count == 0:
            return {}, 0

        stmt = (
            select(CourseEnrollment.course_id, func.count())
            .where(
                CourseEnrollment.student_id.in_(similar_students),
                CourseEnrollment.course_id.not_in(own_courses),
            )
            .group_by(CourseEnrollment.course_id)
        )
        result = await self.session.execute(stmt)
        return {course_id: int(count) for course_id, count in result.all()}, similar_count
