"""
Course recommendation service.

Loads candidates and enrollment statistics through the repositories and ranks
them with the scoring functions in ``core.recommendations.courses``.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import List, Optional, Sequence, Set
from uuid import UUID

from ..auth.models import User
from ..config import RecommendationConfig, get_config
from ..errors import NotFoundError, ValidationError
from ..logging import get_logger, log_performance
from ..models.course import Course
from ..models.enums import CourseStatus
from ..recommendations.base import Recommendation, top
from ..recommendations.courses import (
    COLLABORATIVE,
    CONTENT,
    REASON_MOST_POPULAR,
    REASON_TRENDING,
    SKILL,
    TRENDING,
    collaborative_scores,
    combine_recommendations,
    content_course_score,
    count_keyword_matches,
    count_tag_matches,
    personalized_course_score,
    similar_course_score,
    skill_course_score,
    target_course_level,
    trending_score,
)
from ..repositories.course_repository import CourseRepository
from ..repositories.profile_repository import ProfileRepository

logger = get_logger(__name__)


class CourseRecommendationType(str, Enum):
    PERSONALIZED = "personalized"
    POPULAR = "popular"
    SIMILAR = "similar"
    TRENDING = "trending"
    BASED_ON_SKILLS = "based_on_skills"
    BASED_ON_ENROLLMENT = "based_on_enrollment"
    HYBRID = "hybrid"

    @classmethod
    def parse(cls, value: Optional[str]) -> "CourseRecommendationType":
        """Resolve a query value, falling back to personalized."""
        try:
            return cls(value) if value else cls.PERSONALIZED
        except ValueError:
            return cls.PERSONALIZED


class CourseRecommendationService:
    """Ranks courses for a student."""

    def __init__(
        self,
        course_repository: CourseRepository,
        profile_repository: ProfileRepository,
        config: Optional[RecommendationConfig] = None,
    ) -> None:
        self.course_repository = course_repository
        self.profile_repository = profile_repository
        self.config = config or get_config().recommendation

    def resolve_limit(self, limit: Optional[int]) -> int:
        if not limit or limit < 1:
            return self.config.default_limit
        return min(limit, self.config.max_limit)

    @log_performance("course_recommendations")
    async def recommend(
        self,
        user: User,
        recommendation_type: CourseRecommendationType = CourseRecommendationType.PERSONALIZED,
        limit: Optional[int] = None,
        course_id: Optional[UUID] = None,
    ) -> List[Recommendation]:
        """
        Recommend courses the user is not enrolled in.

        Args:
            user: Student the recommendations are for
            recommendation_type: Strategy used to pick and rank courses
            limit: Maximum number of recommendations
            course_id: Reference course, required for ``similar``

        Returns:
            Recommendations, best first

        Raises:
            ValidationError: If ``similar`` is requested without a course
            NotFoundError: If the reference course does not exist
        """
        limit = self.resolve_limit(limit)
        enrolled = await self.course_repository.get_enrolled_course_ids(user.id)

        if recommendation_type == CourseRecommendationType.POPULAR:
            results = await self._popular(enrolled, limit)
        elif recommendation_type == CourseRecommendationType.SIMILAR:
            if course_id is None:
                raise ValidationError(
                    "course_id is required for similar recommendations"
                )
            results = await self._similar(course_id, enrolled, limit)
        elif recommendation_type == CourseRecommendationType.TRENDING:
            results = await self._trending(enrolled, limit)
        elif recommendation_type == CourseRecommendationType.BASED_ON_SKILLS:
            results = top(await self._skill_based(user.id, enrolled), limit)
        elif recommendation_type == CourseRecommendationType.BASED_ON_ENROLLMENT:
            results = top(await self._collaborative(user.id), limit)
        elif recommendation_type == CourseRecommendationType.HYBRID:
            results = await self._hybrid(user.id, enrolled, limit)
        else:
            results = await self._personalized(user.id, enrolled, limit)

        logger.info(
            "Course recommendations generated",
            user_id=str(user.id),
            type=recommendation_type.value,
            count=len(results),
        )
        return results

    async def _skills_for(self, user_id: UUID) -> List[str]:
        profile = await self.profile_repository.get_by_user_id(user_id)
        return list(profile.skills or []) if profile else []

    async def _personalized(
        self, user_id: UUID, enrolled: Set[UUID], limit: int
    ) -> List[Recommendation]:
        profile = await self.profile_repository.get_by_user_id(user_id)
        skills = list(profile.skills or []) if profile else []
        target_level = target_course_level(profile.experience_level if profile else None)

        candidates = [
            course
            for course in await self.course_repository.get_active_courses(enrolled)
            if course.level == target_level
            or count_tag_matches(course.tags, skills) > 0
            or count_keyword_matches(f"{course.title} {course.description or ''}", skills) > 0
        ]
        counts = await self.course_repository.get_enrollment_counts(
            [course.id for course in candidates]
        )

        return top(
            [
                personalized_course_score(
                    course, skills, target_level, counts.get(course.id, 0)
                )
                for course in candidates
            ],
            limit,
        )

    async def _popular(self, enrolled: Set[UUID], limit: int) -> List[Recommendation]:
        popular = await self.course_repository.get_popular_courses(limit, enrolled)
        return [
            Recommendation(
                item=course,
                score=float(count),
                reason=REASON_MOST_POPULAR,
                source="popular",
            )
            for course, count in popular
        ]

    async def _similar(
        self, course_id: UUID, enrolled: Set[UUID], limit: int
    ) -> List[Recommendation]:
        target = await self.course_repository.get_by_id(course_id)
        if target is None:
            raise NotFoundError(f"Course {course_id} not found")

        target_tags = {tag.lower() for tag in target.tags or []}
        candidates = [
            course
            for course in await self.course_repository.get_active_courses(
                enrolled | {course_id}
            )
            if course.level == target.level
            or (course.category and course.category == target.category)
            or target_tags.intersection(tag.lower() for tag in course.tags or [])
        ]
        return top([similar_course_score(target, c) for c in candidates], limit)

    async def _trending_scores(self, enrolled: Set[UUID]) -> List[Recommendation]:
        since = datetime.now(timezone.utc) - timedelta(
            days=self.config.trending_window_days
        )
        recent = await self.course_repository.get_enrollment_counts(since=since)
        course_ids = [cid for cid in recent if cid not in enrolled]
        if not course_ids:
            return []

        totals = await self.course_repository.get_enrollment_counts(course_ids)
        courses = await self.course_repository.get_courses_by_ids(course_ids)
        return [
            Recommendation(
                item=course,
                score=trending_score(recent[course.id], totals.get(course.id, 0)),
                reason=REASON_TRENDING,
                source=TRENDING,
            )
            for course in courses
            if course.status == CourseStatus.ACTIVE
        ]

    async def _trending(self, enrolled: Set[UUID], limit: int) -> List[Recommendation]:
        return top(await self._trending_scores(enrolled), limit)

    async def _skill_based(
        self, user_id: UUID, enrolled: Set[UUID]
    ) -> List[Recommendation]:
        skills = await self._skills_for(user_id)
        if not skills:
            return []

        candidates = await self.course_repository.get_active_courses(enrolled)
        scored = [skill_course_score(course, skills) for course in candidates]
        return [rec for rec in scored if rec.score > 0]

    async def _collaborative(self, user_id: UUID) -> List[Recommendation]:
        co_enrollments, similar_students = (
            await self.course_repository.get_co_enrollments(user_id)
        )
        if not co_enrollments:
            return []

        courses = {
            course.id: course
            for course in await self.course_repository.get_courses_by_ids(
                list(co_enrollments)
            )
            if course.status == CourseStatus.ACTIVE
        }
        return collaborative_scores(courses, co_enrollments, similar_students)

    async def _content_based(
        self, user_id: UUID, enrolled: Set[UUID]
    ) -> List[Recommendation]:
        completed: Sequence[Course] = await self.course_repository.get_completed_courses(
            user_id
        )
        if not completed:
            return []

        candidates = await self.course_repository.get_active_courses(enrolled)
        scored = [content_course_score(course, completed) for course in candidates]
        return [rec for rec in scored if rec.score > 0]

    async def _hybrid(
        self, user_id: UUID, enrolled: Set[UUID], limit: int
    ) -> List[Recommendation]:
        groups = [
            (SKILL, await self._skill_based(user_id, enrolled)),
            (COLLABORATIVE, await self._collaborative(user_id)),
            (CONTENT, await self._content_based(user_id, enrolled)),
            (TRENDING, await self._trending_scores(enrolled)),
        ]
        return combine_recommendations(groups, limit)
