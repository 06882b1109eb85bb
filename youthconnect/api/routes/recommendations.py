"""
Recommendation endpoints.

Course, job and startup rankings for the signed-in user.
"""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Query

from ...core.auth.fastapi_users import current_active_user
from ...core.auth.models import User
from ...core.dependencies import (
    get_course_recommendation_service,
    get_job_recommendation_service,
    get_startup_recommendation_service,
)
from ...core.services import (
    CourseRecommendationService,
    CourseRecommendationType,
    JobRecommendationService,
    StartupRecommendationService,
)
from ..models import ListMeta, ListResponse
from ..schemas import (
    CourseRecommendationOut,
    JobRecommendationOut,
    RankedStartupOut,
    course_out,
    job_out,
    ranked_startup_out,
)
from ..versioning import APIVersion, create_versioned_router

router = create_versioned_router(
    APIVersion.V1, prefix="/recommendations", tags=["recommendations"]
)


@router.get(
    "/courses",
    response_model=ListResponse[CourseRecommendationOut],
    summary="Recommended courses",
)
async def recommend_courses(
    type: Optional[str] = Query(
        None,
        description=(
            "personalized, popular, similar, trending, based_on_skills, "
            "based_on_enrollment or hybrid; unknown values mean personalized"
        ),
    ),
    limit: Optional[int] = Query(None, ge=1, le=100),
    course_id: Optional[UUID] = Query(None, description="Reference course for similar"),
    user: User = Depends(current_active_user),
    service: CourseRecommendationService = Depends(get_course_recommendation_service),
) -> ListResponse[CourseRecommendationOut]:
    """
    Rank courses the user is not enrolled in.

    ``similar`` requires ``course_id`` (400 without it, 404 when the course
    does not exist).
    """
    recommendation_type = CourseRecommendationType.parse(type)
    results = await service.recommend(user, recommendation_type, limit, course_id)
    return ListResponse(
        data=[course_out(rec) for rec in results],
        meta=ListMeta(type=recommendation_type.value, total=len(results)),
    )


@router.get(
    "/jobs",
    response_model=ListResponse[JobRecommendationOut],
    summary="Recommended job offers",
)
async def recommend_jobs(
    limit: Optional[int] = Query(None, ge=1, le=100),
    include_applied: bool = Query(False, description="Keep offers already applied to"),
    user: User = Depends(current_active_user),
    service: JobRecommendationService = Depends(get_job_recommendation_service),
) -> ListResponse[JobRecommendationOut]:
    """Match open job offers against the youth user's profile."""
    results = await service.recommend(user, limit, include_applied)
    return ListResponse(
        data=[job_out(rec) for rec in results],
        meta=ListMeta(type="profile_match", total=len(results)),
    )


@router.get(
    "/startups",
    response_model=ListResponse[RankedStartupOut],
    summary="Recommended startups",
)
async def recommend_startups(
    limit: Optional[int] = Query(None, ge=1, le=100),
    user: User = Depends(current_active_user),
    service: StartupRecommendationService = Depends(get_startup_recommendation_service),
) -> ListResponse[RankedStartupOut]:
    results = await service.recommend(user, limit)
    return ListResponse(
        data=[ranked_startup_out(rec) for rec in results],
        meta=ListMeta(type="interests", total=len(results)),
    )
