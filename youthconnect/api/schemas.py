"""
Response schemas for recommendation, discovery, analytics and storage routes.

Builders at the bottom turn scored ``Recommendation`` objects into these
schemas.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from ..core.recommendations.base import Recommendation
from ..core.recommendations.jobs import match_percentage


class CourseRecommendationOut(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    level: str
    tags: List[str] = []
    rating: Optional[float] = None
    module_count: int = 0
    score: float
    reason: str
    confidence: float
    source: str


class JobRecommendationOut(BaseModel):
    id: UUID
    title: str
    company: str
    location: Optional[str] = None
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    contract_type: Optional[str] = None
    work_modality: Optional[str] = None
    experience_level: Optional[str] = None
    skills_required: List[str] = []
    score: float
    match_percentage: int
    reasons: List[str] = []
    created_at: Optional[datetime] = None


class StartupOut(BaseModel):
    """Public view of a startup."""

    id: UUID
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    business_stage: str
    website: Optional[str] = None
    municipality: Optional[str] = None
    department: Optional[str] = None
    employees: Optional[int] = None
    annual_revenue: Optional[float] = None
    views_count: int = 0
    rating: Optional[float] = None
    created_at: Optional[datetime] = None


class RankedStartupOut(StartupOut):
    score: float
    reason: str


class FacetValue(BaseModel):
    name: str
    count: int


class DiscoveryOut(BaseModel):
    startups: List[StartupOut]
    total: int
    limit: int
    offset: int
    facets: Dict[str, List[FacetValue]]
    trending: List[RankedStartupOut]
    recommendations: List[RankedStartupOut] = []


class DiscoveryAnalyticsOut(BaseModel):
    total_startups: int
    category_stats: List[FacetValue]
    stage_stats: List[FacetValue]
    location_stats: List[FacetValue]
    department_stats: List[FacetValue]
    recent_activity: int = Field(..., description="Startups created in the last recent_activity_days")
    recent_activity_days: int


class PresignedUploadRequest(BaseModel):
    content_type: str = Field(..., min_length=3, max_length=255)
    filename: str = Field(..., min_length=1, max_length=255)


class PresignedUploadOut(BaseModel):
    upload_url: str
    bucket: str
    key: str
    public_url: str
    expires_in: int


class PresignedDownloadOut(BaseModel):
    url: str
    bucket: str
    key: str
    expires_in: int


class StorageStatsOut(BaseModel):
    buckets: Dict[str, int]
    total_bytes: int


def _enum_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(getattr(value, "value", value))


def course_out(rec: Recommendation) -> CourseRecommendationOut:
    course = rec.item
    return CourseRecommendationOut(
        id=course.id,
        title=course.title,
        description=course.description,
        category=course.category,
        level=_enum_value(course.level) or "",
        tags=list(course.tags or []),
        rating=course.rating,
        module_count=course.module_count or 0,
        score=round(rec.score, 2),
        reason=rec.reason,
        confidence=round(rec.confidence, 2),
        source=rec.source,
    )


def job_out(rec: Recommendation) -> JobRecommendationOut:
    job = rec.item
    return JobRecommendationOut(
        id=job.id,
        title=job.title,
        company=rec.extra.get("company", ""),
        location=job.location,
        salary_min=job.salary_min,
        salary_max=job.salary_max,
        contract_type=_enum_value(job.contract_type),
        work_modality=_enum_value(job.work_modality),
        experience_level=_enum_value(job.experience_level),
        skills_required=list(job.skills_required or []),
        score=round(rec.score, 2),
        match_percentage=match_percentage(rec),
        reasons=rec.reasons,
        created_at=job.created_at,
    )


def startup_out(startup: Any) -> StartupOut:
    return StartupOut(
        id=startup.id,
        name=startup.name,
        description=startup.description,
        category=startup.category,
        subcategory=startup.subcategory,
        business_stage=_enum_value(startup.business_stage) or "",
        website=startup.website,
        municipality=startup.municipality,
        department=startup.department,
        employees=startup.employees,
        annual_revenue=startup.annual_revenue,
        views_count=startup.views_count or 0,
        rating=startup.rating,
        created_at=startup.created_at,
    )


def ranked_startup_out(rec: Recommendation) -> RankedStartupOut:
    return RankedStartupOut(
        **startup_out(rec.item).model_dump(),
        score=round(rec.score, 4),
        reason=rec.reason,
    )
