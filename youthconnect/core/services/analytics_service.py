"""
Analytics aggregation for YouthConnect.

``PlatformAnalyticsService`` builds the administrator report, section by
section. ``RoleAnalyticsService`` builds the smaller summary each role sees
about its own activity.
"""

from collections import Counter
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional

from sqlalchemy import select

from ..auth.models import User
from ..errors import NotFoundError, ValidationError
from ..logging import get_logger, log_performance
from ..models.course import Course, CourseEnrollment
from ..models.entrepreneurship import Entrepreneurship
from ..models.enums import ApplicationStatus, JobStatus, UserRole
from ..models.job import JobApplication, JobOffer
from ..models.message import Message
from ..models.organization import Company, Institution
from ..models.profile import Profile
from ..recommendations.base import as_utc
from ..repositories.analytics_repository import AnalyticsRepository, DateRange

logger = get_logger(__name__)

OVERVIEW = "overview"
JOB_PLACEMENT = "job_placement"
COURSE_COMPLETION = "course_completion"
ENTREPRENEURSHIP = "entrepreneurship"
DEMOGRAPHICS = "demographics"

SECTIONS = (OVERVIEW, JOB_PLACEMENT, COURSE_COMPLETION, ENTREPRENEURSHIP, DEMOGRAPHICS)
TOP_N = 10


def percentage(part: int, whole: int) -> float:
    """part / whole as a percentage with two decimals, 0 for an empty whole."""
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, 2)


def age_on(birth_date: date, today: date) -> int:
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def age_group(birth_date: Optional[date], today: Optional[date] = None) -> str:
    """Bucket a birth date into the reporting age groups."""
    if birth_date is None:
        return "Unknown"
    age = age_on(birth_date, today or date.today())
    if 18 <= age <= 24:
        return "18-24"
    if 25 <= age <= 34:
        return "25-34"
    if 35 <= age <= 44:
        return "35-44"
    if 45 <= age <= 54:
        return "45-54"
    if age >= 55:
        return "55+"
    return "Unknown"


def parse_sections(value: Optional[str]) -> List[str]:
    """
    Parse a comma separated list of report sections.

    An empty value selects every section.

    Raises:
        ValidationError: If an unknown section is named
    """
    if not value:
        return list(SECTIONS)

    requested = [part.strip().lower() for part in value.split(",") if part.strip()]
    unknown = [part for part in requested if part not in SECTIONS]
    if unknown:
        raise ValidationError(
            f"Unknown analytics sections: {', '.join(unknown)}",
            details={"allowed": list(SECTIONS)},
        )
    return list(dict.fromkeys(requested))


def _ranked(pairs: Iterable[Any], *names: str) -> List[Dict[str, Any]]:
    return [dict(zip(names, row)) for row in pairs]


class PlatformAnalyticsService:
    """Platform-wide report for administrators."""

    def __init__(self, repository: AnalyticsRepository):
        self.repository = repository
        self._builders: Dict[str, Callable[[Optional[DateRange]], Any]] = {
            OVERVIEW: self.get_overview,
            JOB_PLACEMENT: self.get_job_placement,
            COURSE_COMPLETION: self.get_course_completion,
            ENTREPRENEURSHIP: self.get_entrepreneurship,
            DEMOGRAPHICS: self.get_demographics,
        }

    @log_performance("platform_analytics")
    async def get_analytics(
        self,
        date_range: Optional[DateRange] = None,
        sections: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Build the requested report sections.

        Args:
            date_range: Optional window on creation timestamps
            sections: Section names, every section when omitted

        Returns:
            Mapping of section name to section data
        """
        if date_range is not None:
            # Naive bounds are read as UTC, like the stored timestamps
            date_range = DateRange(
                start=as_utc(date_range.start) if date_range.start else None,
                end=as_utc(date_range.end) if date_range.end else None,
            )
            if date_range.start and date_range.end and date_range.start > date_range.end:
                raise ValidationError("start_date must be before end_date")

        report: Dict[str, Any] = {}
        for section in sections or SECTIONS:
            report[section] = await self._builders[section](date_range)
        return report

    async def get_overview(self, date_range: Optional[DateRange] = None) -> Dict[str, int]:
        count = self.repository.count
        return {
            "total_users": await count(User, date_range=date_range),
            "total_companies": await count(Company, date_range=date_range),
            "total_institutions": await count(Institution, date_range=date_range),
            "total_jobs": await count(JobOffer, date_range=date_range),
            "total_applications": await count(JobApplication, date_range=date_range),
            "total_courses": await count(Course, date_range=date_range),
            "total_enrollments": await count(CourseEnrollment, date_range=date_range),
            "total_messages": await count(Message, date_range=date_range),
            "total_startups": await count(Entrepreneurship, date_range=date_range),
        }

    async def get_job_placement(
        self, date_range: Optional[DateRange] = None
    ) -> Dict[str, Any]:
        by_status = await self.repository.count_by(
            JobApplication.status, date_range=date_range
        )
        total = sum(by_status.values())
        hired = by_status.get(ApplicationStatus.HIRED.value, 0)

        months = Counter(
            applied_at.strftime("%Y-%m")
            for applied_at in await self.repository.application_dates(date_range)
        )

        return {
            "total_applications": total,
            "applications_by_status": by_status,
            "applications_by_month": [
                {"month": month, "count": months[month]} for month in sorted(months)
            ],
            "placement_rate": percentage(hired, total),
            "top_hiring_companies": _ranked(
                await self.repository.top_hiring_companies(TOP_N, date_range),
                "company",
                "count",
            ),
            "jobs_by_experience_level": await self.repository.applications_by_experience_level(
                date_range
            ),
        }

    async def get_course_completion(
        self, date_range: Optional[DateRange] = None
    ) -> Dict[str, Any]:
        total = await self.repository.count(CourseEnrollment, date_range=date_range)
        completed = await self.repository.count(
            CourseEnrollment,
            CourseEnrollment.completed_at.is_not(None),
            date_range=date_range,
        )
        return {
            "total_enrollments": total,
            "completed_courses": completed,
            "completion_rate": percentage(completed, total),
            "top_courses": _ranked(
                await self.repository.top_courses(TOP_N, date_range),
                "course",
                "enrollments",
                "completions",
            ),
        }

    async def get_entrepreneurship(
        self, date_range: Optional[DateRange] = None
    ) -> Dict[str, Any]:
        return {
            "total_startups": await self.repository.count(
                Entrepreneurship, date_range=date_range
            ),
            "public_startups": await self.repository.count(
                Entrepreneurship,
                Entrepreneurship.is_public.is_(True),
                Entrepreneurship.is_active.is_(True),
                date_range=date_range,
            ),
            "startups_by_stage": await self.repository.count_by(
                Entrepreneurship.business_stage, date_range=date_range
            ),
            "top_categories": _ranked(
                await self.repository.top_values(
                    Entrepreneurship.category, TOP_N, date_range
                ),
                "category",
                "count",
            ),
        }

    async def get_demographics(
        self, date_range: Optional[DateRange] = None, today: Optional[date] = None
    ) -> Dict[str, Any]:
        ages = Counter(
            age_group(birth_date, today)
            for birth_date in await self.repository.birth_dates(date_range)
        )
        return {
            "users_by_age": [
                {"age_group": group, "count": count} for group, count in ages.items()
            ],
            "users_by_location": _ranked(
                await self.repository.top_values(Profile.city, TOP_N, date_range),
                "location",
                "count",
            ),
            "users_by_role": await self.repository.users_by_role(date_range),
            "users_by_education": await self.repository.count_by(
                Profile.education_level, date_range=date_range
            ),
            "users_by_experience": await self.repository.count_by(
                Profile.experience_level, date_range=date_range
            ),
        }


class RoleAnalyticsService:
    """Activity summary for the signed-in user's role."""

    def __init__(
        self,
        repository: AnalyticsRepository,
        platform: Optional[PlatformAnalyticsService] = None,
    ):
        self.repository = repository
        self.platform = platform or PlatformAnalyticsService(repository)

    async def for_user(self, user: User) -> Dict[str, Any]:
        """
        Summarize activity relevant to the user's role.

        Raises:
            NotFoundError: If a company or institution user owns no
                organization
        """
        if user.is_superuser or user.role == UserRole.SUPERADMIN:
            overview = await self.platform.get_analytics(sections=[OVERVIEW])
            return {"role": UserRole.SUPERADMIN.value, **overview}
        if user.role == UserRole.COMPANIES:
            return {"role": user.role.value, **await self._company(user)}
        if user.role == UserRole.INSTITUTION:
            return {"role": user.role.value, **await self._institution(user)}
        return {"role": UserRole.YOUTH.value, **await self._youth(user)}

    async def _youth(self, user: User) -> Dict[str, Any]:
        repo = self.repository
        return {
            "applications": await repo.count(
                JobApplication, JobApplication.applicant_id == user.id
            ),
            "applications_by_status": await repo.count_by(
                JobApplication.status, JobApplication.applicant_id == user.id
            ),
            "enrolled_courses": await repo.count(
                CourseEnrollment, CourseEnrollment.student_id == user.id
            ),
            "completed_courses": await repo.count(
                CourseEnrollment,
                CourseEnrollment.student_id == user.id,
                CourseEnrollment.completed_at.is_not(None),
            ),
            "startups": await repo.count(
                Entrepreneurship, Entrepreneurship.owner_id == user.id
            ),
        }

    async def _company(self, user: User) -> Dict[str, Any]:
        repo = self.repository
        company = await repo.get_company_for_owner(user.id)
        if company is None:
            raise NotFoundError("No company is registered for this user")

        company_jobs = select(JobOffer.id).where(JobOffer.company_id == company.id)
        by_status = await repo.count_by(
            JobApplication.status, JobApplication.job_offer_id.in_(company_jobs)
        )
        total_applications = sum(by_status.values())

        return {
            "company": company.name,
            "total_jobs": await repo.count(JobOffer, JobOffer.company_id == company.id),
            "active_jobs": await repo.count(
                JobOffer,
                JobOffer.company_id == company.id,
                JobOffer.status == JobStatus.ACTIVE,
            ),
            "total_applications": total_applications,
            "applications_by_status": by_status,
            "hire_rate": percentage(
                by_status.get(ApplicationStatus.HIRED.value, 0), total_applications
            ),
        }

    async def _institution(self, user: User) -> Dict[str, Any]:
        repo = self.repository
        institution = await repo.get_institution_for_owner(user.id)
        if institution is None:
            raise NotFoundError("No institution is registered for this user")

        own_course = CourseEnrollment.course_id.in_(
            select(Course.id).where(Course.institution_id == institution.id)
        )
        enrollments = await repo.count(CourseEnrollment, own_course)
        completions = await repo.count(
            CourseEnrollment, own_course, CourseEnrollment.completed_at.is_not(None)
        )

        return {
            "institution": institution.name,
            "total_courses": await repo.count(
                Course, Course.institution_id == institution.id
            ),
            "total_enrollments": enrollments,
            "completed_enrollments": completions,
            "completion_rate": percentage(completions, enrollments),
            "average_rating": round(
                await repo.average_course_rating(institution.id), 2
            ),
        }
