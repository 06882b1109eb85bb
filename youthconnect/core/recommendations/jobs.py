"""
Job recommendation scoring.

A job's score is a weighted sum of how well the youth profile fits each of
the offer's requirements, capped at 100.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from ..models.enums import (
    EDUCATION_RANK,
    EXPERIENCE_RANK,
    ContractType,
    EducationLevel,
    ExperienceLevel,
    WorkModality,
)
from ..models.job import JobOffer
from ..models.profile import Profile
from .base import Recommendation, days_since, normalize_terms, term_matches

SKILLS_WEIGHT = 40
EXPERIENCE_WEIGHT = 20
EDUCATION_WEIGHT = 15
LOCATION_WEIGHT = 10
INDUSTRY_BONUS = 5
MODALITY_WEIGHT = 5
CONTRACT_WEIGHT = 3
SALARY_WEIGHT = 2
RECENCY_BONUS = 2
RECENCY_DAYS = 7
MAX_SCORE = 100.0
MAX_REASONS = 3


def experience_score(
    user: Optional[ExperienceLevel], required: Optional[ExperienceLevel]
) -> float:
    """1.0 on a match, 0.8 when overqualified, less per missing level."""
    user_rank = EXPERIENCE_RANK.get(user, 0) if user else 0
    job_rank = EXPERIENCE_RANK.get(required, 0) if required else 0
    if user_rank == job_rank:
        return 1.0
    if user_rank > job_rank:
        return 0.8
    return max(0.3, 1.0 - (job_rank - user_rank) * 0.3)


def education_score(
    user: Optional[EducationLevel], required: Optional[EducationLevel]
) -> float:
    """1.0 on a match, 0.9 when overqualified, less per missing level."""
    user_rank = EDUCATION_RANK.get(user, 0) if user else 0
    job_rank = EDUCATION_RANK.get(required, 0) if required else 0
    if user_rank == job_rank:
        return 1.0
    if user_rank > job_rank:
        return 0.9
    return max(0.2, 1.0 - (job_rank - user_rank) * 0.4)


def location_score(user_location: Optional[str], job_location: Optional[str]) -> float:
    """
    Compare two "city, region, country" locations.

    Unknown locations are neutral (0.5). The same city scores 1.0 and any
    other shared part longer than two characters 0.7. Jobs advertised as
    remote score 0.8 for everyone else.
    """
    if not user_location or not job_location:
        return 0.5

    user_parts = [p.strip() for p in user_location.lower().split(",")]
    job_parts = [p.strip() for p in job_location.lower().split(",")]

    if user_parts[0] == job_parts[0]:
        return 1.0

    if any(len(part) > 2 and part in job_parts for part in user_parts):
        return 0.7

    lowered = job_location.lower()
    if "remote" in lowered or "remoto" in lowered:
        return 0.8

    return 0.3


def modality_score(user: Optional[WorkModality], job: Optional[WorkModality]) -> float:
    user = user or WorkModality.HYBRID
    if user == job:
        return 1.0
    if WorkModality.HYBRID in (user, job):
        return 0.7
    return 0.3


def contract_score(user: Optional[ContractType], job: Optional[ContractType]) -> float:
    user = user or ContractType.FULL_TIME
    if user == job:
        return 1.0
    if user == ContractType.FULL_TIME and job == ContractType.PART_TIME:
        return 0.6
    if user == ContractType.PART_TIME and job == ContractType.FULL_TIME:
        return 0.8
    return 0.5


def salary_score(expectation: float, salary_min: float, salary_max: float) -> float:
    """How close an expectation is to an offered range."""
    if salary_min <= expectation <= salary_max:
        return 1.0
    if expectation < salary_min:
        return max(0.3, 1.0 - (salary_min - expectation) / salary_min)
    return max(0.2, 1.0 - ((expectation - salary_max) / salary_max) * 0.5)


def count_skill_matches(user_skills: Sequence[str], job_skills: Sequence[str]) -> int:
    """User skills that contain, or are contained in, a required skill."""
    required = normalize_terms(job_skills)
    return sum(1 for skill in normalize_terms(user_skills) if term_matches(skill, required))


def score_job(
    profile: Profile,
    job: JobOffer,
    company_name: str = "",
    now: Optional[datetime] = None,
) -> Recommendation:
    """
    Score one job offer for one youth profile.

    The score is capped at 100; the uncapped value is kept as the match
    percentage. Only the first three reasons are kept.
    """
    score = 0.0
    reasons: List[str] = []

    job_skills = job.skills_required or []
    matches = count_skill_matches(profile.skills or [], job_skills)
    if matches > 0:
        score += (matches / max(len(job_skills), 1)) * SKILLS_WEIGHT
        reasons.append(f"{matches} matching skills")

    experience = experience_score(profile.experience_level, job.experience_level)
    score += experience * EXPERIENCE_WEIGHT
    if experience > 0.7:
        reasons.append("Ideal experience level")

    education = education_score(profile.education_level, job.education_level)
    score += education * EDUCATION_WEIGHT
    if education > 0.7:
        reasons.append("Meets the education requirement")

    location = location_score(profile.city, job.location)
    score += location * LOCATION_WEIGHT
    if location > 0.5:
        reasons.append("Compatible location")

    industry = (profile.industry or "").strip().lower()
    if industry and industry in (company_name or "").lower():
        score += INDUSTRY_BONUS
        reasons.append("Industry of interest")

    modality = modality_score(profile.work_modality, job.work_modality)
    score += modality * MODALITY_WEIGHT
    if modality > 0.7:
        reasons.append("Preferred work modality")

    contract = contract_score(profile.contract_type, job.contract_type)
    score += contract * CONTRACT_WEIGHT
    if contract > 0.7:
        reasons.append("Preferred contract type")

    expectation = profile.salary_expectation or 0
    if expectation > 0 and job.salary_min and job.salary_max:
        salary = salary_score(expectation, job.salary_min, job.salary_max)
        score += salary * SALARY_WEIGHT
        if salary > 0.7:
            reasons.append("Compatible salary expectation")

    if days_since(job.created_at, now) <= RECENCY_DAYS:
        score += RECENCY_BONUS
        reasons.append("Recently posted")

    return Recommendation(
        item=job,
        score=min(score, MAX_SCORE),
        reason=reasons[0] if reasons else "",
        source="job",
        reasons=reasons[:MAX_REASONS],
        raw_score=score,
        extra={"company": company_name},
    )


def match_percentage(recommendation: Recommendation) -> int:
    """Uncapped score rounded to a whole percentage."""
    raw = recommendation.raw_score
    return round(recommendation.score if raw is None else raw)
