"""
Job recommendation service.

Matches a youth profile against every open job offer and keeps the offers
that clear the minimum score.
"""

from typing import List, Optional

from ..auth.models import User
from ..config import RecommendationConfig, get_config
from ..errors import NotFoundError, PermissionDeniedError
from ..logging import get_logger, log_performance
from ..models.enums import UserRole
from ..recommendations.base import Recommendation, top
from ..recommendations.jobs import score_job
from ..repositories.job_repository import JobRepository
from ..repositories.profile_repository import ProfileRepository

logger = get_logger(__name__)


class JobRecommendationService:
    """Ranks open job offers for a youth user."""

    def __init__(
        self,
        job_repository: JobRepository,
        profile_repository: ProfileRepository,
        config: Optional[RecommendationConfig] = None,
    ) -> None:
        self.job_repository = job_repository
        self.profile_repository = profile_repository
        self.config = config or get_config().recommendation

    @log_performance("job_recommendations")
    async def recommend(
        self,
        user: User,
        limit: Optional[int] = None,
        include_applied: bool = False,
    ) -> List[Recommendation]:
        """
        Recommend open job offers for a youth user.

        Args:
            user: Youth user the recommendations are for
            limit: Maximum number of recommendations
            include_applied: Keep offers the user already applied to

        Returns:
            Offers scoring above the configured minimum, best first

        Raises:
            PermissionDeniedError: If the user is not a youth user
            NotFoundError: If the user has no profile
        """
        if user.role != UserRole.YOUTH:
            raise PermissionDeniedError("Job recommendations are only available to youth users")

        profile = await self.profile_repository.get_by_user_id(user.id)
        if profile is None:
            raise NotFoundError("Profile not found")

        if not limit or limit < 1:
            limit = self.config.default_limit
        limit = min(limit, self.config.max_limit)

        applied = (
            set() if include_applied
            else await self.job_repository.get_applied_job_ids(user.id)
        )
        jobs = await self.job_repository.get_open_jobs_with_company(applied)

        scored = [score_job(profile, job, company_name) for job, company_name in jobs]
        results = top(
            [rec for rec in scored if rec.score > self.config.min_job_score], limit
        )

        logger.info(
            "Job recommendations generated",
            user_id=str(user.id),
            candidates=len(jobs),
            count=len(results),
        )
        return results
