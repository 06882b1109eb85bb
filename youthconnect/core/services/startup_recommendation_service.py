"""Startup recommendation service."""

from typing import List, Optional

from ..auth.models import User
from ..config import RecommendationConfig, get_config
from ..logging import get_logger
from ..recommendations.base import Recommendation, normalize_terms, top
from ..recommendations.startups import startup_recommendation_score
from ..repositories.entrepreneurship_repository import EntrepreneurshipRepository
from ..repositories.profile_repository import ProfileRepository

logger = get_logger(__name__)


class StartupRecommendationService:
    """Ranks public startups by a user's interests and skills."""

    def __init__(
        self,
        entrepreneurship_repository: EntrepreneurshipRepository,
        profile_repository: ProfileRepository,
        config: Optional[RecommendationConfig] = None,
    ) -> None:
        self.entrepreneurship_repository = entrepreneurship_repository
        self.profile_repository = profile_repository
        self.config = config or get_config().recommendation

    async def recommend(
        self, user: User, limit: Optional[int] = None
    ) -> List[Recommendation]:
        """
        Recommend startups other users run.

        Users without a profile get no recommendations. When the profile
        lists interests or skills, only startups matching at least one of
        them are scored.
        """
        if not limit or limit < 1:
            limit = self.config.default_limit
        limit = min(limit, self.config.max_limit)

        profile = await self.profile_repository.get_by_user_id(user.id)
        if profile is None:
            return []

        interests = list(profile.interests or [])
        skills = list(profile.skills or [])
        candidates = await self.entrepreneurship_repository.get_public(
            exclude_owner_id=user.id
        )

        wanted = set(normalize_terms(interests))
        skill_terms = normalize_terms(skills)
        if wanted or skill_terms:
            candidates = [
                startup
                for startup in candidates
                if (startup.category or "").lower() in wanted
                or (startup.subcategory or "").lower() in wanted
                or any(
                    term in f"{startup.name or ''} {startup.description or ''}".lower()
                    for term in skill_terms
                )
            ]

        results = top(
            [startup_recommendation_score(s, interests, skills) for s in candidates],
            limit,
        )
        logger.info(
            "Startup recommendations generated",
            user_id=str(user.id),
            count=len(results),
        )
        return results
