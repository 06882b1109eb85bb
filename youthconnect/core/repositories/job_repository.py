"""
Job repository for YouthConnect.

This module provides the open-offer queries job recommendations run on.
"""

from typing import Collection, List, Set, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.enums import JobStatus
from ..models.job import JobApplication, JobOffer
from ..models.organization import Company
from .base import BaseRepository


class JobRepository(BaseRepository[JobOffer]):
    """Job offer repository."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, JobOffer)

    async def get_open_jobs_with_company(
        self, exclude_ids: Collection[UUID] = ()
    ) -> List[Tuple[JobOffer, str]]:
        """
        Get active job offers with their company's name.

        Args:
            exclude_ids: Job IDs to leave out

        Returns:
            (job offer, company name) pairs
        """
        stmt = (
            select(JobOffer, Company.name)
            .join(Company, Company.id == JobOffer.company_id)
            .where(JobOffer.is_active.is_(True), JobOffer.status == JobStatus.ACTIVE)
        )
        if exclude_ids:
            stmt = stmt.where(JobOffer.id.not_in(list(exclude_ids)))

        result = await self.session.execute(stmt)
        return [(job, name) for job, name in result.all()]

    async def get_applied_job_ids(self, applicant_id: UUID) -> Set[UUID]:
        """IDs of every job a user has applied to."""
        stmt = select(JobApplication.job_offer_id).where(
            JobApplication.applicant_id == applicant_id
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())
