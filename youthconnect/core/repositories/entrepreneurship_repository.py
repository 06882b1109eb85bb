"""
Entrepreneurship repository for YouthConnect.

This module provides the filtered listing, facet and candidate queries used
by startup discovery and startup recommendations.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.entrepreneurship import Entrepreneurship
from ..models.enums import BusinessStage
from .base import BaseRepository

SORT_FIELDS = ("created_at", "name", "views_count", "rating")
FACET_FIELDS = ("category", "business_stage", "municipality", "department")


@dataclass
class StartupFilters:
    """Filters accepted by startup discovery."""

    search: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    business_stage: Optional[BusinessStage] = None
    municipality: Optional[str] = None
    department: Optional[str] = None
    min_employees: Optional[int] = None
    max_employees: Optional[int] = None
    min_revenue: Optional[float] = None
    max_revenue: Optional[float] = None
    has_website: bool = False
    sort_by: str = "created_at"
    sort_order: str = "desc"
    limit: int = 20
    offset: int = 0


def _visible() -> List[Any]:
    return [
        Entrepreneurship.is_active.is_(True),
        Entrepreneurship.is_public.is_(True),
    ]


def _text_match(query: str) -> Any:
    pattern = f"%{query}%"
    return or_(
        Entrepreneurship.name.ilike(pattern),
        Entrepreneurship.description.ilike(pattern),
        Entrepreneurship.category.ilike(pattern),
        Entrepreneurship.subcategory.ilike(pattern),
    )


class EntrepreneurshipRepository(BaseRepository[Entrepreneurship]):
    """Repository for public startup listings."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Entrepreneurship)

    def _conditions(self, filters: StartupFilters) -> List[Any]:
        conditions = _visible()

        if filters.search:
            conditions.append(_text_match(filters.search))
        if filters.category:
            conditions.append(Entrepreneurship.category == filters.category)
        if filters.subcategory:
            conditions.append(Entrepreneurship.subcategory == filters.subcategory)
        if filters.business_stage:
            conditions.append(Entrepreneurship.business_stage == filters.business_stage)
        if filters.municipality:
            conditions.append(Entrepreneurship.municipality == filters.municipality)
        if filters.department:
            conditions.append(Entrepreneurship.department == filters.department)
        if filters.min_employees is not None:
            conditions.append(Entrepreneurship.employees >= filters.min_employees)
        if filters.max_employees is not None:
            conditions.append(Entrepreneurship.employees <= filters.max_employees)
        if filters.min_revenue is not None:
            conditions.append(Entrepreneurship.annual_revenue >= filters.min_revenue)
        if filters.max_revenue is not None:
            conditions.append(Entrepreneurship.annual_revenue <= filters.max_revenue)
        if filters.has_website:
            conditions.append(Entrepreneurship.website.is_not(None))

        return conditions

    async def discover(
        self, filters: StartupFilters
    ) -> Tuple[List[Entrepreneurship], int]:
        """
        Page through public startups matching the filters.

        Args:
            filters: Discovery filters, sort and pagination

        Returns:
            Tuple of (startups on the requested page, total matches)
        """
        conditions = self._conditions(filters)

        sort_field = filters.sort_by if filters.sort_by in SORT_FIELDS else "created_at"
        column = getattr(Entrepreneurship, sort_field)
        order = column.asc() if filters.sort_order == "asc" else column.desc()

        stmt = (
            select(Entrepreneurship)
            .where(*conditions)
            .order_by(order)
            .offset(filters.offset)
            .limit(filters.limit)
        )
        result = await self.session.execute(stmt)
        startups = list(result.scalars().all())

        count_stmt = select(func.count()).select_from(Entrepreneurship).where(*conditions)
        total = int((await self.session.execute(count_stmt)).scalar_one())

        return startups, total

    async def get_facets(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Count public startups per category, stage, municipality and department.

        Returns:
            Mapping of facet name to ``{"name", "count"}`` entries, largest
            count first; rows with no value are skipped
        """
        facets: Dict[str, List[Dict[str, Any]]] = {}
        for field in FACET_FIELDS:
            column = getattr(Entrepreneurship, field)
            count = func.count().label("count")
            stmt = (
                select(column, count)
                .where(*_visible(), column.is_not(None))
                .group_by(column)
                .order_by(count.desc())
            )
            result = await self.session.execute(stmt)
            facets[field] = [
                {"name": getattr(value, "value", value), "count": int(total)}
                for value, total in result.all()
            ]
        return facets

    async def get_trending_candidates(
        self, since: datetime, limit: int
    ) -> List[Entrepreneurship]:
        """
        Viewed startups created or updated since a point in time.

        Returns:
            Candidates ordered by views, then newest first
        """
        stmt = (
            select(Entrepreneurship)
            .where(
                *_visible(),
                Entrepreneurship.views_count > 0,
                or_(
                    Entrepreneurship.created_at >= since,
                    Entrepreneurship.updated_at >= since,
                ),
            )
            .order_by(
                Entrepreneurship.views_count.desc(),
                Entrepreneurship.created_at.desc(),
            )
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search(self, query: str, limit: int) -> List[Entrepreneurship]:
        """Public startups whose text fields contain the query."""
        stmt = (
            select(Entrepreneurship)
            .where(*_visible(), _text_match(query))
            .order_by(
                Entrepreneurship.rating.desc(),
                Entrepreneurship.views_count.desc(),
            )
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_public(
        self, exclude_owner_id: Optional[UUID] = None
    ) -> List[Entrepreneurship]:
        """All public startups, optionally leaving out one owner's."""
        stmt = select(Entrepreneurship).where(*_visible())
        if exclude_owner_id is not None:
            stmt = stmt.where(Entrepreneurship.owner_id != exclude_owner_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_public(self, created_since: Optional[datetime] = None) -> int:
        """Number of public startups, optionally only those created since a point in time."""
        stmt = select(func.count()).select_from(Entrepreneurship).where(*_visible())
        if created_since is not None:
            stmt = stmt.where(Entrepreneurship.created_at >= created_since)
        return int((await self.session.execute(stmt)).scalar_one())
