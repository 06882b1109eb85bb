"""
Startup discovery endpoints.

Filtered, faceted listing of public startups plus trending, search and
directory statistics.
"""

from typing import Literal, Optional

from fastapi import Depends, Query, Request

from ...core.auth.fastapi_users import current_active_user
from ...core.auth.models import User
from ...core.dependencies import get_discovery_service
from ...core.models.enums import BusinessStage
from ...core.repositories import StartupFilters
from ...core.services import DiscoveryService
from ...core.validation import MAX_QUERY_LENGTH
from ..models import APIResponse, ListMeta, ListResponse
from ..schemas import (
    DiscoveryAnalyticsOut,
    DiscoveryOut,
    FacetValue,
    RankedStartupOut,
    ranked_startup_out,
    startup_out,
)
from ..validation import screen_text
from ..versioning import APIVersion, create_versioned_router

router = create_versioned_router(APIVersion.V1, prefix="/discovery", tags=["discovery"])


@router.get(
    "/startups", response_model=APIResponse[DiscoveryOut], summary="Discover startups"
)
async def discover_startups(
    request: Request,
    search: Optional[str] = Query(None, max_length=MAX_QUERY_LENGTH),
    category: Optional[str] = Query(None, max_length=120),
    subcategory: Optional[str] = Query(None, max_length=120),
    business_stage: Optional[BusinessStage] = Query(None),
    municipality: Optional[str] = Query(None, max_length=120),
    department: Optional[str] = Query(None, max_length=120),
    min_employees: Optional[int] = Query(None, ge=0),
    max_employees: Optional[int] = Query(None, ge=0),
    min_revenue: Optional[float] = Query(None, ge=0),
    max_revenue: Optional[float] = Query(None, ge=0),
    has_website: bool = Query(False),
    sort_by: Literal["created_at", "name", "views_count", "rating"] = Query("created_at"),
    sort_order: Literal["asc", "desc"] = Query("desc"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user: User = Depends(current_active_user),
    service: DiscoveryService = Depends(get_discovery_service),
) -> APIResponse[DiscoveryOut]:
    """
    List public startups with facet counts, the current trending five and
    up to five startups recommended for the caller.
    """
    filters = StartupFilters(
        search=screen_text(request, "search", search, user) or None,
        category=category,
        subcategory=subcategory,
        business_stage=business_stage,
        municipality=municipality,
        department=department,
        min_employees=min_employees,
        max_employees=max_employees,
        min_revenue=min_revenue,
        max_revenue=max_revenue,
        has_website=has_website,
        sort_by=sort_by,
        sort_order=sort_order,
        limit=limit,
        offset=offset,
    )
    result = await service.discover(filters, user)

    return APIResponse(
        data=DiscoveryOut(
            startups=[startup_out(s) for s in result["startups"]],
            total=result["total"],
            limit=filters.limit,
            offset=filters.offset,
            facets={
                name: [FacetValue(**value) for value in values]
                for name, values in result["facets"].items()
            },
            trending=[ranked_startup_out(rec) for rec in result["trending"]],
            recommendations=[
                ranked_startup_out(rec) for rec in result["recommendations"]
            ],
        )
    )


@router.get(
    "/trending",
    response_model=ListResponse[RankedStartupOut],
    summary="Trending startups",
)
async def trending_startups(
    limit: int = Query(10, ge=1, le=50),
    user: User = Depends(current_active_user),
    service: DiscoveryService = Depends(get_discovery_service),
) -> ListResponse[RankedStartupOut]:
    results = await service.trending(limit)
    return ListResponse(
        data=[ranked_startup_out(rec) for rec in results],
        meta=ListMeta(type="trending", total=len(results)),
    )


@router.get(
    "/search",
    response_model=ListResponse[RankedStartupOut],
    summary="Search startups",
)
async def search_startups(
    request: Request,
    q: str = Query(..., min_length=1, max_length=MAX_QUERY_LENGTH),
    limit: int = Query(20, ge=1, le=100),
    user: User = Depends(current_active_user),
    service: DiscoveryService = Depends(get_discovery_service),
) -> ListResponse[RankedStartupOut]:
    """Rank startups by where the query appears: name, category, description."""
    query = screen_text(request, "q", q, user) or ""
    results = await service.search(query, limit)
    return ListResponse(
        data=[ranked_startup_out(rec) for rec in results],
        meta=ListMeta(type="search", total=len(results)),
    )


@router.get(
    "/analytics",
    response_model=APIResponse[DiscoveryAnalyticsOut],
    summary="Startup directory statistics",
)
async def discovery_analytics(
    user: User = Depends(current_active_user),
    service: DiscoveryService = Depends(get_discovery_service),
) -> APIResponse[DiscoveryAnalyticsOut]:
    """Public startup totals per category, stage, municipality and department."""
    stats = await service.analytics()
    return APIResponse(
        data=DiscoveryAnalyticsOut(
            total_startups=stats["total_startups"],
            category_stats=[FacetValue(**v) for v in stats["category_stats"]],
            stage_stats=[FacetValue(**v) for v in stats["stage_stats"]],
            location_stats=[FacetValue(**v) for v in stats["location_stats"]],
            department_stats=[FacetValue(**v) for v in stats["department_stats"]],
            recent_activity=stats["recent_activity"],
            recent_activity_days=stats["recent_activity_days"],
        )
    )
