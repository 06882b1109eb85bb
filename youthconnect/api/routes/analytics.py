"""
Analytics endpoints.

The platform report is for administrators; every user can read the summary
of their own activity.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import Depends, Query, Request

from ...core.auth.fastapi_users import current_active_user
from ...core.auth.models import User
from ...core.auth.roles import require_admin
from ...core.dependencies import (
    get_platform_analytics_service,
    get_role_analytics_service,
)
from ...core.logging import security_logger
from ...core.repositories import DateRange
from ...core.services import PlatformAnalyticsService, RoleAnalyticsService
from ...core.services.analytics_service import parse_sections
from ..models import APIResponse
from ..versioning import APIVersion, create_versioned_router

router = create_versioned_router(APIVersion.V1, prefix="/analytics", tags=["analytics"])


@router.get(
    "/platform",
    response_model=APIResponse[Dict[str, Any]],
    summary="Platform analytics report",
)
async def platform_analytics(
    request: Request,
    start_date: Optional[datetime] = Query(None, description="Created at or after"),
    end_date: Optional[datetime] = Query(None, description="Created at or before"),
    sections: Optional[str] = Query(
        None,
        description=(
            "Comma separated subset of overview, job_placement, "
            "course_completion, entrepreneurship, demographics"
        ),
    ),
    user: User = Depends(require_admin),
    service: PlatformAnalyticsService = Depends(get_platform_analytics_service),
) -> APIResponse[Dict[str, Any]]:
    """
    Build the platform report.

    Date bounds filter every section on the rows' creation time.
    """
    selected = parse_sections(sections)
    date_range = (
        DateRange(start=start_date, end=end_date) if start_date or end_date else None
    )
    report = await service.get_analytics(date_range, selected)

    security_logger.log_admin_action(
        str(user.id), "view_platform_analytics", request=request, sections=selected
    )
    return APIResponse(data=report)


@router.get(
    "/me",
    response_model=APIResponse[Dict[str, Any]],
    summary="Analytics for the signed-in user",
)
async def my_analytics(
    user: User = Depends(current_active_user),
    service: RoleAnalyticsService = Depends(get_role_analytics_service),
) -> APIResponse[Dict[str, Any]]:
    return APIResponse(data=await service.for_user(user))
