"""
Role-based access control for YouthConnect endpoints.

Administrators pass every role check; every other user must hold one of the
roles an endpoint names.
"""

from typing import Awaitable, Callable

from fastapi import Depends, Request

from ..errors import PermissionDeniedError
from ..logging import security_logger
from ..models.enums import UserRole
from .fastapi_users import current_active_user
from .models import User


def is_admin(user: User) -> bool:
    """Check whether a user holds administrator privileges."""
    return user.is_superuser or user.role == UserRole.SUPERADMIN


def check_user_role(user: User, *roles: UserRole) -> bool:
    """
    Check if a user may act with one of the given roles.

    Args:
        user: The user object to check
        *roles: Roles accepted for the action

    Returns:
        True if user is an administrator or holds one of the roles
    """
    return is_admin(user) or user.role in roles


def require_roles(*roles: UserRole) -> Callable[..., Awaitable[User]]:
    """
    Build a dependency that admits only users holding one of the roles.

    Usage:
        @router.get("/jobs", dependencies=[Depends(require_roles(UserRole.YOUTH))])
    """

    async def dependency(
        request: Request, user: User = Depends(current_active_user)
    ) -> User:
        if check_user_role(user, *roles):
            return user

        security_logger.log_access_denied(
            str(user.id),
            resource=request.url.path,
            reason=f"role {user.role.value} not in {[r.value for r in roles]}",
            request=request,
        )
        raise PermissionDeniedError("You do not have permission to access this resource")

    return dependency


require_admin = require_roles(UserRole.SUPERADMIN)
