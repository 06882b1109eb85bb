"""
Authentication module for YouthConnect.

This module provides the user model, the FastAPI Users integration and
role-based authorization dependencies.
"""

from .models import User
from .roles import check_user_role, is_admin, require_admin, require_roles

__all__ = [
    "User",
    "check_user_role",
    "is_admin",
    "require_admin",
    "require_roles",
]
