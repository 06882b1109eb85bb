"""Request and response schemas for the FastAPI Users routers."""

import uuid
from datetime import datetime
from typing import Optional

from fastapi_users import schemas
from pydantic import field_validator

from ..models.enums import UserRole

SELF_REGISTRATION_ROLES = (UserRole.YOUTH, UserRole.COMPANIES, UserRole.INSTITUTION)


class UserRead(schemas.BaseUser[uuid.UUID]):
    role: UserRole
    created_at: Optional[datetime] = None


class UserCreate(schemas.BaseUserCreate):
    role: UserRole = UserRole.YOUTH

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: UserRole) -> UserRole:
        """Administrators cannot be created through self registration."""
        if v not in SELF_REGISTRATION_ROLES:
            raise ValueError("Role not allowed for registration")
        return v


class UserUpdate(schemas.BaseUserUpdate):
    pass
