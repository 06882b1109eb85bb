"""
FastAPI Users configuration for YouthConnect.

Session cookies carry a JWT for browser clients; a bearer backend serves the
same tokens to API clients.
"""

import uuid
from typing import AsyncGenerator, Optional, Union

from fastapi import Depends, Request, Response
from fastapi.security import OAuth2PasswordRequestForm
from fastapi_users import BaseUserManager, FastAPIUsers, UUIDIDMixin
from fastapi_users.authentication import (
    AuthenticationBackend,
    BearerTransport,
    CookieTransport,
    JWTStrategy,
)
from fastapi_users.db import SQLAlchemyUserDatabase
from fastapi_users.exceptions import InvalidPasswordException
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_config
from ..database.connection import get_async_session
from ..logging import SecurityEventType, security_logger
from ..validation import validate_password
from .models import User
from .schemas import UserCreate


class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    """User manager enforcing the platform password policy."""

    def __init__(self, user_db: SQLAlchemyUserDatabase) -> None:
        super().__init__(user_db)
        secret = get_config().security.secret_key
        self.reset_password_token_secret = secret
        self.verification_token_secret = secret

    async def validate_password(
        self, password: str, user: Union[UserCreate, User]
    ) -> None:
        result = validate_password(password)
        if not result.is_valid:
            security_logger.log_security_event(
                SecurityEventType.WEAK_PASSWORD_REJECTED,
                details={"email": user.email, "strength": result.strength},
            )
            raise InvalidPasswordException(reason="; ".join(result.errors))

        if user.email and user.email.split("@")[0].lower() in password.lower():
            raise InvalidPasswordException(reason="Password must not contain the email")

    async def authenticate(
        self, credentials: OAuth2PasswordRequestForm
    ) -> Optional[User]:
        user = await super().authenticate(credentials)
        if user is None:
            security_logger.log_auth_failure(credentials.username)
        return user

    async def on_after_register(
        self, user: User, request: Optional[Request] = None
    ) -> None:
        security_logger.log_security_event(
            SecurityEventType.USER_CREATED,
            user_id=str(user.id),
            request=request,
            details={"role": user.role.value},
        )

    async def on_after_login(
        self,
        user: User,
        request: Optional[Request] = None,
        response: Optional[Response] = None,
    ) -> None:
        security_logger.log_auth_success(str(user.id), request=request)


async def get_user_db(
    session: AsyncSession = Depends(get_async_session),
) -> AsyncGenerator[SQLAlchemyUserDatabase, None]:
    """Get user database adapter bound to the request session."""
    yield SQLAlchemyUserDatabase(session, User)


async def get_user_manager(
    user_db: SQLAlchemyUserDatabase = Depends(get_user_db),
) -> AsyncGenerator[UserManager, None]:
    yield UserManager(user_db)


def get_jwt_strategy() -> JWTStrategy:
    security = get_config().security
    return JWTStrategy(
        secret=security.secret_key, lifetime_seconds=security.jwt_lifetime_seconds
    )


def _build_cookie_transport() -> CookieTransport:
    security = get_config().security
    return CookieTransport(
        cookie_name=security.cookie_name,
        cookie_max_age=security.jwt_lifetime_seconds,
        cookie_secure=security.cookie_secure,
    )


cookie_backend = AuthenticationBackend(
    name="cookie",
    transport=_build_cookie_transport(),
    get_strategy=get_jwt_strategy,
)

bearer_backend = AuthenticationBackend(
    name="jwt",
    transport=BearerTransport(tokenUrl="api/v1/auth/jwt/login"),
    get_strategy=get_jwt_strategy,
)

fastapi_users = FastAPIUsers[User, uuid.UUID](
    get_user_manager, [cookie_backend, bearer_backend]
)

current_active_user = fastapi_users.current_user(active=True)
