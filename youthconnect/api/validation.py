"""Screening of free-text request parameters."""

from typing import Optional

from fastapi import Request

from ..core.auth.models import User
from ..core.errors import ValidationError
from ..core.logging import security_logger
from ..core.validation import MAX_QUERY_LENGTH, InputValidator


def screen_text(
    request: Request,
    field: str,
    value: Optional[str],
    user: Optional[User] = None,
    max_length: int = MAX_QUERY_LENGTH,
) -> Optional[str]:
    """
    Reject injection payloads and return the sanitized text.

    Raises:
        ValidationError: If the value matches an injection pattern
    """
    if value is None:
        return None

    check = InputValidator.check(value)
    if not check.is_safe:
        security_logger.log_injection_attempt(
            field,
            check.threats,
            user_id=str(user.id) if user else None,
            request=request,
        )
        raise ValidationError(
            f"Invalid characters in {field}",
            details={"field": field},
        )
    return InputValidator.sanitize_query(value, max_length=max_length)
