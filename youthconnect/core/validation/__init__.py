"""
Validation utilities for YouthConnect.

Password policy checks and injection detection for user supplied text.
"""

from .input import MAX_QUERY_LENGTH, InjectionCheck, InputValidator
from .password import (
    PasswordValidationResult,
    generate_secure_password,
    validate_password,
)

__all__ = [
    "MAX_QUERY_LENGTH",
    "InjectionCheck",
    "InputValidator",
    "PasswordValidationResult",
    "generate_secure_password",
    "validate_password",
]
