"""
Password policy for YouthConnect accounts.

The policy rejects short, common and low-variety passwords, and scores what
it accepts so clients can show a strength meter.
"""

import secrets
from dataclasses import dataclass, field
from typing import List

MIN_LENGTH = 8
MAX_LENGTH = 128
SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'

COMMON_PASSWORDS = frozenset(
    {
        "password",
        "123456",
        "123456789",
        "qwerty",
        "abc123",
        "password123",
        "admin",
        "letmein",
        "welcome",
        "1234567890",
        "password1",
        "iloveyou",
        "princess",
        "rockyou",
        "1234567",
        "12345678",
        "sunshine",
        "andrew",
        "jordan23",
        "superman",
        "rainbow",
        "master",
        "computer",
        "monkey",
    }
)

KEYBOARD_SEQUENCES = (
    "qwerty",
    "asdfgh",
    "zxcvbn",
    "qwertyuiop",
    "asdfghjkl",
    "zxcvbnm",
)


@dataclass
class PasswordValidationResult:
    """Outcome of checking a password against the policy."""

    is_valid: bool
    strength: str
    score: int
    errors: List[str] = field(default_factory=list)


def has_sequential_pattern(password: str) -> bool:
    """Return True for three consecutive code points or a keyboard run."""
    for first, second, third in zip(password, password[1:], password[2:]):
        a, b, c = ord(first), ord(second), ord(third)
        if b == a + 1 and c == b + 1:
            return True
        if b == a - 1 and c == b - 1:
            return True

    lowered = password.lower()
    return any(sequence in lowered for sequence in KEYBOARD_SEQUENCES)


def has_repeated_characters(password: str) -> bool:
    """Return True when any character appears three times in a row."""
    return any(
        first == second == third
        for first, second, third in zip(password, password[1:], password[2:])
    )


def calculate_strength(score: int) -> str:
    """Map a policy score onto a strength band."""
    if score <= 2:
        return "very-weak"
    if score <= 3:
        return "weak"
    if score <= 5:
        return "fair"
    if score <= 6:
        return "good"
    return "strong"


def validate_password(password: str) -> PasswordValidationResult:
    """
    Check a password against the account password policy.

    Each satisfied rule adds one point. A sequential pattern or a repeated
    character removes one point instead, never going below zero.

    Args:
        password: Candidate password

    Returns:
        PasswordValidationResult with every failed rule listed
    """
    password = password or ""
    errors: List[str] = []
    score = 0

    if len(password) < MIN_LENGTH:
        errors.append(f"Password must be at least {MIN_LENGTH} characters long")
    else:
        score += 1

    if len(password) > MAX_LENGTH:
        errors.append(f"Password must be at most {MAX_LENGTH} characters long")

    if password.lower() in COMMON_PASSWORDS:
        errors.append("Password is too common")
    else:
        score += 1

    checks = (
        (any(c.isupper() for c in password), "an uppercase letter"),
        (any(c.islower() for c in password), "a lowercase letter"),
        (any(c.isdigit() for c in password), "a number"),
        (any(c in SPECIAL_CHARACTERS for c in password), "a special character"),
    )
    for passed, requirement in checks:
        if passed:
            score += 1
        else:
            errors.append(f"Password must contain at least {requirement}")

    if has_sequential_pattern(password):
        errors.append('Password must not contain sequences such as "123" or "abc"')
        score = max(0, score - 1)
    else:
        score += 1

    if has_repeated_characters(password):
        errors.append("Password must not repeat a character more than twice in a row")
        score = max(0, score - 1)
    else:
        score += 1

    return PasswordValidationResult(
        is_valid=not errors,
        strength=calculate_strength(score),
        score=score,
        errors=errors,
    )


def generate_secure_password(length: int = 16) -> str:
    """Generate a random password that passes the policy."""
    if length < MIN_LENGTH:
        raise ValueError(f"length must be at least {MIN_LENGTH}")

    lowercase = "abcdefghijklmnopqrstuvwxyz"
    uppercase = lowercase.upper()
    digits = "0123456789"
    alphabet = lowercase + uppercase + digits + SPECIAL_CHARACTERS
    rng = secrets.SystemRandom()

    while True:
        chars = [
            rng.choice(lowercase),
            rng.choice(uppercase),
            rng.choice(digits),
            rng.choice(SPECIAL_CHARACTERS),
        ]
        chars.extend(rng.choice(alphabet) for _ in range(length - len(chars)))
        rng.shuffle(chars)
        candidate = "".join(chars)
        if validate_password(candidate).is_valid:
            return candidate
