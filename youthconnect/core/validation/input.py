"""
Input validation and sanitization for security.

This module detects injection payloads in free text and strips markup from
values before they reach queries or logs.
"""

import re
from dataclasses import dataclass, field
from typing import Any, List, Optional

SQL_INJECTION = "SQL Injection"
XSS = "XSS"
PATH_TRAVERSAL = "Path Traversal"
COMMAND_INJECTION = "Command Injection"

# Longest free-text query accepted by the search parameters
MAX_QUERY_LENGTH = 200

_SQL_PATTERNS = [
    re.compile(
        r"\b(select|insert|update|delete|drop|union|create|alter)\b", re.IGNORECASE
    ),
    re.compile(r"\b(or|and)\b\s*(\d+\s*=\s*\d+|'.+'\s*=\s*'.+')", re.IGNORECASE),
    re.compile(r"['\"]\s*;\s*\w+"),
    re.compile(r"--"),
    re.compile(r"/\*"),
    re.compile(r"\bexec(\s|\()", re.IGNORECASE),
    re.compile(r"\bdeclare\b", re.IGNORECASE),
]

_XSS_PATTERNS = [
    re.compile(r"<script\b[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL),
    re.compile(r"<iframe\b[^>]*>", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"on\w+\s*=", re.IGNORECASE),
    re.compile(r"<img[^>]+src[^>]*>", re.IGNORECASE),
    re.compile(r"<svg[^>]*>", re.IGNORECASE),
    re.compile(r"<(object|embed|link|meta)[^>]*>", re.IGNORECASE),
]

_PATH_TRAVERSAL_PATTERNS = [
    re.compile(r"\.\./"),
    re.compile(r"\.\.\\"),
    re.compile(r"%2e%2e(%2f|%5c)", re.IGNORECASE),
    re.compile(r"\.\.(%2f|%5c)", re.IGNORECASE),
]

_COMMAND_PATTERNS = [
    re.compile(r";\s*\w+"),
    re.compile(r"\|\s*\w+"),
    re.compile(r"&&\s*\w+"),
    re.compile(r"\$\("),
    re.compile(r"`[^`]*`"),
]

_SCRIPT_BLOCK = re.compile(
    r"<(script|iframe|style)\b[^>]*>.*?</\1>", re.IGNORECASE | re.DOTALL
)
_TAG = re.compile(r"<[^>]*>")
_EVENT_HANDLER = re.compile(r"on\w+\s*=", re.IGNORECASE)
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_QUERY_UNSAFE = re.compile(r"[<>'\"`;\\]")


@dataclass
class InjectionCheck:
    """Result of scanning a value for injection payloads."""

    is_safe: bool
    threats: List[str] = field(default_factory=list)


class InputValidator:
    """Detects injection attempts and sanitizes user supplied text."""

    @staticmethod
    def check(value: Any) -> InjectionCheck:
        """
        Scan a value for SQL, XSS, path traversal and command payloads.

        Non-string values are always safe.

        Args:
            value: Value to scan

        Returns:
            InjectionCheck naming every threat category found
        """
        if not isinstance(value, str):
            return InjectionCheck(is_safe=True)

        threats: List[str] = []
        groups = (
            (SQL_INJECTION, _SQL_PATTERNS),
            (XSS, _XSS_PATTERNS),
            (PATH_TRAVERSAL, _PATH_TRAVERSAL_PATTERNS),
            (COMMAND_INJECTION, _COMMAND_PATTERNS),
        )
        for threat, patterns in groups:
            if any(pattern.search(value) for pattern in patterns):
                threats.append(threat)

        return InjectionCheck(is_safe=not threats, threats=threats)

    @staticmethod
    def sanitize_text(value: Optional[str]) -> Optional[str]:
        """Strip markup, script URLs and control characters from text."""
        if value is None:
            return None

        cleaned = _SCRIPT_BLOCK.sub("", value)
        cleaned = _TAG.sub("", cleaned)
        cleaned = re.sub(r"javascript:", "", cleaned, flags=re.IGNORECASE)
        cleaned = _EVENT_HANDLER.sub("", cleaned)
        cleaned = _CONTROL_CHARS.sub("", cleaned)
        return cleaned.replace("<", "").replace(">", "").strip()

    @classmethod
    def sanitize_query(cls, value: str, max_length: int = MAX_QUERY_LENGTH) -> str:
        """Sanitize a search query and clip it to max_length characters."""
        cleaned = cls.sanitize_text(value) or ""
        return _QUERY_UNSAFE.sub("", cleaned).strip()[:max_length]
