"""Shared building blocks for the recommendation scoring functions."""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Set

_WORD = re.compile(r"\w+", re.UNICODE)


@dataclass
class Recommendation:
    """A scored candidate together with the explanation shown to the user."""

    item: Any
    score: float
    reason: str
    source: str = ""
    confidence: float = 1.0
    reasons: List[str] = field(default_factory=list)
    raw_score: Optional[float] = None
    extra: Dict[str, Any] = field(default_factory=dict)


def normalize_terms(values: Optional[Iterable[str]]) -> List[str]:
    """Lowercase and strip terms, dropping empty ones."""
    return [v.strip().lower() for v in values or [] if v and v.strip()]


def words(text: Optional[str]) -> List[str]:
    """Split text into lowercase words."""
    return _WORD.findall((text or "").lower())


def significant_words(text: Optional[str], min_length: int = 4) -> Set[str]:
    """Distinct words of at least min_length characters."""
    return {w for w in words(text) if len(w) >= min_length}


def text_similarity(first: Optional[str], second: Optional[str]) -> float:
    """
    Share of significant words two texts have in common.

    Only words longer than three characters count. The shared count is
    divided by the larger of the two word sets, so identical texts score 1.0
    and unrelated texts 0.0.
    """
    a = significant_words(first)
    b = significant_words(second)
    if not a or not b:
        return 0.0
    return len(a & b) / max(len(a), len(b))


def term_matches(term: str, candidates: Iterable[str]) -> bool:
    """Case-insensitive substring match in either direction."""
    needle = term.lower()
    return any(needle in c or c in needle for c in normalize_terms(candidates))


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def days_since(value: Optional[datetime], now: Optional[datetime] = None) -> float:
    """Days elapsed since value; infinite when value is unknown."""
    if value is None:
        return float("inf")
    now = now or datetime.now(timezone.utc)
    return (as_utc(now) - as_utc(value)).total_seconds() / 86400


def top(recommendations: List[Recommendation], limit: int) -> List[Recommendation]:
    """Highest scores first, at most limit entries."""
    return sorted(recommendations, key=lambda r: r.score, reverse=True)[:limit]
