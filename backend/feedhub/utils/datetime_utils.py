"""
Datetime helpers. Persisted timestamps are naive UTC.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_RFC3339_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)


def parse_iso8601(value: Optional[str]) -> Optional[datetime]:
    """Parse ``YYYY-MM-DD`` or an RFC 3339 timestamp.

    Date-only values are midnight UTC. Returns ``None`` when the value is
    empty or matches neither format.
    """
    if not value:
        return None
    cleaned = value.strip()
    try:
        if _DATE_ONLY_RE.match(cleaned):
            return datetime.strptime(cleaned, "%Y-%m-%d").replace(tzinfo=timezone.utc)
        if _RFC3339_RE.match(cleaned):
            if cleaned[-1] in "Zz":
                cleaned = cleaned[:-1] + "+00:00"
            return datetime.fromisoformat(cleaned.replace("t", "T"))
    except ValueError:
        # Well-formed but impossible, e.g. 2024-02-30
        return None
    return None


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def utc_now_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)
