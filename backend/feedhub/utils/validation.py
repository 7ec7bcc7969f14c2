"""
Parsing helpers for optional query parameters.

Each helper treats an empty value as "not provided" and returns ``None``;
malformed values raise a structured validation error naming the field.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from feedhub.core.exceptions import InvalidFilterValueError, InvalidParameterError
from feedhub.utils.datetime_utils import parse_iso8601, to_naive_utc

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


def parse_date_iso8601(value: Optional[str], field: str = "date") -> Optional[datetime]:
    """
    Parse an ISO 8601 date for filtering.

    Accepts ``2024-01-01`` (midnight UTC) and RFC 3339 timestamps such as
    ``2024-01-01T10:00:00Z`` or ``2024-01-01T10:00:00+09:00``. The result is
    converted to naive UTC to match stored timestamps.
    """
    if not value:
        return None

    parsed = parse_iso8601(value)
    if parsed is None:
        raise InvalidParameterError(
            field,
            value,
            "ISO 8601 format (e.g., '2024-01-01' or '2024-01-01T10:00:00Z')",
        )
    return to_naive_utc(parsed)


def parse_bool(value: Optional[str], field: str = "value") -> Optional[bool]:
    """Parse ``true``/``false``/``1``/``0`` (and their common spellings)."""
    if not value:
        return None
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise InvalidParameterError(field, value, "'true', 'false', '1', or '0'")


def validate_enum(value: Optional[str], allowed: Sequence[str], field: str) -> Optional[str]:
    """
    Check ``value`` against a fixed set of allowed values.

    Matching is exact and case-sensitive. Empty values are accepted as
    "unset". An empty ``allowed`` list is a programming error.
    """
    if not value:
        return None
    if not allowed:
        raise ValueError(f"allowed values list cannot be empty for field '{field}'")
    if value not in allowed:
        raise InvalidFilterValueError(field, value, allowed)
    return value


def parse_uuid(value: str, field: str = "id") -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise InvalidParameterError(field, value, "UUID")
