"""
Predicate builders for filtered searches.

Repositories collect the clauses returned here and AND them together into a
single ``WHERE`` clause. Builders return an empty list for unset filters so
callers can always extend their criteria unconditionally.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional, Sequence

from sqlalchemy import any_, bindparam, or_
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.sql.elements import ColumnElement

from .escape import LIKE_ESCAPE_CHAR, escape_like


def keyword_criteria(
    keywords: Sequence[str],
    columns: Sequence[Any],
) -> List[ColumnElement[bool]]:
    """
    One case-insensitive "contains" clause per keyword.

    A keyword matches when any of ``columns`` contains it; every keyword must
    match, so the returned clauses are meant to be AND-ed.
    """
    if not columns:
        raise ValueError("at least one searchable column is required")

    criteria: List[ColumnElement[bool]] = []
    for keyword in keywords:
        pattern = escape_like(keyword)
        matches = [column.ilike(pattern, escape=LIKE_ESCAPE_CHAR) for column in columns]
        criteria.append(matches[0] if len(matches) == 1 else or_(*matches))
    return criteria


def equals_criteria(column: Any, value: Optional[Any]) -> List[ColumnElement[bool]]:
    if value is None:
        return []
    return [column == value]


def date_range_criteria(
    column: Any,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[ColumnElement[bool]]:
    """Inclusive bounds; either side may be omitted."""
    criteria: List[ColumnElement[bool]] = []
    if start is not None:
        criteria.append(column >= start)
    if end is not None:
        criteria.append(column <= end)
    return criteria


def membership_criteria(
    column: Any,
    values: Sequence[Any],
    dialect_name: str,
) -> ColumnElement[bool]:
    """
    ``column`` equal to any of ``values``.

    PostgreSQL receives the values as a single array parameter
    (``= ANY($1)``), so the candidate count is not bounded by the driver's
    bind-parameter limit. Other dialects get a plain ``IN`` list.
    """
    if dialect_name == "postgresql":
        return column == any_(bindparam(None, list(values), type_=ARRAY(column.type)))
    return column.in_(list(values))
