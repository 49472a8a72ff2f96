# catalog/common/listing.py
"""Search, sort and flag parsing shared by the list endpoints."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Query

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def parse_bool(value: Optional[str]) -> Optional[bool]:
    """Interpret a query-string flag; ``None`` when the flag was not sent."""
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    return None


def parse_csv(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so ``value`` matches literally (escape char ``\\``)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def apply_search(query: Query, term: Optional[str], columns: Sequence[Any]) -> Query:
    """Case-insensitive substring match across ``columns``."""
    term = (term or "").strip()
    if not term:
        return query
    pattern = f"%{escape_like(term)}%"
    return query.filter(or_(*(column.ilike(pattern, escape="\\") for column in columns)))


def apply_sort(
    query: Query,
    model,
    sort: Optional[str],
    allowed: Sequence[str],
    default: Sequence[Any],
) -> Query:
    """Order by ``?sort=position,-name``; unknown fields are ignored.

    ``default`` is used when no recognised field was requested.
    """
    clauses = []
    for part in parse_csv(sort):
        descending = part.startswith("-")
        field = part.lstrip("-")
        if field not in allowed:
            continue
        column = getattr(model, field)
        clauses.append(column.desc() if descending else column.asc())

    if not clauses:
        clauses = list(default)
    return query.order_by(*clauses)
