# catalog/common/slugs.py
"""URL slugs that stay unique inside a scope of sibling rows."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from fastapi import HTTPException, status
from slugify import slugify as _transliterate_slug
from sqlalchemy.orm import Session


def slugify(text: Any, max_length: int = 0) -> str:
    """Generate a URL-friendly slug: transliterated to ascii, lowercase, hyphen separated.

    ``max_length`` of 0 means unbounded.
    """
    value = str(text or "").replace("@", " at ")
    return _transliterate_slug(value, max_length=max_length)


def slug_column_length(model) -> Optional[int]:
    return getattr(model.__table__.c.slug.type, "length", None)


def slug_exists(
    db: Session,
    model,
    slug: str,
    scope: Optional[Mapping[str, Any]] = None,
    exclude_id: Any = None,
) -> bool:
    query = db.query(model.id).filter(model.slug == slug)
    for column, value in (scope or {}).items():
        query = query.filter(getattr(model, column) == value)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    return query.first() is not None


def unique_slug(
    db: Session,
    model,
    desired: Any,
    scope: Optional[Mapping[str, Any]] = None,
    exclude_id: Any = None,
) -> str:
    """Return ``slugify(desired)`` or the first free ``<base>-<n>`` in scope.

    ``scope`` maps column names to the values shared by sibling rows, e.g.
    ``{"category_id": 7}``; an empty scope means the whole table. The row being
    updated is passed as ``exclude_id`` so it never collides with itself.
    Every candidate fits the ``slug`` column; the base is cut to make room
    for the suffix.
    """
    limit = slug_column_length(model) or 0
    base = slugify(desired, max_length=limit)
    if not base:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unable to derive a slug from {desired!r}",
        )

    candidate = base
    suffix = 0
    while slug_exists(db, model, candidate, scope, exclude_id):
        suffix += 1
        tail = f"-{suffix}"
        stem = base[: limit - len(tail)].rstrip("-") if limit else base
        candidate = f"{stem}{tail}"
    return candidate


def resolve_slug_update(
    db: Session,
    model,
    obj,
    data: dict,
    source_field: str,
    scope: Mapping[str, Any],
    scope_changed: bool = False,
) -> None:
    """Apply the slug rules for a partial update, mutating ``data`` in place.

    - explicit non-empty slug: resolved as the desired text
    - explicit ``null`` slug: regenerated from the source field
    - source field changed and no slug supplied: regenerated
    - parent scope changed: current slug re-resolved in the new scope
    """
    if "slug" in data:
        desired = data["slug"] or data.get(source_field) or getattr(obj, source_field)
    elif source_field in data:
        desired = data[source_field]
    elif scope_changed:
        desired = obj.slug
    else:
        return
    data["slug"] = unique_slug(db, model, desired, scope=scope, exclude_id=obj.id)
