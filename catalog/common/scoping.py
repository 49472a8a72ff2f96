# catalog/common/scoping.py
"""Found-or-404 lookups, including child-inside-parent checks."""
from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status
from sqlalchemy.orm import Session


def get_or_404(db: Session, model, obj_id: Any, label: str):
    obj = db.get(model, obj_id)
    if obj is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} not found",
        )
    return obj


def get_scoped_or_404(
    db: Session,
    model,
    obj_id: Any,
    parent_field: str,
    parent_id: Any,
    label: str,
    parent_label: str,
):
    """Fetch ``model`` by id and make sure it belongs to ``parent_id``.

    A row stored under another parent is reported exactly like a missing row
    so callers never leak records across parents.
    """
    obj = db.get(model, obj_id)
    if obj is None or getattr(obj, parent_field) != parent_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} not found in this {parent_label}",
        )
    return obj
