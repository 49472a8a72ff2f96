# catalog/common/ordering.py
"""Display-order helpers for rows carrying a ``position`` column."""
from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session


def next_position(db: Session, column, *criteria, start: int = 0) -> int:
    """One past the highest position among rows matching ``criteria``."""
    current = db.query(func.max(column)).filter(*criteria).scalar()
    return start if current is None else current + 1


def reorder(
    db: Session,
    model,
    orders: Sequence[Any],
    criteria: Sequence[Any] = (),
    not_found: Callable[[int], str] = lambda obj_id: f"Record {obj_id} not found",
) -> list[Any]:
    """Apply ``(id, position)`` pairs as one batch.

    Every id must match ``criteria`` (the parent scope); otherwise a 422 is
    raised before any row is touched. The caller commits.
    """
    ids = [row.id for row in orders]
    rows = {
        obj.id: obj
        for obj in db.query(model).filter(model.id.in_(ids), *criteria).all()
    }

    for obj_id in ids:
        if obj_id not in rows:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=not_found(obj_id),
            )

    for row in orders:
        rows[row.id].position = row.position
    db.flush()
    return list(rows.values())
