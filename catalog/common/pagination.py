# catalog/common/pagination.py
"""Offset pagination with page/per_page clamping."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import Query


@dataclass
class Page:
    items: list[Any]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    def meta(self, **extra: Any) -> dict[str, Any]:
        return {
            "current_page": self.page,
            "per_page": self.per_page,
            "total": self.total,
            "last_page": self.last_page,
            **extra,
        }


def clamp_per_page(value: Optional[int], default: int, maximum: int) -> int:
    """Clamp a requested page size into ``[1, maximum]``."""
    if value is None:
        value = default
    return min(maximum, max(1, value))


def paginate(query: Query, page: Optional[int], per_page: int) -> Page:
    page = max(1, page or 1)
    total = query.order_by(None).count()
    items = query.offset((page - 1) * per_page).limit(per_page).all()
    return Page(items=items, total=total, page=page, per_page=per_page)
