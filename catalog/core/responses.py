# catalog/core/responses.py
"""Uniform JSON envelope returned by every endpoint."""
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PageMeta(BaseModel):
    current_page: int
    per_page: int
    total: int
    last_page: int


class Envelope(BaseModel, Generic[T]):
    status: str = "success"
    message: Optional[str] = None
    data: T
    meta: Optional[dict[str, Any]] = None


def ok(data: Any = None, message: Optional[str] = None, meta: Optional[dict] = None) -> dict:
    return {"status": "success", "message": message, "data": data, "meta": meta}


def fail(message: str, **extra: Any) -> dict:
    return {"status": "error", "message": message, **extra}
