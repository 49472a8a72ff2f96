from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Query, Session

from catalog.common.listing import apply_search, apply_sort
from catalog.db.repository import BaseRepository

MEDIA_SORTS = ("title", "slug", "position", "size_bytes", "created_at", "updated_at")


class MediaRepository(BaseRepository):
    """Repository over one media table; the model is chosen per instance."""

    def __init__(self, db: Session, model):
        super().__init__(db)
        self.model = model

    def list_by_course(
        self,
        course_id: int,
        section_id: Optional[int] = None,
        free_only: bool = False,
        q: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> Query:
        model = self.model
        query = self.query().filter(model.course_id == course_id)
        if section_id is not None:
            query = query.filter(model.section_id == section_id)
        if free_only:
            query = query.filter(model.is_free_preview == True)  # noqa: E712
        query = apply_search(query, q, (model.title, model.slug, model.description))
        return apply_sort(
            query, model, sort, MEDIA_SORTS, default=(model.position.asc(), model.id.asc())
        )
