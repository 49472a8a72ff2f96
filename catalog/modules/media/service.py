from __future__ import annotations

from typing import Any, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from catalog.common.ordering import next_position
from catalog.common.pagination import Page, clamp_per_page, paginate
from catalog.common.scoping import get_or_404, get_scoped_or_404
from catalog.common.slugs import resolve_slug_update, unique_slug
from catalog.core.logging import get_logger
from catalog.modules.courses.models import Course, CourseSection
from catalog.modules.media.kinds import MediaKind
from catalog.modules.media.repository import MediaRepository

logger = get_logger(__name__)


class MediaService:
    """CRUD for one media kind, always scoped to a course."""

    def __init__(self, db: Session, kind: MediaKind):
        self.db = db
        self.kind = kind
        self.media_repo = MediaRepository(db, kind.model)

    def _course(self, course_id: int) -> Course:
        return get_or_404(self.db, Course, course_id, "Course")

    def _check_section(self, course_id: int, section_id: Optional[int]) -> None:
        if section_id is None:
            return
        section = self.db.get(CourseSection, section_id)
        if section is None or section.course_id != course_id:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="The selected section_id is invalid.",
            )

    def list_media(
        self,
        course_id: int,
        section_id: Optional[int] = None,
        free_only: bool = False,
        q: Optional[str] = None,
        sort: Optional[str] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> Page:
        self._course(course_id)
        query = self.media_repo.list_by_course(
            course_id, section_id=section_id, free_only=free_only, q=q, sort=sort
        )
        return paginate(query, page, clamp_per_page(per_page, default=50, maximum=100))

    def get_media(self, course_id: int, media_id: int) -> Any:
        self._course(course_id)
        return get_scoped_or_404(
            self.db, self.kind.model, media_id, "course_id", course_id, self.kind.label, "course"
        )

    def create_media(self, course_id: int, data: dict) -> Any:
        self._course(course_id)
        self._check_section(course_id, data.get("section_id"))
        model = self.kind.model

        data["slug"] = unique_slug(
            self.db, model, data.get("slug") or data["title"], scope={"course_id": course_id}
        )
        if data.get("position") is None:
            data["position"] = next_position(self.db, model.position, model.course_id == course_id)
        if data.get("is_free_preview") is None:
            data.pop("is_free_preview", None)

        media = self.media_repo.create(course_id=course_id, **data)
        self.db.commit()
        self.db.refresh(media)

        logger.info(
            "created media",
            kind=self.kind.path,
            media_id=media.id,
            course_id=course_id,
            slug=media.slug,
        )
        return media

    def update_media(self, course_id: int, media_id: int, data: dict) -> Any:
        media = self.get_media(course_id, media_id)
        self._check_section(course_id, data.get("section_id"))
        resolve_slug_update(
            self.db, self.kind.model, media, data, "title", scope={"course_id": course_id}
        )

        media = self.media_repo.update(media, **data)
        self.db.commit()
        self.db.refresh(media)
        return media

    def delete_media(self, course_id: int, media_id: int) -> None:
        media = self.get_media(course_id, media_id)
        self.media_repo.delete(media)
        self.db.commit()
        logger.info("deleted media", kind=self.kind.path, media_id=media_id, course_id=course_id)
