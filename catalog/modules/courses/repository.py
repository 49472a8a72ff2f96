from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Query, selectinload

from catalog.common.listing import apply_search, apply_sort
from catalog.db.repository import BaseRepository
from catalog.modules.categories.models import Subcategory
from catalog.modules.courses.models import Course, CourseChapter, CourseSection, CourseStatus

COURSE_SORTS = ("title", "created_at", "updated_at", "status", "approved", "price")
SECTION_SORTS = ("title", "position", "created_at", "updated_at")
CHAPTER_SORTS = ("title", "position", "created_at", "updated_at")

# relationships that ?with= may embed
COURSE_EMBEDS = ("sections", "chapters", "videos", "documents", "audios", "images", "subcategory")


class CourseRepository(BaseRepository[Course]):
    """Repository for Course entity."""

    model = Course

    def search(
        self,
        subcategory_id: Optional[int] = None,
        category_id: Optional[int] = None,
        status: Optional[CourseStatus] = None,
        approved: Optional[bool] = None,
        is_premium: Optional[bool] = None,
        language: Optional[str] = None,
        level: Optional[str] = None,
        q: Optional[str] = None,
        sort: Optional[str] = None,
        embeds: tuple[str, ...] = (),
    ) -> Query:
        query = self.with_embeds(self.query(), embeds)

        if subcategory_id is not None:
            query = query.filter(Course.subcategory_id == subcategory_id)
        if category_id is not None:
            query = query.join(Course.subcategory).filter(Subcategory.category_id == category_id)
        if status is not None:
            query = query.filter(Course.status == status)
        if approved is not None:
            query = query.filter(Course.approved == approved)
        if is_premium is not None:
            query = query.filter(Course.is_premium == is_premium)
        if language:
            query = query.filter(Course.language == language)
        if level:
            query = query.filter(Course.level == level)

        query = apply_search(query, q, (Course.title, Course.summary))
        return apply_sort(
            query, Course, sort, COURSE_SORTS, default=(Course.created_at.desc(), Course.id.desc())
        )

    def with_embeds(self, query: Query, embeds: tuple[str, ...]) -> Query:
        for name in embeds:
            query = query.options(selectinload(getattr(Course, name)))
        return query

    def get_with_embeds(self, course_id: int, embeds: tuple[str, ...] = ()) -> Optional[Course]:
        query = self.with_embeds(self.query(), embeds)
        return query.filter(Course.id == course_id).first()


class SectionRepository(BaseRepository[CourseSection]):
    """Repository for CourseSection entity."""

    model = CourseSection

    def list_by_course(self, course_id: int, sort: Optional[str] = None) -> Query:
        query = self.query().filter(CourseSection.course_id == course_id)
        return apply_sort(
            query,
            CourseSection,
            sort,
            SECTION_SORTS,
            default=(CourseSection.position.asc(), CourseSection.id.asc()),
        )


class ChapterRepository(BaseRepository[CourseChapter]):
    """Repository for CourseChapter entity."""

    model = CourseChapter

    def list_by_course(self, course_id: int, sort: Optional[str] = None) -> Query:
        query = self.query().filter(CourseChapter.course_id == course_id)
        return apply_sort(
            query,
            CourseChapter,
            sort,
            CHAPTER_SORTS,
            default=(CourseChapter.position.asc(), CourseChapter.id.asc()),
        )
