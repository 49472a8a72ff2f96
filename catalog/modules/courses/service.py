from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from catalog.common.listing import parse_csv
from catalog.common.ordering import next_position, reorder
from catalog.common.pagination import Page, clamp_per_page, paginate
from catalog.common.scoping import get_or_404, get_scoped_or_404
from catalog.common.slugs import resolve_slug_update, unique_slug
from catalog.core.logging import get_logger
from catalog.modules.categories.models import Subcategory
from catalog.modules.courses.models import Course, CourseChapter, CourseSection, CourseStatus
from catalog.modules.courses.repository import (
    COURSE_EMBEDS,
    ChapterRepository,
    CourseRepository,
    SectionRepository,
)
from catalog.modules.users.models import User

logger = get_logger(__name__)


def parse_embeds(value: Optional[str]) -> tuple[str, ...]:
    """``?with=sections,videos`` -> known relationship names, unknown ones dropped."""
    return tuple(name for name in dict.fromkeys(parse_csv(value)) if name in COURSE_EMBEDS)


def _invalid(field: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=f"The selected {field} is invalid.",
    )


class CourseService:
    """Service layer for course operations."""

    def __init__(self, db: Session):
        self.db = db
        self.course_repo = CourseRepository(db)

    def list_courses(
        self,
        subcategory_id: Optional[int] = None,
        category_id: Optional[int] = None,
        course_status: Optional[CourseStatus] = None,
        approved: Optional[bool] = None,
        is_premium: Optional[bool] = None,
        language: Optional[str] = None,
        level: Optional[str] = None,
        q: Optional[str] = None,
        sort: Optional[str] = None,
        embeds: tuple[str, ...] = (),
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> Page:
        query = self.course_repo.search(
            subcategory_id=subcategory_id,
            category_id=category_id,
            status=course_status,
            approved=approved,
            is_premium=is_premium,
            language=language,
            level=level,
            q=q,
            sort=sort,
            embeds=embeds,
        )
        return paginate(query, page, clamp_per_page(per_page, default=20, maximum=100))

    def get_course(self, course_id: int, embeds: tuple[str, ...] = ()) -> Course:
        course = self.course_repo.get_with_embeds(course_id, embeds)
        if not course:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Course not found",
            )
        return course

    def _check_references(self, data: dict) -> None:
        if "subcategory_id" in data and self.db.get(Subcategory, data["subcategory_id"]) is None:
            raise _invalid("subcategory_id")
        if "user_id" in data and self.db.get(User, data["user_id"]) is None:
            raise _invalid("user_id")

    def create_course(self, data: dict) -> Course:
        self._check_references(data)

        data["slug"] = unique_slug(
            self.db,
            Course,
            data.get("slug") or data["title"],
            scope={"subcategory_id": data["subcategory_id"]},
        )
        # leave NOT NULL flags to their column defaults
        for key in ("is_premium", "approved", "status"):
            if data.get(key) is None:
                data.pop(key, None)

        course = self.course_repo.create(**data)
        self.db.commit()
        self.db.refresh(course)

        logger.info("created course", course_id=course.id, slug=course.slug)
        return course

    def update_course(self, course_id: int, data: dict) -> Course:
        course = self.get_course(course_id)

        for key in ("subcategory_id", "user_id"):
            if key in data and data[key] is None:
                data.pop(key)
        self._check_references(data)

        subcategory_id = data.get("subcategory_id", course.subcategory_id)
        resolve_slug_update(
            self.db,
            Course,
            course,
            data,
            "title",
            scope={"subcategory_id": subcategory_id},
            scope_changed=subcategory_id != course.subcategory_id,
        )

        course = self.course_repo.update(course, **data)
        self.db.commit()
        self.db.refresh(course)
        return course

    def delete_course(self, course_id: int) -> None:
        """Delete a course with its sections, chapters and media."""
        course = self.get_course(course_id)
        self.course_repo.delete(course)
        self.db.commit()
        logger.info("deleted course", course_id=course_id)


class SectionService:
    """Sections are always addressed through their course."""

    def __init__(self, db: Session):
        self.db = db
        self.section_repo = SectionRepository(db)

    def _course(self, course_id: int) -> Course:
        return get_or_404(self.db, Course, course_id, "Course")

    def list_sections(
        self,
        course_id: int,
        sort: Optional[str] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> Page:
        self._course(course_id)
        query = self.section_repo.list_by_course(course_id, sort=sort)
        return paginate(query, page, clamp_per_page(per_page, default=100, maximum=100))

    def get_section(self, course_id: int, section_id: int) -> CourseSection:
        self._course(course_id)
        return get_scoped_or_404(
            self.db, CourseSection, section_id, "course_id", course_id, "Section", "course"
        )

    def create_section(self, course_id: int, data: dict) -> CourseSection:
        self._course(course_id)
        if data.get("position") is None:
            data["position"] = next_position(
                self.db, CourseSection.position, CourseSection.course_id == course_id
            )

        section = self.section_repo.create(course_id=course_id, **data)
        self.db.commit()
        self.db.refresh(section)

        logger.info("created section", section_id=section.id, course_id=course_id)
        return section

    def update_section(self, course_id: int, section_id: int, data: dict) -> CourseSection:
        section = self.get_section(course_id, section_id)
        section = self.section_repo.update(section, **data)
        self.db.commit()
        self.db.refresh(section)
        return section

    def delete_section(self, course_id: int, section_id: int) -> None:
        """Delete a section; its media stay on the course without a section."""
        section = self.get_section(course_id, section_id)
        self.section_repo.delete(section)
        self.db.commit()
        logger.info("deleted section", section_id=section_id, course_id=course_id)

    def reorder_sections(self, course_id: int, orders) -> None:
        self._course(course_id)
        try:
            reorder(
                self.db,
                CourseSection,
                orders,
                criteria=(CourseSection.course_id == course_id,),
                not_found=lambda obj_id: f"Section {obj_id} not in course",
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("reordered sections", course_id=course_id, count=len(orders))


class ChapterService:
    """Chapters nested under a course."""

    def __init__(self, db: Session):
        self.db = db
        self.chapter_repo = ChapterRepository(db)

    def _course(self, course_id: int) -> Course:
        return get_or_404(self.db, Course, course_id, "Course")

    def list_chapters(
        self,
        course_id: int,
        sort: Optional[str] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> Page:
        self._course(course_id)
        query = self.chapter_repo.list_by_course(course_id, sort=sort)
        return paginate(query, page, clamp_per_page(per_page, default=100, maximum=100))

    def get_chapter(self, course_id: int, chapter_id: int) -> CourseChapter:
        self._course(course_id)
        return get_scoped_or_404(
            self.db, CourseChapter, chapter_id, "course_id", course_id, "Chapter", "course"
        )

    def create_chapter(self, course_id: int, data: dict) -> CourseChapter:
        self._course(course_id)
        if data.get("position") is None:
            data["position"] = next_position(
                self.db, CourseChapter.position, CourseChapter.course_id == course_id, start=1
            )

        chapter = self.chapter_repo.create(course_id=course_id, **data)
        self.db.commit()
        self.db.refresh(chapter)

        logger.info("created chapter", chapter_id=chapter.id, course_id=course_id)
        return chapter

    def update_chapter(self, course_id: int, chapter_id: int, data: dict) -> CourseChapter:
        chapter = self.get_chapter(course_id, chapter_id)
        chapter = self.chapter_repo.update(chapter, **data)
        self.db.commit()
        self.db.refresh(chapter)
        return chapter

    def delete_chapter(self, course_id: int, chapter_id: int) -> None:
        chapter = self.get_chapter(course_id, chapter_id)
        self.chapter_repo.delete(chapter)
        self.db.commit()
        logger.info("deleted chapter", chapter_id=chapter_id, course_id=course_id)
