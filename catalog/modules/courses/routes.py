# catalog/modules/courses/routes.py
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from catalog.common.listing import parse_bool
from catalog.core.responses import Envelope, ok
from catalog.db.deps import get_db
from catalog.modules.courses.models import Course, CourseStatus
from catalog.modules.courses.service import (
    ChapterService,
    CourseService,
    SectionService,
    parse_embeds,
)
from catalog.schemas.common import ReorderRequest
from catalog.schemas.course import (
    ChapterCreate,
    ChapterRead,
    ChapterUpdate,
    CourseCreate,
    CourseRead,
    CourseUpdate,
    SectionCreate,
    SectionRead,
    SectionUpdate,
    SubcategorySummary,
)
from catalog.schemas.media import AudioRead, DocumentRead, ImageRead, VideoRead

router = APIRouter(prefix="/courses", tags=["courses"])

_EMBED_SCHEMAS = {
    "sections": SectionRead,
    "chapters": ChapterRead,
    "videos": VideoRead,
    "documents": DocumentRead,
    "audios": AudioRead,
    "images": ImageRead,
}


def serialize_course(course: Course, embeds: tuple[str, ...] = ()) -> dict[str, Any]:
    """Course fields plus whichever relationships were asked for with ``?with=``."""
    data = CourseRead.model_validate(course).model_dump(mode="json")
    for name in embeds:
        if name == "subcategory":
            data[name] = SubcategorySummary.model_validate(course.subcategory).model_dump(mode="json")
            continue
        schema = _EMBED_SCHEMAS[name]
        data[name] = [schema.model_validate(item).model_dump(mode="json") for item in getattr(course, name)]
    return data


# ---------- courses ----------


@router.get("", response_model=Envelope[list[dict[str, Any]]])
def list_courses(
    subcategory_id: Optional[int] = Query(default=None),
    category_id: Optional[int] = Query(default=None),
    course_status: Optional[CourseStatus] = Query(default=None, alias="status"),
    approved: Optional[str] = Query(default=None),
    is_premium: Optional[str] = Query(default=None),
    language: Optional[str] = Query(default=None),
    level: Optional[str] = Query(default=None),
    q: Optional[str] = Query(default=None, description="Search title and summary"),
    sort: Optional[str] = Query(default=None, description="e.g. -created_at,title"),
    with_: Optional[str] = Query(default=None, alias="with", description="e.g. sections,videos"),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    db: Session = Depends(get_db),
):
    """List courses, newest first unless another sort is given."""
    embeds = parse_embeds(with_)
    result = CourseService(db).list_courses(
        subcategory_id=subcategory_id,
        category_id=category_id,
        course_status=course_status,
        approved=parse_bool(approved),
        is_premium=parse_bool(is_premium),
        language=language,
        level=level,
        q=q,
        sort=sort,
        embeds=embeds,
        page=page,
        per_page=per_page,
    )
    return ok(
        [serialize_course(c, embeds) for c in result.items],
        "Courses retrieved successfully",
        result.meta(),
    )


@router.post("", response_model=Envelope[CourseRead], status_code=status.HTTP_201_CREATED)
def create_course(payload: CourseCreate, db: Session = Depends(get_db)):
    course = CourseService(db).create_course(payload.model_dump())
    return ok(CourseRead.model_validate(course), "Course created successfully")


@router.get("/{course_id}", response_model=Envelope[dict[str, Any]])
def get_course(
    course_id: int,
    with_: Optional[str] = Query(default=None, alias="with"),
    db: Session = Depends(get_db),
):
    embeds = parse_embeds(with_)
    course = CourseService(db).get_course(course_id, embeds)
    return ok(serialize_course(course, embeds), "Course retrieved successfully")


@router.put("/{course_id}", response_model=Envelope[CourseRead])
def update_course(course_id: int, payload: CourseUpdate, db: Session = Depends(get_db)):
    course = CourseService(db).update_course(course_id, payload.model_dump(exclude_unset=True))
    return ok(CourseRead.model_validate(course), "Course updated successfully")


@router.delete("/{course_id}", response_model=Envelope[None])
def delete_course(course_id: int, db: Session = Depends(get_db)):
    CourseService(db).delete_course(course_id)
    return ok(None, "Course deleted successfully")


# ---------- sections ----------


@router.get("/{course_id}/sections", response_model=Envelope[list[SectionRead]])
def list_sections(
    course_id: int,
    sort: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    db: Session = Depends(get_db),
):
    result = SectionService(db).list_sections(course_id, sort=sort, page=page, per_page=per_page)
    return ok(
        [SectionRead.model_validate(s) for s in result.items],
        "Sections retrieved successfully",
        result.meta(),
    )


@router.post(
    "/{course_id}/sections",
    response_model=Envelope[SectionRead],
    status_code=status.HTTP_201_CREATED,
)
def create_section(course_id: int, payload: SectionCreate, db: Session = Depends(get_db)):
    section = SectionService(db).create_section(course_id, payload.model_dump())
    return ok(SectionRead.model_validate(section), "Section created successfully")


@router.post("/{course_id}/sections/reorder", response_model=Envelope[None])
def reorder_sections(course_id: int, payload: ReorderRequest, db: Session = Depends(get_db)):
    SectionService(db).reorder_sections(course_id, payload.orders)
    return ok(None, "Sections reordered successfully")


@router.get("/{course_id}/sections/{section_id}", response_model=Envelope[SectionRead])
def get_section(course_id: int, section_id: int, db: Session = Depends(get_db)):
    section = SectionService(db).get_section(course_id, section_id)
    return ok(SectionRead.model_validate(section), "Section retrieved successfully")


@router.put("/{course_id}/sections/{section_id}", response_model=Envelope[SectionRead])
def update_section(
    course_id: int,
    section_id: int,
    payload: SectionUpdate,
    db: Session = Depends(get_db),
):
    section = SectionService(db).update_section(
        course_id, section_id, payload.model_dump(exclude_unset=True)
    )
    return ok(SectionRead.model_validate(section), "Section updated successfully")


@router.delete("/{course_id}/sections/{section_id}", response_model=Envelope[None])
def delete_section(course_id: int, section_id: int, db: Session = Depends(get_db)):
    SectionService(db).delete_section(course_id, section_id)
    return ok(None, "Section deleted successfully")


# ---------- chapters ----------


@router.get("/{course_id}/chapters", response_model=Envelope[list[ChapterRead]])
def list_chapters(
    course_id: int,
    sort: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    db: Session = Depends(get_db),
):
    result = ChapterService(db).list_chapters(course_id, sort=sort, page=page, per_page=per_page)
    return ok(
        [ChapterRead.model_validate(c) for c in result.items],
        "Chapters retrieved successfully",
        result.meta(),
    )


@router.post(
    "/{course_id}/chapters",
    response_model=Envelope[ChapterRead],
    status_code=status.HTTP_201_CREATED,
)
def create_chapter(course_id: int, payload: ChapterCreate, db: Session = Depends(get_db)):
    chapter = ChapterService(db).create_chapter(course_id, payload.model_dump())
    return ok(ChapterRead.model_validate(chapter), "Chapter created successfully")


@router.get("/{course_id}/chapters/{chapter_id}", response_model=Envelope[ChapterRead])
def get_chapter(course_id: int, chapter_id: int, db: Session = Depends(get_db)):
    chapter = ChapterService(db).get_chapter(course_id, chapter_id)
    return ok(ChapterRead.model_validate(chapter), "Chapter retrieved successfully")


@router.put("/{course_id}/chapters/{chapter_id}", response_model=Envelope[ChapterRead])
def update_chapter(
    course_id: int,
    chapter_id: int,
    payload: ChapterUpdate,
    db: Session = Depends(get_db),
):
    chapter = ChapterService(db).update_chapter(
        course_id, chapter_id, payload.model_dump(exclude_unset=True)
    )
    return ok(ChapterRead.model_validate(chapter), "Chapter updated successfully")


@router.delete("/{course_id}/chapters/{chapter_id}", response_model=Envelope[None])
def delete_chapter(course_id: int, chapter_id: int, db: Session = Depends(get_db)):
    ChapterService(db).delete_chapter(course_id, chapter_id)
    return ok(None, "Chapter deleted successfully")
