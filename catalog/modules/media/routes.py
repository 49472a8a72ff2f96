# catalog/modules/media/routes.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from catalog.common.listing import parse_bool
from catalog.core.responses import Envelope, ok
from catalog.db.deps import get_db
from catalog.modules.media.kinds import MEDIA_KINDS, MediaKind
from catalog.modules.media.service import MediaService


def build_media_router(kind: MediaKind) -> APIRouter:
    """CRUD routes for one media kind under ``/courses/{course_id}/<kind>``."""
    router = APIRouter(prefix="/courses/{course_id}/" + kind.path, tags=["media"])

    CreateSchema = kind.create_schema
    UpdateSchema = kind.update_schema
    ReadSchema = kind.read_schema

    @router.get("", response_model=Envelope[list[ReadSchema]], name=f"list_{kind.path}")
    def list_media(
        course_id: int,
        section_id: Optional[int] = Query(default=None),
        free_only: Optional[str] = Query(default=None),
        q: Optional[str] = Query(default=None),
        sort: Optional[str] = Query(default=None),
        page: Optional[int] = Query(default=None),
        per_page: Optional[int] = Query(default=None),
        db: Session = Depends(get_db),
    ):
        result = MediaService(db, kind).list_media(
            course_id,
            section_id=section_id,
            free_only=bool(parse_bool(free_only)),
            q=q,
            sort=sort,
            page=page,
            per_page=per_page,
        )
        return ok(
            [ReadSchema.model_validate(m) for m in result.items],
            f"{kind.plural_label} retrieved successfully",
            result.meta(),
        )

    @router.post(
        "",
        response_model=Envelope[ReadSchema],
        status_code=status.HTTP_201_CREATED,
        name=f"create_{kind.path}",
    )
    def create_media(course_id: int, payload: CreateSchema, db: Session = Depends(get_db)):
        media = MediaService(db, kind).create_media(course_id, payload.model_dump())
        return ok(ReadSchema.model_validate(media), f"{kind.label} created successfully")

    @router.get("/{media_id}", response_model=Envelope[ReadSchema], name=f"get_{kind.path}")
    def get_media(course_id: int, media_id: int, db: Session = Depends(get_db)):
        media = MediaService(db, kind).get_media(course_id, media_id)
        return ok(ReadSchema.model_validate(media), f"{kind.label} retrieved successfully")

    @router.put("/{media_id}", response_model=Envelope[ReadSchema], name=f"update_{kind.path}")
    def update_media(
        course_id: int,
        media_id: int,
        payload: UpdateSchema,
        db: Session = Depends(get_db),
    ):
        media = MediaService(db, kind).update_media(
            course_id, media_id, payload.model_dump(exclude_unset=True)
        )
        return ok(ReadSchema.model_validate(media), f"{kind.label} updated successfully")

    @router.delete("/{media_id}", response_model=Envelope[None], name=f"delete_{kind.path}")
    def delete_media(course_id: int, media_id: int, db: Session = Depends(get_db)):
        MediaService(db, kind).delete_media(course_id, media_id)
        return ok(None, f"{kind.label} deleted successfully")

    return router


router = APIRouter()
for _kind in MEDIA_KINDS:
    router.include_router(build_media_router(_kind))
