"""Registry of the media kinds that can be attached to a course."""
from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from catalog.db.base import Base
from catalog.modules.media.models import CourseAudio, CourseDocument, CourseImage, CourseVideo
from catalog.schemas import media as schemas


@dataclass(frozen=True)
class MediaKind:
    path: str  # URL segment under /courses/{course_id}/
    label: str
    plural_label: str
    model: type[Base]
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    read_schema: type[BaseModel]


VIDEOS = MediaKind(
    path="videos",
    label="Video",
    plural_label="Videos",
    model=CourseVideo,
    create_schema=schemas.VideoCreate,
    update_schema=schemas.VideoUpdate,
    read_schema=schemas.VideoRead,
)

DOCUMENTS = MediaKind(
    path="documents",
    label="Document",
    plural_label="Documents",
    model=CourseDocument,
    create_schema=schemas.DocumentCreate,
    update_schema=schemas.DocumentUpdate,
    read_schema=schemas.DocumentRead,
)

AUDIOS = MediaKind(
    path="audios",
    label="Audio",
    plural_label="Audios",
    model=CourseAudio,
    create_schema=schemas.AudioCreate,
    update_schema=schemas.AudioUpdate,
    read_schema=schemas.AudioRead,
)

IMAGES = MediaKind(
    path="images",
    label="Image",
    plural_label="Images",
    model=CourseImage,
    create_schema=schemas.ImageCreate,
    update_schema=schemas.ImageUpdate,
    read_schema=schemas.ImageRead,
)

MEDIA_KINDS = (VIDEOS, DOCUMENTS, AUDIOS, IMAGES)
