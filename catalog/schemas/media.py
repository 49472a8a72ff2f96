import json
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MediaCreateBase(BaseModel):
    section_id: Optional[int] = None
    title: str = Field(min_length=1, max_length=180)
    slug: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    size_bytes: Optional[int] = Field(default=None, ge=0)
    mime_type: Optional[str] = Field(default=None, max_length=60)
    is_free_preview: Optional[bool] = None
    position: Optional[int] = Field(default=None, ge=0)


class MediaUpdateBase(BaseModel):
    section_id: Optional[int] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=180)
    slug: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    size_bytes: Optional[int] = Field(default=None, ge=0)
    mime_type: Optional[str] = Field(default=None, max_length=60)
    is_free_preview: Optional[bool] = None
    position: Optional[int] = Field(default=None, ge=0)


class MediaReadBase(BaseModel):
    id: int
    course_id: int
    section_id: Optional[int] = None
    title: str
    slug: str
    description: Optional[str] = None
    size_bytes: Optional[int] = None
    mime_type: Optional[str] = None
    is_free_preview: bool
    position: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ---------- videos ----------


class _CaptionsMixin(BaseModel):
    captions_json: Optional[Union[list[Any], dict[str, Any], str]] = None

    @field_validator("captions_json")
    @classmethod
    def decode_captions(cls, value):
        # clients may send the captions already serialised
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except ValueError as exc:
                raise ValueError("captions_json must be valid JSON") from exc
        return value


class VideoCreate(_CaptionsMixin, MediaCreateBase):
    playback_url: str = Field(min_length=1, max_length=255)
    duration_seconds: Optional[int] = Field(default=None, ge=0)
    width: Optional[int] = Field(default=None, ge=0)
    height: Optional[int] = Field(default=None, ge=0)
    drm_license_url: Optional[str] = Field(default=None, max_length=255)


class VideoUpdate(_CaptionsMixin, MediaUpdateBase):
    playback_url: Optional[str] = Field(default=None, min_length=1, max_length=255)
    duration_seconds: Optional[int] = Field(default=None, ge=0)
    width: Optional[int] = Field(default=None, ge=0)
    height: Optional[int] = Field(default=None, ge=0)
    drm_license_url: Optional[str] = Field(default=None, max_length=255)


class VideoRead(MediaReadBase):
    playback_url: str
    duration_seconds: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    captions_json: Optional[Any] = None
    drm_license_url: Optional[str] = None


# ---------- documents ----------


class DocumentCreate(MediaCreateBase):
    file_url: str = Field(min_length=1, max_length=255)
    pages: Optional[int] = Field(default=None, ge=0)
    language: Optional[str] = Field(default=None, max_length=40)


class DocumentUpdate(MediaUpdateBase):
    file_url: Optional[str] = Field(default=None, min_length=1, max_length=255)
    pages: Optional[int] = Field(default=None, ge=0)
    language: Optional[str] = Field(default=None, max_length=40)


class DocumentRead(MediaReadBase):
    file_url: str
    pages: Optional[int] = None
    language: Optional[str] = None


# ---------- audios ----------


class AudioCreate(MediaCreateBase):
    playback_url: str = Field(min_length=1, max_length=255)
    duration_seconds: Optional[int] = Field(default=None, ge=0)
    language: Optional[str] = Field(default=None, max_length=40)


class AudioUpdate(MediaUpdateBase):
    playback_url: Optional[str] = Field(default=None, min_length=1, max_length=255)
    duration_seconds: Optional[int] = Field(default=None, ge=0)
    language: Optional[str] = Field(default=None, max_length=40)


class AudioRead(MediaReadBase):
    playback_url: str
    duration_seconds: Optional[int] = None
    language: Optional[str] = None


# ---------- images ----------


class ImageCreate(MediaCreateBase):
    image_url: str = Field(min_length=1, max_length=255)
    width: Optional[int] = Field(default=None, ge=0)
    height: Optional[int] = Field(default=None, ge=0)


class ImageUpdate(MediaUpdateBase):
    image_url: Optional[str] = Field(default=None, min_length=1, max_length=255)
    width: Optional[int] = Field(default=None, ge=0)
    height: Optional[int] = Field(default=None, ge=0)


class ImageRead(MediaReadBase):
    image_url: str
    width: Optional[int] = None
    height: Optional[int] = None
