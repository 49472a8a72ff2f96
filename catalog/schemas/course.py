from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from catalog.modules.courses.models import CourseStatus


class CourseBase(BaseModel):
    summary: Optional[str] = None
    thumbnail_url: Optional[str] = Field(default=None, max_length=255)
    language: Optional[str] = Field(default=None, max_length=40)
    level: Optional[str] = Field(default=None, max_length=40)
    is_premium: Optional[bool] = None
    status: Optional[CourseStatus] = None
    approved: Optional[bool] = None
    price: Optional[float] = Field(default=None, ge=0)


class CourseCreate(CourseBase):
    subcategory_id: int
    user_id: str = Field(min_length=1, max_length=122)
    title: str = Field(min_length=1, max_length=180)
    slug: Optional[str] = Field(default=None, max_length=200)


class CourseUpdate(CourseBase):
    subcategory_id: Optional[int] = None
    user_id: Optional[str] = Field(default=None, min_length=1, max_length=122)
    title: Optional[str] = Field(default=None, min_length=1, max_length=180)
    slug: Optional[str] = Field(default=None, max_length=200)


class CourseRead(BaseModel):
    id: int
    subcategory_id: int
    user_id: Optional[str] = None
    title: str
    slug: str
    summary: Optional[str] = None
    thumbnail_url: Optional[str] = None
    language: Optional[str] = None
    level: Optional[str] = None
    is_premium: bool
    status: CourseStatus
    approved: bool
    price: Optional[float] = None
    sections_count: int = 0
    chapters_count: int = 0
    videos_count: int = 0
    documents_count: int = 0
    audios_count: int = 0
    images_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SectionCreate(BaseModel):
    title: str = Field(min_length=1, max_length=160)
    position: Optional[int] = Field(default=None, ge=0)


class SectionUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=160)
    position: Optional[int] = Field(default=None, ge=0)


class SectionRead(BaseModel):
    id: int
    course_id: int
    title: str
    position: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ChapterCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    position: Optional[int] = Field(default=None, ge=1)


class ChapterUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    position: Optional[int] = Field(default=None, ge=1)


class ChapterRead(BaseModel):
    id: int
    course_id: int
    title: str
    description: Optional[str] = None
    position: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SubcategorySummary(BaseModel):
    id: int
    category_id: int
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)
