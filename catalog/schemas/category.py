from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CategoryBase(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    slug: Optional[str] = Field(default=None, max_length=140)
    description: Optional[str] = None
    position: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    slug: Optional[str] = Field(default=None, max_length=140)
    description: Optional[str] = None
    position: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class CategorySummary(BaseModel):
    id: int
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class CategoryRead(CategorySummary):
    description: Optional[str] = None
    position: int
    is_active: bool
    subcategories_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SubcategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    slug: Optional[str] = Field(default=None, max_length=160)
    description: Optional[str] = None
    position: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class SubcategoryUpdate(BaseModel):
    # moving a subcategory re-resolves its slug inside the new category
    category_id: Optional[int] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    slug: Optional[str] = Field(default=None, max_length=160)
    description: Optional[str] = None
    position: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class SubcategoryRead(BaseModel):
    id: int
    category_id: int
    name: str
    slug: str
    description: Optional[str] = None
    position: int
    is_active: bool
    courses_count: int = 0
    category: Optional[CategorySummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
