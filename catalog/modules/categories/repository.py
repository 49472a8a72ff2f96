from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Query, joinedload

from catalog.common.listing import apply_search, apply_sort
from catalog.db.repository import BaseRepository
from catalog.modules.categories.models import Category, Subcategory

CATEGORY_SORTS = ("name", "slug", "position", "is_active", "created_at", "updated_at")
SUBCATEGORY_SORTS = ("name", "slug", "position", "is_active", "created_at", "updated_at")


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category entity."""

    model = Category

    def search(
        self,
        q: Optional[str] = None,
        active: Optional[bool] = None,
        sort: Optional[str] = None,
    ) -> Query:
        query = apply_search(
            self.query(), q, (Category.name, Category.slug, Category.description)
        )
        if active is not None:
            query = query.filter(Category.is_active == active)
        return apply_sort(
            query,
            Category,
            sort,
            CATEGORY_SORTS,
            default=(Category.position.asc(), Category.name.asc()),
        )


class SubcategoryRepository(BaseRepository[Subcategory]):
    """Repository for Subcategory entity."""

    model = Subcategory

    def search(
        self,
        category_id: Optional[int] = None,
        q: Optional[str] = None,
        active: Optional[bool] = None,
        sort: Optional[str] = None,
    ) -> Query:
        query = self.query().options(joinedload(Subcategory.category))
        if category_id is not None:
            query = query.filter(Subcategory.category_id == category_id)
        query = apply_search(
            query, q, (Subcategory.name, Subcategory.slug, Subcategory.description)
        )
        if active is not None:
            query = query.filter(Subcategory.is_active == active)
        return apply_sort(
            query,
            Subcategory,
            sort,
            SUBCATEGORY_SORTS,
            default=(Subcategory.position.asc(), Subcategory.name.asc()),
        )
