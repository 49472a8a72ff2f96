from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from catalog.common.ordering import next_position, reorder
from catalog.common.pagination import Page, clamp_per_page, paginate
from catalog.common.scoping import get_or_404
from catalog.common.slugs import resolve_slug_update, unique_slug
from catalog.core.logging import get_logger
from catalog.modules.categories.models import Category, Subcategory
from catalog.modules.categories.repository import CategoryRepository, SubcategoryRepository

logger = get_logger(__name__)


class CategoryService:
    """Service layer for category operations."""

    def __init__(self, db: Session):
        self.db = db
        self.category_repo = CategoryRepository(db)

    def list_categories(
        self,
        q: Optional[str] = None,
        active: Optional[bool] = None,
        sort: Optional[str] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> Page:
        query = self.category_repo.search(q=q, active=active, sort=sort)
        return paginate(query, page, clamp_per_page(per_page, default=20, maximum=100))

    def get_category(self, category_id: int) -> Category:
        return get_or_404(self.db, Category, category_id, "Category")

    def create_category(self, data: dict) -> Category:
        data["slug"] = unique_slug(self.db, Category, data.get("slug") or data["name"])
        if data.get("position") is None:
            data["position"] = next_position(self.db, Category.position)
        if data.get("is_active") is None:
            data.pop("is_active", None)

        category = self.category_repo.create(**data)
        self.db.commit()
        self.db.refresh(category)

        logger.info("created category", category_id=category.id, slug=category.slug)
        return category

    def update_category(self, category_id: int, data: dict) -> Category:
        category = self.get_category(category_id)
        resolve_slug_update(self.db, Category, category, data, "name", scope={})

        category = self.category_repo.update(category, **data)
        self.db.commit()
        self.db.refresh(category)
        return category

    def delete_category(self, category_id: int) -> None:
        category = self.get_category(category_id)
        self.category_repo.delete(category)
        self.db.commit()
        logger.info("deleted category", category_id=category_id)

    def reorder_categories(self, orders) -> None:
        try:
            reorder(
                self.db,
                Category,
                orders,
                not_found=lambda obj_id: f"Category {obj_id} not found",
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("reordered categories", count=len(orders))


class SubcategoryService:
    """Subcategories, both flat and nested under their category."""

    def __init__(self, db: Session):
        self.db = db
        self.subcategory_repo = SubcategoryRepository(db)

    def list_subcategories(
        self,
        category_id: Optional[int] = None,
        q: Optional[str] = None,
        active: Optional[bool] = None,
        sort: Optional[str] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        nested: bool = False,
    ) -> Page:
        if nested:
            get_or_404(self.db, Category, category_id, "Category")
            per_page = clamp_per_page(per_page, default=50, maximum=100)
        else:
            per_page = clamp_per_page(per_page, default=20, maximum=100)

        query = self.subcategory_repo.search(
            category_id=category_id, q=q, active=active, sort=sort
        )
        return paginate(query, page, per_page)

    def get_subcategory(self, subcategory_id: int) -> Subcategory:
        return get_or_404(self.db, Subcategory, subcategory_id, "Subcategory")

    def create_subcategory(self, category_id: int, data: dict) -> Subcategory:
        get_or_404(self.db, Category, category_id, "Category")

        data["category_id"] = category_id
        data["slug"] = unique_slug(
            self.db,
            Subcategory,
            data.get("slug") or data["name"],
            scope={"category_id": category_id},
        )
        if data.get("position") is None:
            data["position"] = next_position(
                self.db, Subcategory.position, Subcategory.category_id == category_id
            )
        if data.get("is_active") is None:
            data.pop("is_active", None)

        subcategory = self.subcategory_repo.create(**data)
        self.db.commit()
        self.db.refresh(subcategory)

        logger.info(
            "created subcategory",
            subcategory_id=subcategory.id,
            category_id=category_id,
            slug=subcategory.slug,
        )
        return subcategory

    def update_subcategory(self, subcategory_id: int, data: dict) -> Subcategory:
        subcategory = self.get_subcategory(subcategory_id)

        if data.get("category_id") is None:
            data.pop("category_id", None)
        category_id = data.get("category_id", subcategory.category_id)
        moved = category_id != subcategory.category_id
        if moved and self.db.get(Category, category_id) is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="The selected category_id is invalid.",
            )

        resolve_slug_update(
            self.db,
            Subcategory,
            subcategory,
            data,
            "name",
            scope={"category_id": category_id},
            scope_changed=moved,
        )

        subcategory = self.subcategory_repo.update(subcategory, **data)
        self.db.commit()
        self.db.refresh(subcategory)
        return subcategory

    def delete_subcategory(self, subcategory_id: int) -> None:
        subcategory = self.get_subcategory(subcategory_id)
        self.subcategory_repo.delete(subcategory)
        self.db.commit()
        logger.info("deleted subcategory", subcategory_id=subcategory_id)

    def reorder_subcategories(self, category_id: int, orders) -> None:
        get_or_404(self.db, Category, category_id, "Category")
        try:
            reorder(
                self.db,
                Subcategory,
                orders,
                criteria=(Subcategory.category_id == category_id,),
                not_found=lambda obj_id: f"Subcategory {obj_id} not in this category",
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("reordered subcategories", category_id=category_id, count=len(orders))
