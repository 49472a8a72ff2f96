"""Tests for category service business logic."""
import pytest
from fastapi import HTTPException

from catalog.modules.categories.models import Category
from catalog.modules.categories.service import CategoryService, SubcategoryService
from catalog.schemas.common import ReorderItem


class TestCategoryService:
    def test_positions_continue_after_highest(self, db):
        service = CategoryService(db)
        service.create_category({"name": "First", "position": 4})

        second = service.create_category({"name": "Second"})

        assert second.position == 5

    def test_explicit_null_keeps_not_null_columns(self, db, category):
        updated = CategoryService(db).update_category(
            category.id, {"is_active": None, "description": None}
        )

        assert updated.is_active is True
        assert updated.description is None

    def test_reorder_is_all_or_nothing(self, db, category):
        with pytest.raises(HTTPException) as exc:
            CategoryService(db).reorder_categories(
                [ReorderItem(id=category.id, position=9), ReorderItem(id=12345, position=1)]
            )

        assert exc.value.status_code == 422
        assert exc.value.detail == "Category 12345 not found"
        db.expire_all()
        assert db.get(Category, category.id).position == 0


class TestSubcategoryService:
    def test_position_is_per_category(self, db, category, subcategory):
        other = CategoryService(db).create_category({"name": "Design"})
        service = SubcategoryService(db)

        in_same = service.create_subcategory(category.id, {"name": "Django"})
        in_other = service.create_subcategory(other.id, {"name": "Figma"})

        assert in_same.position == 1
        assert in_other.position == 0

    def test_explicit_slug_runs_through_resolver(self, db, category, subcategory):
        created = SubcategoryService(db).create_subcategory(
            category.id, {"name": "Other", "slug": "Python"}
        )
        assert created.slug == "python-1"

    def test_get_missing(self, db):
        with pytest.raises(HTTPException) as exc:
            SubcategoryService(db).get_subcategory(42)
        assert exc.value.status_code == 404
        assert exc.value.detail == "Subcategory not found"
