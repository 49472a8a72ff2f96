# catalog/modules/categories/routes.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from catalog.common.listing import parse_bool
from catalog.core.responses import Envelope, ok
from catalog.db.deps import get_db
from catalog.modules.categories.service import CategoryService, SubcategoryService
from catalog.schemas.category import (
    CategoryCreate,
    CategoryRead,
    CategoryUpdate,
    SubcategoryCreate,
    SubcategoryRead,
    SubcategoryUpdate,
)
from catalog.schemas.common import ReorderRequest

router = APIRouter(tags=["categories"])


# ---------- categories ----------


@router.get("/categories", response_model=Envelope[list[CategoryRead]])
def list_categories(
    q: Optional[str] = Query(default=None, description="Search name, slug and description"),
    active: Optional[str] = Query(default=None),
    sort: Optional[str] = Query(default=None, description="e.g. position,-created_at"),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    db: Session = Depends(get_db),
):
    """List categories with search, filters and pagination."""
    result = CategoryService(db).list_categories(
        q=q, active=parse_bool(active), sort=sort, page=page, per_page=per_page
    )
    return ok(
        [CategoryRead.model_validate(c) for c in result.items],
        "Categories retrieved successfully",
        result.meta(),
    )


@router.post(
    "/categories",
    response_model=Envelope[CategoryRead],
    status_code=status.HTTP_201_CREATED,
)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    category = CategoryService(db).create_category(payload.model_dump())
    return ok(CategoryRead.model_validate(category), "Category created successfully")


@router.post("/categories/reorder", response_model=Envelope[None])
def reorder_categories(payload: ReorderRequest, db: Session = Depends(get_db)):
    """Batch update of display positions."""
    CategoryService(db).reorder_categories(payload.orders)
    return ok(None, "Categories reordered successfully")


@router.get("/categories/{category_id}", response_model=Envelope[CategoryRead])
def get_category(category_id: int, db: Session = Depends(get_db)):
    category = CategoryService(db).get_category(category_id)
    return ok(CategoryRead.model_validate(category), "Category retrieved successfully")


@router.put("/categories/{category_id}", response_model=Envelope[CategoryRead])
def update_category(category_id: int, payload: CategoryUpdate, db: Session = Depends(get_db)):
    category = CategoryService(db).update_category(
        category_id, payload.model_dump(exclude_unset=True)
    )
    return ok(CategoryRead.model_validate(category), "Category updated successfully")


@router.delete("/categories/{category_id}", response_model=Envelope[None])
def delete_category(category_id: int, db: Session = Depends(get_db)):
    """Delete a category together with its subcategories."""
    CategoryService(db).delete_category(category_id)
    return ok(None, "Category deleted successfully")


# ---------- subcategories nested under a category ----------


@router.get(
    "/categories/{category_id}/subcategories",
    response_model=Envelope[list[SubcategoryRead]],
)
def list_category_subcategories(
    category_id: int,
    q: Optional[str] = Query(default=None),
    active: Optional[str] = Query(default=None),
    sort: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    db: Session = Depends(get_db),
):
    result = SubcategoryService(db).list_subcategories(
        category_id=category_id,
        q=q,
        active=parse_bool(active),
        sort=sort,
        page=page,
        per_page=per_page,
        nested=True,
    )
    return ok(
        [SubcategoryRead.model_validate(s) for s in result.items],
        "Subcategories retrieved successfully",
        result.meta(),
    )


@router.post(
    "/categories/{category_id}/subcategories",
    response_model=Envelope[SubcategoryRead],
    status_code=status.HTTP_201_CREATED,
)
def create_subcategory(
    category_id: int,
    payload: SubcategoryCreate,
    db: Session = Depends(get_db),
):
    subcategory = SubcategoryService(db).create_subcategory(category_id, payload.model_dump())
    return ok(SubcategoryRead.model_validate(subcategory), "Subcategory created successfully")


@router.post("/categories/{category_id}/subcategories/reorder", response_model=Envelope[None])
def reorder_subcategories(
    category_id: int,
    payload: ReorderRequest,
    db: Session = Depends(get_db),
):
    """Every id must belong to the category; otherwise nothing is changed."""
    SubcategoryService(db).reorder_subcategories(category_id, payload.orders)
    return ok(None, "Subcategories reordered successfully")


# ---------- flat subcategories ----------


@router.get("/subcategories", response_model=Envelope[list[SubcategoryRead]])
def list_subcategories(
    category_id: Optional[int] = Query(default=None),
    q: Optional[str] = Query(default=None),
    active: Optional[str] = Query(default=None),
    sort: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    db: Session = Depends(get_db),
):
    result = SubcategoryService(db).list_subcategories(
        category_id=category_id,
        q=q,
        active=parse_bool(active),
        sort=sort,
        page=page,
        per_page=per_page,
    )
    return ok(
        [SubcategoryRead.model_validate(s) for s in result.items],
        "Subcategories retrieved successfully",
        result.meta(),
    )


@router.get("/subcategories/{subcategory_id}", response_model=Envelope[SubcategoryRead])
def get_subcategory(subcategory_id: int, db: Session = Depends(get_db)):
    subcategory = SubcategoryService(db).get_subcategory(subcategory_id)
    return ok(SubcategoryRead.model_validate(subcategory), "Subcategory retrieved successfully")


@router.put("/subcategories/{subcategory_id}", response_model=Envelope[SubcategoryRead])
def update_subcategory(
    subcategory_id: int,
    payload: SubcategoryUpdate,
    db: Session = Depends(get_db),
):
    subcategory = SubcategoryService(db).update_subcategory(
        subcategory_id, payload.model_dump(exclude_unset=True)
    )
    return ok(SubcategoryRead.model_validate(subcategory), "Subcategory updated successfully")


@router.delete("/subcategories/{subcategory_id}", response_model=Envelope[None])
def delete_subcategory(subcategory_id: int, db: Session = Depends(get_db)):
    SubcategoryService(db).delete_subcategory(subcategory_id)
    return ok(None, "Subcategory deleted successfully")
