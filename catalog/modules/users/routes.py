# catalog/modules/users/routes.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from catalog.core.responses import Envelope, ok
from catalog.db.deps import get_db
from catalog.modules.users.service import UserService
from catalog.schemas.user import UserCreate, UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=Envelope[list[UserRead]])
def list_users(
    q: Optional[str] = Query(default=None, description="Search id and name"),
    sort: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    db: Session = Depends(get_db),
):
    result = UserService(db).list_users(q=q, sort=sort, page=page, per_page=per_page)
    return ok(
        [UserRead.model_validate(u) for u in result.items],
        "Users retrieved successfully",
        result.meta(),
    )


@router.post("", response_model=Envelope[UserRead], status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Create a user, optionally with a nested ``creator`` profile."""
    user = UserService(db).create_user(payload.model_dump())
    return ok(UserRead.model_validate(user), "User created successfully")


@router.get("/{user_id}", response_model=Envelope[UserRead])
def get_user(user_id: str, db: Session = Depends(get_db)):
    user = UserService(db).get_user(user_id)
    return ok(UserRead.model_validate(user), "User retrieved successfully")


@router.put("/{user_id}", response_model=Envelope[UserRead])
def update_user(user_id: str, payload: UserUpdate, db: Session = Depends(get_db)):
    """Update a user; a ``creator`` object updates or creates the profile."""
    user = UserService(db).update_user(user_id, payload.model_dump(exclude_unset=True))
    return ok(UserRead.model_validate(user), "User updated successfully")


@router.delete("/{user_id}", response_model=Envelope[None])
def delete_user(user_id: str, db: Session = Depends(get_db)):
    UserService(db).delete_user(user_id)
    return ok(None, "User deleted successfully")


@router.delete("/{user_id}/creator", response_model=Envelope[UserRead])
def delete_creator(user_id: str, db: Session = Depends(get_db)):
    user = UserService(db).delete_creator(user_id)
    return ok(UserRead.model_validate(user), "Creator profile deleted successfully")
