from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from catalog.common.pagination import Page, clamp_per_page, paginate
from catalog.core.logging import get_logger
from catalog.modules.users.models import User
from catalog.modules.users.repository import CreatorProfileRepository, UserRepository

logger = get_logger(__name__)


class UserService:
    """Users and their optional creator profile."""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)
        self.creator_repo = CreatorProfileRepository(db)

    def list_users(
        self,
        q: Optional[str] = None,
        sort: Optional[str] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> Page:
        query = self.user_repo.search(q=q, sort=sort)
        return paginate(query, page, clamp_per_page(per_page, default=20, maximum=100))

    def get_user(self, user_id: str) -> User:
        user = self.user_repo.get_by_id(user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        return user

    def create_user(self, data: dict) -> User:
        if self.user_repo.get_by_id(data["id"]) is not None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="The id has already been taken.",
            )

        creator = data.pop("creator", None)
        user = self.user_repo.create(**data)
        if creator:
            self.creator_repo.create(user_id=user.id, **creator)

        self.db.commit()
        self.db.refresh(user)

        logger.info("created user", user_id=user.id, creator=bool(creator))
        return user

    def update_user(self, user_id: str, data: dict) -> User:
        user = self.get_user(user_id)

        data.pop("id", None)
        has_creator = "creator" in data
        creator = data.pop("creator", None)

        self.user_repo.update(user, **data)

        if has_creator:
            if user.creator_profile is not None:
                self.creator_repo.update(user.creator_profile, **(creator or {}))
            elif creator:
                self.creator_repo.create(user_id=user.id, **creator)

        self.db.commit()
        self.db.refresh(user)
        return user

    def delete_user(self, user_id: str) -> None:
        """Delete a user; their courses are kept without an owner."""
        user = self.get_user(user_id)
        self.user_repo.delete(user)
        self.db.commit()
        logger.info("deleted user", user_id=user_id)

    def delete_creator(self, user_id: str) -> User:
        user = self.get_user(user_id)
        if user.creator_profile is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Creator profile not found for this user",
            )

        self.creator_repo.delete(user.creator_profile)
        self.db.commit()
        self.db.refresh(user)

        logger.info("deleted creator profile", user_id=user_id)
        return user
