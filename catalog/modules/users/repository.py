from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Query, selectinload

from catalog.common.listing import apply_search, apply_sort
from catalog.db.repository import BaseRepository
from catalog.modules.users.models import CreatorProfile, User

USER_SORTS = ("id", "name", "created_at", "updated_at")


class UserRepository(BaseRepository[User]):
    """Repository for User entity."""

    model = User

    def search(self, q: Optional[str] = None, sort: Optional[str] = None) -> Query:
        query = self.query().options(selectinload(User.creator_profile))
        query = apply_search(query, q, (User.id, User.name))
        return apply_sort(query, User, sort, USER_SORTS, default=(User.name.asc(), User.id.asc()))


class CreatorProfileRepository(BaseRepository[CreatorProfile]):
    """Repository for CreatorProfile entity."""

    model = CreatorProfile
