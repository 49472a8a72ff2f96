from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.db.base import Base
from catalog.db.mixins import TimestampMixin

if TYPE_CHECKING:
    from catalog.modules.courses.models import Course


class MaritalStatus(str, enum.Enum):
    single = "single"
    married = "married"
    divorced = "divorced"
    widowed = "widowed"


class User(TimestampMixin, Base):
    __tablename__ = "users"

    # identifiers are issued by the identity provider, not generated here
    id: Mapped[str] = mapped_column(String(122), primary_key=True)

    name: Mapped[str] = mapped_column(String(15), nullable=False)
    phone: Mapped[int] = mapped_column(BigInteger, nullable=False)
    dob: Mapped[str | None] = mapped_column(String(122), nullable=True)
    country_code: Mapped[str | None] = mapped_column(String(10), nullable=True)
    country: Mapped[str | None] = mapped_column(String(122), nullable=True)
    state: Mapped[str | None] = mapped_column(String(122), nullable=True)
    district: Mapped[str | None] = mapped_column(String(122), nullable=True)
    town: Mapped[str | None] = mapped_column(String(122), nullable=True)
    profile_image: Mapped[str | None] = mapped_column(Text, nullable=True)

    creator_profile: Mapped["CreatorProfile | None"] = relationship(
        "CreatorProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    courses: Mapped[list["Course"]] = relationship(
        "Course",
        back_populates="user",
    )


class CreatorProfile(TimestampMixin, Base):
    __tablename__ = "creator_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[str] = mapped_column(
        String(122),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    marital_status: Mapped[MaritalStatus | None] = mapped_column(
        Enum(MaritalStatus, name="marital_status"),
        nullable=True,
    )
    occupation: Mapped[str | None] = mapped_column(String(120), nullable=True)
    religion: Mapped[str | None] = mapped_column(String(80), nullable=True)
    total_years_experience: Mapped[float | None] = mapped_column(
        Numeric(4, 1, asdecimal=False), nullable=True
    )

    user: Mapped["User"] = relationship("User", back_populates="creator_profile")
