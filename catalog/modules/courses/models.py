from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint, func, select
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from catalog.db.base import Base
from catalog.db.mixins import TimestampMixin
from catalog.modules.media.models import CourseAudio, CourseDocument, CourseImage, CourseVideo

if TYPE_CHECKING:
    from catalog.modules.categories.models import Subcategory
    from catalog.modules.users.models import User


class CourseStatus(str, enum.Enum):
    draft = "draft"
    published = "published"
    archived = "archived"


class CourseSection(TimestampMixin, Base):
    __tablename__ = "course_sections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    course_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(160), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    course: Mapped["Course"] = relationship("Course", back_populates="sections")

    # deleting a section keeps its media, detached from any section
    videos: Mapped[list["CourseVideo"]] = relationship("CourseVideo")
    documents: Mapped[list["CourseDocument"]] = relationship("CourseDocument")
    audios: Mapped[list["CourseAudio"]] = relationship("CourseAudio")
    images: Mapped[list["CourseImage"]] = relationship("CourseImage")


class CourseChapter(TimestampMixin, Base):
    __tablename__ = "course_chapters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    course_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    course: Mapped["Course"] = relationship("Course", back_populates="chapters")


def _count(model, course_id_column):
    return column_property(
        select(func.count(model.id))
        .where(model.course_id == course_id_column)
        .correlate_except(model)
        .scalar_subquery()
    )


class Course(TimestampMixin, Base):
    __tablename__ = "courses"
    __table_args__ = (
        UniqueConstraint("subcategory_id", "slug", name="uq_courses_subcategory_slug"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    subcategory_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("subcategories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # the creator who owns the course
    user_id: Mapped[str | None] = mapped_column(
        String(122),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(180), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    thumbnail_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    language: Mapped[str | None] = mapped_column(String(40), nullable=True)
    level: Mapped[str | None] = mapped_column(String(40), nullable=True)

    is_premium: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    status: Mapped[CourseStatus] = mapped_column(
        Enum(CourseStatus, name="course_status"),
        default=CourseStatus.draft,
        server_default=CourseStatus.draft.value,
        nullable=False,
    )

    approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    price: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)

    sections_count: Mapped[int] = _count(CourseSection, id)
    chapters_count: Mapped[int] = _count(CourseChapter, id)
    videos_count: Mapped[int] = _count(CourseVideo, id)
    documents_count: Mapped[int] = _count(CourseDocument, id)
    audios_count: Mapped[int] = _count(CourseAudio, id)
    images_count: Mapped[int] = _count(CourseImage, id)

    subcategory: Mapped["Subcategory"] = relationship(
        "Subcategory",
        back_populates="courses",
    )

    user: Mapped["User | None"] = relationship(
        "User",
        back_populates="courses",
    )

    sections: Mapped[list["CourseSection"]] = relationship(
        "CourseSection",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="CourseSection.position",
    )

    chapters: Mapped[list["CourseChapter"]] = relationship(
        "CourseChapter",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="CourseChapter.position",
    )

    videos: Mapped[list["CourseVideo"]] = relationship(
        "CourseVideo",
        cascade="all, delete-orphan",
        order_by="CourseVideo.position",
    )

    documents: Mapped[list["CourseDocument"]] = relationship(
        "CourseDocument",
        cascade="all, delete-orphan",
        order_by="CourseDocument.position",
    )

    audios: Mapped[list["CourseAudio"]] = relationship(
        "CourseAudio",
        cascade="all, delete-orphan",
        order_by="CourseAudio.position",
    )

    images: Mapped[list["CourseImage"]] = relationship(
        "CourseImage",
        cascade="all, delete-orphan",
        order_by="CourseImage.position",
    )
