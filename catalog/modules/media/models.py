from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, BigInteger, Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from catalog.db.base import Base
from catalog.db.mixins import TimestampMixin


class CourseMediaMixin(TimestampMixin):
    """Columns shared by every media asset attached to a course."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    course_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # optional grouping; must point at a section of the same course
    section_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("course_sections.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(180), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    size_bytes: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    mime_type: Mapped[str | None] = mapped_column(String(60), nullable=True)

    is_free_preview: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class CourseVideo(CourseMediaMixin, Base):
    __tablename__ = "course_videos"
    __table_args__ = (
        UniqueConstraint("course_id", "slug", name="uq_course_videos_course_slug"),
    )

    playback_url: Mapped[str] = mapped_column(String(255), nullable=False)
    duration_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    width: Mapped[int | None] = mapped_column(Integer, nullable=True)
    height: Mapped[int | None] = mapped_column(Integer, nullable=True)
    captions_json: Mapped[Any | None] = mapped_column(JSON, nullable=True)
    drm_license_url: Mapped[str | None] = mapped_column(String(255), nullable=True)


class CourseDocument(CourseMediaMixin, Base):
    __tablename__ = "course_documents"
    __table_args__ = (
        UniqueConstraint("course_id", "slug", name="uq_course_documents_course_slug"),
    )

    file_url: Mapped[str] = mapped_column(String(255), nullable=False)
    pages: Mapped[int | None] = mapped_column(Integer, nullable=True)
    language: Mapped[str | None] = mapped_column(String(40), nullable=True)


class CourseAudio(CourseMediaMixin, Base):
    __tablename__ = "course_audios"
    __table_args__ = (
        UniqueConstraint("course_id", "slug", name="uq_course_audios_course_slug"),
    )

    playback_url: Mapped[str] = mapped_column(String(255), nullable=False)
    duration_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    language: Mapped[str | None] = mapped_column(String(40), nullable=True)


class CourseImage(CourseMediaMixin, Base):
    __tablename__ = "course_images"
    __table_args__ = (
        UniqueConstraint("course_id", "slug", name="uq_course_images_course_slug"),
    )

    image_url: Mapped[str] = mapped_column(String(255), nullable=False)
    width: Mapped[int | None] = mapped_column(Integer, nullable=True)
    height: Mapped[int | None] = mapped_column(Integer, nullable=True)
