"""Lesson ORM — recurring lesson templates and date-pinned overrides in one table.

Invariants:
    - start_time < end_time (CHECK constraint)
    - is_temporary = False: template, lesson_date is NULL, recurrence selects weeks
    - is_temporary = True: override, lesson_date is set, replaces the course's templates that day
    - weekday, kind, recurrence store the str values of the core enums

Design Decisions:
    - Single table for both shapes: same columns, the admin form toggles between them
      with one checkbox; repositories split them into core records on read
    - Index on (group_id, date): overrides are always fetched by group and date range
"""

import uuid
from datetime import date, time

from sqlalchemy import (
    Boolean, CheckConstraint, Date, ForeignKey, Index, String, Time,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from meedle.db.base import Base


class Lesson(Base):
    """Lesson entity — template (recurring) or override (one date)."""
    __tablename__ = "lessons"
    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_lessons_time_range"),
        Index("ix_lessons_group_date", "group_id", "lesson_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    group_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
    )
    course_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
    )
    weekday: Mapped[str] = mapped_column(String(10), nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    room: Mapped[str] = mapped_column(String(100), nullable=False)
    kind: Mapped[str] = mapped_column(
        String(20), nullable=False, default="lecture",
    )
    recurrence: Mapped[str] = mapped_column(
        String(10), nullable=False, default="every",
    )
    is_temporary: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    lesson_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    group: Mapped["Group"] = relationship("Group", back_populates="lessons")
    course: Mapped["Course"] = relationship("Course", lazy="raise")
