"""Group ORM — a cohort of student accounts that shares one schedule.

Invariants:
    - name is unique and non-nullable
    - Lessons (templates and overrides) are owned by exactly one group

Design Decisions:
    - cascade delete for lessons: a group's schedule has no meaning without it
    - students not cascaded: deleting a group detaches accounts (group_id SET NULL)
    - Collections are lazy="raise": rosters and lessons are queried explicitly,
      never loaded as a side effect of fetching a group; the database enforces
      the ON DELETE rules (passive_deletes)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from meedle.db.base import Base


class Group(Base):
    """Student group — owns its lesson schedule."""
    __tablename__ = "groups"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    students: Mapped[list["User"]] = relationship(
        "User", back_populates="group", lazy="raise", passive_deletes=True,
    )
    lessons: Mapped[list["Lesson"]] = relationship(
        "Lesson", back_populates="group",
        cascade="all, delete-orphan", lazy="raise", passive_deletes=True,
    )
