"""User ORM — an account that may log in (student, teacher or admin).

Invariants:
    - login and email are unique
    - is_active = True implies block_reason and blocked_until are NULL
    - blocked_until NULL on an inactive account means an indefinite block
    - New registrations start inactive with a confirmation_token

Design Decisions:
    - Block state kept as three flat columns (is_active, block_reason, blocked_until):
      the access gate reads and writes exactly these fields
    - role stored as String(20) with UserRole values (no DB enum type to migrate)
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from meedle.db.base import Base


class User(Base):
    """Account entity."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    login: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default="student",
    )
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    group_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("groups.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Access control
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    block_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    blocked_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    confirmation_token: Mapped[str | None] = mapped_column(
        String(64), nullable=True, unique=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    group: Mapped["Group | None"] = relationship(
        "Group", back_populates="students",
    )
