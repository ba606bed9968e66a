"""Course ORM — a subject taught to one or more groups.

Design Decisions:
    - teacher_name kept as text: teacher accounts are not linked to courses here
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from meedle.db.base import Base


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    teacher_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
