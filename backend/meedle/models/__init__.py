"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Group is the aggregate root for lessons; User references a Group optionally

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from meedle.models.group import Group  # noqa: F401
from meedle.models.course import Course  # noqa: F401
from meedle.models.user import User  # noqa: F401
from meedle.models.lesson import Lesson  # noqa: F401
