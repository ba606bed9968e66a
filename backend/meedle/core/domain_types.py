"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - AccountId, GroupId, CourseId, LessonId wrap UUIDs — never use bare UUID in domain logic
    - All valid states encoded as Enums — no raw string matching
    - Weekday values follow date.weekday() ordering (monday=0 .. sunday=6)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders, stored as-is in String columns
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", UUID)
GroupId = NewType("GroupId", UUID)
CourseId = NewType("CourseId", UUID)
LessonId = NewType("LessonId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class Locale(str, Enum):
    """Languages for user-visible messages."""
    UK = "uk"
    EN = "en"


class UserRole(str, Enum):
    """Account roles — maps to DB `role` column."""
    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


class BlockDuration(str, Enum):
    """Durations offered by the admin block dialog."""
    INDEFINITE = "indefinite"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    CUSTOM = "custom"


class Recurrence(str, Enum):
    """Which academic weeks a lesson template applies to."""
    EVERY = "every"
    UPPER = "upper"
    LOWER = "lower"


class LessonKind(str, Enum):
    LECTURE = "lecture"
    PRACTICE = "practice"
    LAB = "lab"


class Weekday(str, Enum):
    """Days of the week, declared in date.weekday() order."""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def position(self) -> int:
        return _WEEKDAY_ORDER.index(self)

    @classmethod
    def from_position(cls, position: int) -> "Weekday":
        return _WEEKDAY_ORDER[position]


_WEEKDAY_ORDER: list[Weekday] = list(Weekday)
