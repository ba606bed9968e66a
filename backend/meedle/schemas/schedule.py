"""Schedule Schemas — lesson input validation and resolved schedule output.

Invariants:
    - LessonCreate: start_time < end_time, room stripped and non-empty
    - is_temporary ⇔ date is set
    - Overrides always recur EVERY; their weekday is derived from the date
    - Templates require a weekday

Design Decisions:
    - `import datetime as dt`: a field named `date` must not shadow its own type
    - Output models mirror core dataclasses field-for-field (from_attributes)
"""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from meedle.core.domain_types import LessonKind, Recurrence, Weekday


class LessonCreate(BaseModel):
    """A recurring template, or a one-off override when is_temporary is set."""
    course_id: UUID
    weekday: Weekday | None = None
    start_time: dt.time
    end_time: dt.time
    room: str = Field(min_length=1, max_length=100)
    kind: LessonKind = LessonKind.LECTURE
    recurrence: Recurrence = Recurrence.EVERY
    is_temporary: bool = False
    date: dt.date | None = None

    @field_validator("room")
    @classmethod
    def strip_room(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("room cannot be empty or whitespace")
        return v

    @model_validator(mode="after")
    def validate_lesson_shape(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        if self.is_temporary:
            _validate_override(self)
        else:
            _validate_template(self)
        return self


def _validate_override(lesson: "LessonCreate") -> None:
    if lesson.date is None:
        raise ValueError("temporary lesson requires date")
    if lesson.recurrence != Recurrence.EVERY:
        raise ValueError("temporary lesson cannot have week recurrence")
    derived = Weekday.from_position(lesson.date.weekday())
    if lesson.weekday is not None and lesson.weekday != derived:
        raise ValueError(f"date {lesson.date} is a {derived.value}, not {lesson.weekday.value}")
    lesson.weekday = derived


def _validate_template(lesson: "LessonCreate") -> None:
    if lesson.date is not None:
        raise ValueError("date is only allowed for temporary lessons")
    if lesson.weekday is None:
        raise ValueError("recurring lesson requires weekday")


class LessonResponse(BaseModel):
    id: UUID
    group_id: UUID
    course_id: UUID
    weekday: Weekday
    start_time: dt.time
    end_time: dt.time
    room: str
    kind: LessonKind
    recurrence: Recurrence
    is_temporary: bool
    date: dt.date | None = None


class ResolvedLessonOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    lesson_id: UUID
    course_id: UUID
    date: dt.date
    weekday: Weekday
    start_time: dt.time
    end_time: dt.time
    room: str
    kind: LessonKind
    is_temporary: bool
    course_name: str | None = None
    teacher_name: str | None = None


class DayScheduleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    weekday: Weekday
    date: dt.date
    lessons: list[ResolvedLessonOut]


class WeekScheduleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    week_start: dt.date
    week_label: Recurrence
    days: list[DayScheduleOut]
