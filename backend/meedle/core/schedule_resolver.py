"""Schedule Resolution — merge recurring lesson templates with date-pinned overrides.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Templates filtered by recurrence against the week label (EVERY always kept)
    - An override on a date replaces every template of the same course on that
      weekday; templates of other courses on that day are untouched
    - Output has exactly one DaySchedule per date, empty days included
    - Lessons within a day ordered by (start_time, course_id)
    - Overlapping lessons pass through; no conflict detection
    - Course name and teacher travel with each lesson unchanged

Design Decisions:
    - Records are frozen dataclasses, never ORM rows: core stays importable without SQLAlchemy
    - course_id sorted by its string form so UUID and str ids order the same way
    - Same inputs give the same output; no hidden clock reads (caller passes dates)
"""

from dataclasses import dataclass, field
from datetime import date, time
from typing import Iterable

from meedle.core.domain_types import (
    CourseId, GroupId, LessonId, LessonKind, Recurrence, Weekday,
)
from meedle.core.week_parity import (
    TermCalendar, monday_of, recurrence_applies, week_dates, week_label,
)


@dataclass(frozen=True)
class LessonTemplate:
    """A lesson that recurs on a weekday every week or every other week."""
    id: LessonId
    group_id: GroupId
    course_id: CourseId
    weekday: Weekday
    start_time: time
    end_time: time
    room: str
    kind: LessonKind
    recurrence: Recurrence = Recurrence.EVERY
    course_name: str | None = None
    teacher_name: str | None = None

    def __post_init__(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")


@dataclass(frozen=True)
class LessonOverride:
    """A one-off lesson pinned to a date; supersedes templates of its course."""
    id: LessonId
    group_id: GroupId
    course_id: CourseId
    date: date
    start_time: time
    end_time: time
    room: str
    kind: LessonKind
    is_temporary: bool = True
    course_name: str | None = None
    teacher_name: str | None = None

    def __post_init__(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")

    @property
    def weekday(self) -> Weekday:
        return Weekday.from_position(self.date.weekday())


@dataclass(frozen=True)
class ResolvedLesson:
    """A lesson that actually takes place on a given date."""
    lesson_id: LessonId
    course_id: CourseId
    date: date
    weekday: Weekday
    start_time: time
    end_time: time
    room: str
    kind: LessonKind
    is_temporary: bool = False
    course_name: str | None = None
    teacher_name: str | None = None


@dataclass(frozen=True)
class DaySchedule:
    weekday: Weekday
    date: date
    lessons: list[ResolvedLesson] = field(default_factory=list)


@dataclass(frozen=True)
class WeekSchedule:
    week_start: date
    week_label: Recurrence
    days: list[DaySchedule] = field(default_factory=list)


def _lesson_sort_key(lesson: ResolvedLesson) -> tuple[time, str]:
    return (lesson.start_time, str(lesson.course_id))


def _from_template(template: LessonTemplate, on: date) -> ResolvedLesson:
    return ResolvedLesson(
        lesson_id=template.id,
        course_id=template.course_id,
        date=on,
        weekday=template.weekday,
        start_time=template.start_time,
        end_time=template.end_time,
        room=template.room,
        kind=template.kind,
        course_name=template.course_name,
        teacher_name=template.teacher_name,
    )


def _from_override(override: LessonOverride) -> ResolvedLesson:
    return ResolvedLesson(
        lesson_id=override.id,
        course_id=override.course_id,
        date=override.date,
        weekday=override.weekday,
        start_time=override.start_time,
        end_time=override.end_time,
        room=override.room,
        kind=override.kind,
        is_temporary=True,
        course_name=override.course_name,
        teacher_name=override.teacher_name,
    )


def filter_templates_for_week(
    templates: Iterable[LessonTemplate], label: Recurrence,
) -> list[LessonTemplate]:
    """Keep templates whose recurrence runs in a week with this label."""
    return [t for t in templates if recurrence_applies(t.recurrence, label)]


def resolve_date(
    on: date,
    templates: Iterable[LessonTemplate],
    overrides: Iterable[LessonOverride],
) -> DaySchedule:
    """Merge already-filtered templates with the overrides pinned to one date.

    Overrides not dated `on` are ignored, so callers may pass a whole week's worth.
    """
    weekday = Weekday.from_position(on.weekday())
    day_overrides = [o for o in overrides if o.date == on]
    replaced_courses = {o.course_id for o in day_overrides}

    lessons = [
        _from_template(t, on)
        for t in templates
        if t.weekday == weekday and t.course_id not in replaced_courses
    ]
    lessons.extend(_from_override(o) for o in day_overrides)
    lessons.sort(key=_lesson_sort_key)
    return DaySchedule(weekday=weekday, date=on, lessons=lessons)


def resolve_week(
    week_start: date,
    templates: Iterable[LessonTemplate],
    overrides: Iterable[LessonOverride],
    calendar: TermCalendar,
) -> WeekSchedule:
    """Effective lessons for the seven days starting at week_start."""
    label = week_label(week_start, calendar)
    active = filter_templates_for_week(templates, label)
    overrides = list(overrides)
    return WeekSchedule(
        week_start=week_start,
        week_label=label,
        days=[resolve_date(day, active, overrides) for day in week_dates(week_start)],
    )


def resolve_day(
    on: date,
    templates: Iterable[LessonTemplate],
    overrides: Iterable[LessonOverride],
    calendar: TermCalendar,
) -> DaySchedule:
    """Effective lessons for one date; parity taken from the Monday of its week."""
    label = week_label(monday_of(on), calendar)
    return resolve_date(on, filter_templates_for_week(templates, label), overrides)
