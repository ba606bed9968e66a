"""Schedule Routes — resolved group schedules and lesson creation.

Invariants:
    - week_of may be any date; the resolved week starts on its Monday
    - Omitted dates default to "today" in the configured display timezone
    - Unknown group → 404; unknown course on lesson creation → 404
    - Lesson bodies validated by LessonCreate before any row is built

Design Decisions:
    - Reads go through ScheduleResolver; the single write (lesson creation) is
      plain ORM in the route, same as the other thin CRUD handlers
"""

import logging
from datetime import date, datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from meedle.api.dependencies import get_now, get_schedule_resolver
from meedle.config import get_settings
from meedle.core.domain_types import GroupId
from meedle.core.errors import ResourceNotFoundError
from meedle.core.week_parity import monday_of
from meedle.infrastructure.database import get_db
from meedle.models.course import Course
from meedle.models.group import Group
from meedle.models.lesson import Lesson
from meedle.schemas.schedule import (
    DayScheduleOut, LessonCreate, LessonResponse, WeekScheduleOut,
)
from meedle.services.schedule_resolver import ScheduleResolver

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/groups", tags=["schedule"])


def _local_today(now: datetime) -> date:
    return now.astimezone(get_settings().display_tz()).date()


@router.get("/{group_id}/schedule", response_model=WeekScheduleOut)
async def get_week_schedule(
    group_id: UUID,
    week_of: date | None = Query(None),
    resolver: ScheduleResolver = Depends(get_schedule_resolver),
    now: datetime = Depends(get_now),
):
    """Effective lessons for the week containing week_of."""
    week_start = monday_of(week_of or _local_today(now))
    week = await resolver.resolve_week(GroupId(group_id), week_start)
    return WeekScheduleOut.model_validate(week)


@router.get("/{group_id}/schedule/day", response_model=DayScheduleOut)
async def get_day_schedule(
    group_id: UUID,
    on: date | None = Query(None, alias="date"),
    resolver: ScheduleResolver = Depends(get_schedule_resolver),
    now: datetime = Depends(get_now),
):
    """Effective lessons for one date (today by default)."""
    day = await resolver.resolve_day(GroupId(group_id), on or _local_today(now))
    return DayScheduleOut.model_validate(day)


@router.post(
    "/{group_id}/lessons", response_model=LessonResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_lesson(
    group_id: UUID, body: LessonCreate, db: AsyncSession = Depends(get_db),
):
    """Add a recurring lesson template or a date-pinned override."""
    if await db.get(Group, group_id) is None:
        raise ResourceNotFoundError("Group", str(group_id))
    if await db.get(Course, body.course_id) is None:
        raise ResourceNotFoundError("Course", str(body.course_id))

    lesson = Lesson(
        group_id=group_id,
        course_id=body.course_id,
        weekday=body.weekday.value,
        start_time=body.start_time,
        end_time=body.end_time,
        room=body.room,
        kind=body.kind.value,
        recurrence=body.recurrence.value,
        is_temporary=body.is_temporary,
        lesson_date=body.date,
    )
    db.add(lesson)
    await db.commit()
    await db.refresh(lesson)
    logger.info(
        f"Lesson created ({'override' if lesson.is_temporary else 'template'})",
        extra={"group_id": str(group_id)},
    )
    return LessonResponse(
        id=lesson.id,
        group_id=lesson.group_id,
        course_id=lesson.course_id,
        weekday=lesson.weekday,
        start_time=lesson.start_time,
        end_time=lesson.end_time,
        room=lesson.room,
        kind=lesson.kind,
        recurrence=lesson.recurrence,
        is_temporary=lesson.is_temporary,
        date=lesson.lesson_date,
    )
