"""Schedule Resolver — loads a group's lessons and merges them for a week or a day.

Invariants:
    - Two reads per call (templates, overrides in the date range), then pure merge
    - Any repository failure fails the whole call; no partial schedules
    - Nothing cached between calls: identical inputs and data give identical output

Design Decisions:
    - Overrides fetched once for the whole range instead of once per date
      (same result, one query instead of seven)
    - Group existence checked first so an unknown group is a 404, not an empty week
    - resolve_week accepts any date and resolves the week containing it
"""

import logging
from datetime import date, timedelta

from meedle.core.domain_types import GroupId
from meedle.core.errors import ResourceNotFoundError
from meedle.core.repository_protocols import GroupRepository, LessonRepository
from meedle.core.schedule_resolver import (
    DaySchedule, WeekSchedule, resolve_day, resolve_week,
)
from meedle.core.week_parity import DAYS_IN_WEEK, TermCalendar, monday_of

logger = logging.getLogger(__name__)


class ScheduleResolver:
    """Effective schedule for a group: templates filtered by week, overrides applied."""

    def __init__(
        self,
        groups: GroupRepository,
        lessons: LessonRepository,
        calendar: TermCalendar,
    ):
        self.groups = groups
        self.lessons = lessons
        self.calendar = calendar

    async def _require_group(self, group_id: GroupId) -> None:
        if await self.groups.get(group_id) is None:
            raise ResourceNotFoundError("Group", str(group_id))

    async def resolve_week(
        self, group_id: GroupId, week_start: date,
    ) -> WeekSchedule:
        await self._require_group(group_id)
        week_start = monday_of(week_start)
        templates = await self.lessons.list_templates(group_id)
        week_end = week_start + timedelta(days=DAYS_IN_WEEK - 1)
        overrides = await self.lessons.list_overrides(
            group_id, week_start, week_end,
        )
        logger.debug(
            f"Resolving week from {len(templates)} templates, "
            f"{len(overrides)} overrides",
            extra={"group_id": str(group_id), "week_start": week_start.isoformat()},
        )
        return resolve_week(week_start, templates, overrides, self.calendar)

    async def resolve_day(self, group_id: GroupId, on: date) -> DaySchedule:
        await self._require_group(group_id)
        templates = await self.lessons.list_templates(group_id)
        overrides = await self.lessons.list_overrides(group_id, on, on)
        return resolve_day(on, templates, overrides, self.calendar)
