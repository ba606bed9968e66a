"""Week Parity — classification of calendar weeks as upper or lower.

Invariants:
    - parity = ((week_start - term_epoch).days // 7) % 2, floor division, so
      weeks before the epoch alternate consistently too
    - The parity equal to upper_week_parity is UPPER, the other one LOWER
    - EVERY is never returned by week_label
    - term_epoch is a Monday, so every Monday-aligned week has one parity

Design Decisions:
    - Epoch and polarity are configuration (TermCalendar), never derived from lesson data
"""

from dataclasses import dataclass
from datetime import date, timedelta

from meedle.core.domain_types import Recurrence

DAYS_IN_WEEK = 7


@dataclass(frozen=True)
class TermCalendar:
    """Fixed reference for week-parity calculation."""
    term_epoch: date
    upper_week_parity: int = 0

    def __post_init__(self):
        if self.upper_week_parity not in (0, 1):
            raise ValueError("upper_week_parity must be 0 or 1")
        if self.term_epoch.weekday() != 0:
            raise ValueError(f"term_epoch {self.term_epoch} is not a Monday")


def monday_of(day: date) -> date:
    """Monday of the ISO week containing day."""
    return day - timedelta(days=day.weekday())


def week_dates(week_start: date) -> list[date]:
    """The seven consecutive dates starting at week_start."""
    return [week_start + timedelta(days=offset) for offset in range(DAYS_IN_WEEK)]


def week_parity(week_start: date, calendar: TermCalendar) -> int:
    return ((week_start - calendar.term_epoch).days // DAYS_IN_WEEK) % 2


def week_label(week_start: date, calendar: TermCalendar) -> Recurrence:
    """UPPER or LOWER for the week starting at week_start."""
    if week_parity(week_start, calendar) == calendar.upper_week_parity:
        return Recurrence.UPPER
    return Recurrence.LOWER


def recurrence_applies(recurrence: Recurrence, label: Recurrence) -> bool:
    """Whether a template with this recurrence runs in a week with this label."""
    return recurrence == Recurrence.EVERY or recurrence == label
