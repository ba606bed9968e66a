"""Account Block State — pure construction of block/unblock state for accounts.

Invariants:
    - An active state never carries block_reason or blocked_until
    - blocked_until is always timezone-aware (naive datetimes are rejected)
    - INDEFINITE yields blocked_until=None; CUSTOM requires an explicit instant
      strictly after now

Design Decisions:
    - Frozen dataclass as the value exchanged with the persistence layer: the
      repository writes exactly these three fields, nothing else
    - Durations mirror the admin block dialog (1 hour / 1 day / 1 week / custom date)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from meedle.core.domain_types import BlockDuration

_DURATION_DELTAS: dict[BlockDuration, timedelta] = {
    BlockDuration.HOUR: timedelta(hours=1),
    BlockDuration.DAY: timedelta(days=1),
    BlockDuration.WEEK: timedelta(weeks=1),
}


@dataclass(frozen=True)
class AccountBlockState:
    """The block-related slice of an account."""
    is_active: bool
    block_reason: str | None = None
    blocked_until: datetime | None = None

    def __post_init__(self):
        if self.is_active and (self.block_reason or self.blocked_until):
            raise ValueError("active account cannot carry block metadata")
        if self.blocked_until is not None:
            require_aware(self.blocked_until, "blocked_until")


def require_aware(moment: datetime, name: str) -> None:
    """Raise ValueError for naive datetimes."""
    if moment.tzinfo is None or moment.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware")


def cleared_block_state() -> AccountBlockState:
    """State written when a block is lifted (manually or on expiry)."""
    return AccountBlockState(is_active=True)


def compute_blocked_until(
    duration: BlockDuration, now: datetime, custom_until: datetime | None = None,
) -> datetime | None:
    """Resolve a block duration choice into an expiry instant (None = indefinite)."""
    require_aware(now, "now")
    if duration == BlockDuration.INDEFINITE:
        return None
    if duration == BlockDuration.CUSTOM:
        if custom_until is None:
            raise ValueError("custom block duration requires blocked_until")
        require_aware(custom_until, "blocked_until")
        if custom_until <= now:
            raise ValueError("blocked_until must be after now")
        return custom_until
    return now + _DURATION_DELTAS[duration]


def build_block_state(
    reason: str | None,
    duration: BlockDuration,
    now: datetime,
    custom_until: datetime | None = None,
) -> AccountBlockState:
    """Build the inactive state for an admin block action.

    Blank reasons are stored as None so the denial message falls back to the
    generic phrase.
    """
    reason = reason.strip() if reason else None
    return AccountBlockState(
        is_active=False,
        block_reason=reason or None,
        blocked_until=compute_blocked_until(duration, now, custom_until),
    )
