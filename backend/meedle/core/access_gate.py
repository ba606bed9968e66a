"""Access Gate Decision — pure evaluation of whether an account may authenticate.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Active accounts are always allowed and never need a write
    - An expired block (blocked_until <= now) is allowed and flagged lift_block=True
    - Denied decisions carry the rendered explanation and the raw block fields

Design Decisions:
    - Decision object instead of exceptions: a blocked account is a domain outcome,
      the HTTP boundary decides how to surface it
    - The write that lifts an expired block is performed by services/access_gate.py;
      this module only says that it is needed (ADR: functional core, imperative shell)
"""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum

from meedle.core.account_block import AccountBlockState, require_aware
from meedle.core.block_messages import render_block_explanation
from meedle.core.domain_types import Locale


class AccessStatus(str, Enum):
    ALLOWED = "allowed"
    DENIED = "denied"


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of evaluating an account at login time."""
    status: AccessStatus
    lift_block: bool = False
    reason: str | None = None
    blocked_until: datetime | None = None
    explanation: str | None = None

    @property
    def allowed(self) -> bool:
        return self.status == AccessStatus.ALLOWED


def block_has_expired(state: AccountBlockState, now: datetime) -> bool:
    """True when an inactive account's block end is at or before now."""
    return (
        not state.is_active
        and state.blocked_until is not None
        and state.blocked_until <= now
    )


def decide_access(
    state: AccountBlockState,
    now: datetime,
    locale: Locale = Locale.UK,
    display_tz: tzinfo | None = None,
) -> AccessDecision:
    """Decide whether an account may proceed to credential verification."""
    require_aware(now, "now")
    if state.is_active:
        return AccessDecision(status=AccessStatus.ALLOWED)
    if block_has_expired(state, now):
        return AccessDecision(status=AccessStatus.ALLOWED, lift_block=True)
    return AccessDecision(
        status=AccessStatus.DENIED,
        reason=state.block_reason,
        blocked_until=state.blocked_until,
        explanation=render_block_explanation(
            state.block_reason, state.blocked_until, locale,
            display_tz or now.tzinfo,
        ),
    )
