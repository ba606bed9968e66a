"""Access Gate — login-time account check that lazily lifts expired blocks.

Invariants:
    - Follows impureim sandwich: pure decide_access → at most one write → decision
    - The block lift write happens only when the decision says lift_block
    - Re-evaluating an active account performs no write (idempotent)
    - Repository errors propagate unchanged — no retries, no translation

Design Decisions:
    - Expiry checked lazily on login only, no background sweep
      (ADR: the only reader of block state that matters is the login path)
    - Clock and display settings injected by the caller: deterministic in tests
"""

import logging
from datetime import datetime, tzinfo

from meedle.core.access_gate import AccessDecision, decide_access
from meedle.core.account_block import cleared_block_state
from meedle.core.domain_types import Locale
from meedle.core.repository_protocols import AccountRecord, AccountRepository

logger = logging.getLogger(__name__)


class AccessGate:
    """Decides whether an account may proceed to credential verification."""

    def __init__(
        self,
        accounts: AccountRepository,
        display_tz: tzinfo,
        locale: Locale = Locale.UK,
    ):
        self.accounts = accounts
        self.display_tz = display_tz
        self.locale = locale

    async def evaluate(
        self, account: AccountRecord, now: datetime,
    ) -> AccessDecision:
        # ── PURE: decide ──
        decision = decide_access(
            account.block, now, self.locale, self.display_tz,
        )

        # ── IMPURE: lift an expired block ──
        if decision.lift_block:
            await self.accounts.update_block_state(
                account.id, cleared_block_state(),
            )
            logger.info(
                "Expired block lifted",
                extra={"account_id": str(account.id)},
            )
        elif not decision.allowed:
            logger.warning(
                "Login denied for blocked account",
                extra={"account_id": str(account.id)},
            )
        return decision
