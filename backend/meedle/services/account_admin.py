"""Account Administration — block/unblock toggle and registration confirmation.

Invariants:
    - Toggle on an active account blocks it; on an inactive account clears the block
    - Unblocking always clears block_reason and blocked_until together
    - Missing accounts raise ResourceNotFoundError (404)
    - A custom block end at or before now raises InvalidBlockPeriodError (400);
      nothing is written

Design Decisions:
    - Block state computed by core/account_block.py, written through the repository:
      the same AccountBlockState type the access gate writes on expiry
"""

import logging
from datetime import datetime

from meedle.core.account_block import (
    AccountBlockState, build_block_state, cleared_block_state,
)
from meedle.core.domain_types import AccountId, BlockDuration
from meedle.core.errors import (
    ErrorContext, InvalidBlockPeriodError, ResourceNotFoundError,
)
from meedle.core.repository_protocols import AccountRecord, AccountRepository

logger = logging.getLogger(__name__)


class AccountAdministration:
    """Admin-side account state changes."""

    def __init__(self, accounts: AccountRepository):
        self.accounts = accounts

    async def toggle_active(
        self,
        account_id: AccountId,
        now: datetime,
        reason: str | None = None,
        duration: BlockDuration = BlockDuration.INDEFINITE,
        custom_until: datetime | None = None,
    ) -> AccountBlockState:
        account = await self.accounts.get_by_id(account_id)
        if account is None:
            raise ResourceNotFoundError("User", str(account_id))

        if account.block.is_active:
            try:
                state = build_block_state(reason, duration, now, custom_until)
            except ValueError as e:
                raise InvalidBlockPeriodError(
                    str(e), ErrorContext(account_id=str(account_id)),
                ) from e
            logger.info(
                f"Account blocked ({duration.value})",
                extra={"account_id": str(account_id)},
            )
        else:
            state = cleared_block_state()
            logger.info("Account unblocked", extra={"account_id": str(account_id)})

        await self.accounts.update_block_state(account_id, state)
        return state

    async def confirm_registration(self, token: str) -> AccountRecord:
        account = await self.accounts.confirm_registration(token)
        if account is None:
            raise ResourceNotFoundError("Confirmation token", token)
        logger.info("Registration confirmed", extra={"account_id": str(account.id)})
        return account
