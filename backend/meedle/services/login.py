"""Login Service — account lookup, access gate, then password verification.

Invariants:
    - Unknown login and wrong password produce the same InvalidCredentialsError
    - The access gate runs BEFORE the password check; a blocked account never
      reaches credential verification
    - A registration still awaiting confirmation is refused with
      AccountNotConfirmedError before the gate runs; it is not a block
    - No token issued here: callers receive the account record only

Design Decisions:
    - bcrypt.checkpw against the stored hash; hashing policy lives wherever accounts
      are created, not here
"""

from dataclasses import replace
from datetime import datetime

import bcrypt

from meedle.core.account_block import cleared_block_state
from meedle.core.block_messages import render_pending_confirmation
from meedle.core.errors import (
    AccountBlockedError, AccountNotConfirmedError, ErrorContext,
    InvalidCredentialsError,
)
from meedle.core.repository_protocols import AccountRecord, AccountRepository
from meedle.services.access_gate import AccessGate


def password_matches(password: str, password_hash: str) -> bool:
    """Constant-time bcrypt comparison; malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


class LoginService:
    """Authenticates a login/password pair."""

    def __init__(self, accounts: AccountRepository, gate: AccessGate):
        self.accounts = accounts
        self.gate = gate

    async def login(
        self, login: str, password: str, now: datetime,
    ) -> AccountRecord:
        account = await self.accounts.get_by_login(login)
        if account is None:
            raise InvalidCredentialsError()

        if account.pending_confirmation:
            raise AccountNotConfirmedError(
                render_pending_confirmation(self.gate.locale),
                ErrorContext(account_id=str(account.id)),
            )

        decision = await self.gate.evaluate(account, now)
        if not decision.allowed:
            raise AccountBlockedError(
                decision.explanation or "",
                blocked_until=decision.blocked_until,
                context=ErrorContext(account_id=str(account.id)),
            )
        if decision.lift_block:
            account = replace(account, block=cleared_block_state())

        if not password_matches(password, account.password_hash):
            raise InvalidCredentialsError(
                ErrorContext(account_id=str(account.id)),
            )
        return account
