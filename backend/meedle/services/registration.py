"""Registration — self-service sign-up that waits for administrator confirmation.

Invariants:
    - New accounts are stored inactive with a single-use confirmation token
    - Passwords stored only as bcrypt hashes
    - Duplicate login or email → ConflictError (409), nothing written
    - Unknown group_id → ResourceNotFoundError (404), nothing written

Design Decisions:
    - Token is 32 random bytes hex-encoded; the administrator receives the
      confirmation link out of band, the registrant never sees the token
    - Duplicates checked up front for a clear message; the unique constraints
      still catch races and surface as ConflictError via the session manager
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import date

import bcrypt

from meedle.core.domain_types import GroupId
from meedle.core.errors import ConflictError, ResourceNotFoundError
from meedle.core.repository_protocols import (
    AccountRecord, AccountRepository, GroupRepository, NewAccount,
)

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12
TOKEN_BYTES = 32


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(
        password.encode("utf-8"), bcrypt.gensalt(rounds=rounds),
    ).decode("utf-8")


@dataclass(frozen=True)
class Registration:
    account: AccountRecord
    confirmation_token: str


class RegistrationService:
    """Creates inactive accounts pending confirmation."""

    def __init__(
        self,
        accounts: AccountRepository,
        groups: GroupRepository,
        rounds: int = BCRYPT_ROUNDS,
    ):
        self.accounts = accounts
        self.groups = groups
        self.rounds = rounds

    async def register(
        self,
        full_name: str,
        login: str,
        email: str,
        password: str,
        birth_date: date | None = None,
        group_id: GroupId | None = None,
    ) -> Registration:
        if await self.accounts.login_or_email_taken(login, email):
            raise ConflictError("Користувач з таким email або логіном вже існує")
        if group_id is not None and await self.groups.get(group_id) is None:
            raise ResourceNotFoundError("Group", str(group_id))

        token = secrets.token_hex(TOKEN_BYTES)
        account = await self.accounts.create(NewAccount(
            full_name=full_name,
            login=login,
            email=email,
            password_hash=hash_password(password, self.rounds),
            confirmation_token=token,
            birth_date=birth_date,
            group_id=group_id,
        ))
        logger.info(
            "Registration pending confirmation",
            extra={"account_id": str(account.id)},
        )
        return Registration(account=account, confirmation_token=token)
