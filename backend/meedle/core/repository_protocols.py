"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection (db/repositories.py)
    - Repositories exchange core records (dataclasses), never ORM rows

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these records are never async themselves —
      the services orchestrate the async calls around the pure logic
    - Errors are not translated here: whatever the implementation raises reaches the caller
"""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from meedle.core.account_block import AccountBlockState
from meedle.core.domain_types import AccountId, GroupId, UserRole
from meedle.core.schedule_resolver import LessonOverride, LessonTemplate


@dataclass(frozen=True)
class AccountRecord:
    """Account fields the login flow needs."""
    id: AccountId
    login: str
    full_name: str
    email: str
    role: UserRole
    password_hash: str
    block: AccountBlockState
    group_id: GroupId | None = None
    pending_confirmation: bool = False


@dataclass(frozen=True)
class NewAccount:
    """A self-registered account, stored inactive until an administrator confirms it."""
    full_name: str
    login: str
    email: str
    password_hash: str
    confirmation_token: str
    role: UserRole = UserRole.STUDENT
    birth_date: date | None = None
    group_id: GroupId | None = None


@dataclass(frozen=True)
class GroupRecord:
    id: GroupId
    name: str


class AccountRepository(Protocol):
    """Contract for account persistence — implemented by shell."""
    async def get_by_id(self, account_id: AccountId) -> AccountRecord | None: ...
    async def get_by_login(self, login: str) -> AccountRecord | None: ...
    async def update_block_state(
        self, account_id: AccountId, state: AccountBlockState,
    ) -> None: ...
    async def confirm_registration(self, token: str) -> AccountRecord | None: ...
    async def login_or_email_taken(self, login: str, email: str) -> bool: ...
    async def create(self, account: NewAccount) -> AccountRecord: ...


class GroupRepository(Protocol):
    """Contract for group lookup — implemented by shell."""
    async def get(self, group_id: GroupId) -> GroupRecord | None: ...


class LessonRepository(Protocol):
    """Contract for lesson persistence — implemented by shell."""
    async def list_templates(self, group_id: GroupId) -> list[LessonTemplate]: ...
    async def list_overrides(
        self, group_id: GroupId, start: date, end: date,
    ) -> list[LessonOverride]: ...
