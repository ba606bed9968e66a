"""Access Gate service — tests for the lazy block lift and its single write.

Tests cover:
    - Active accounts: Allowed, no write
    - Indefinite block: Denied, no write, indefinite message
    - Expired block: Allowed, persisted state cleared
    - Future block: Denied, no write
    - Repository failure propagates unchanged
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from meedle.core.account_block import AccountBlockState
from meedle.core.domain_types import AccountId, Locale, UserRole
from meedle.core.errors import DatabaseError
from meedle.core.repository_protocols import AccountRecord
from meedle.services.access_gate import AccessGate
from tests.services.fakes import FakeAccountRepository

NOW = datetime(2025, 10, 6, 12, 0, tzinfo=timezone.utc)


def _account(block: AccountBlockState) -> AccountRecord:
    return AccountRecord(
        id=AccountId(uuid4()), login="student1", full_name="Іваненко Іван",
        email="ivan@example.com", role=UserRole.STUDENT,
        password_hash="x", block=block,
    )


def _gate(repo) -> AccessGate:
    return AccessGate(repo, timezone.utc, Locale.EN)


async def test_active_account_allowed_without_write():
    account = _account(AccountBlockState(is_active=True))
    repo = FakeAccountRepository(account)
    decision = await _gate(repo).evaluate(account, NOW)
    assert decision.allowed
    assert repo.writes == []


async def test_indefinite_block_denied_without_write():
    account = _account(AccountBlockState(is_active=False, block_reason="cheating"))
    repo = FakeAccountRepository(account)
    decision = await _gate(repo).evaluate(account, NOW)
    assert not decision.allowed
    assert "indefinitely" in decision.explanation
    assert "cheating" in decision.explanation
    assert repo.writes == []


async def test_expired_block_lifted_and_persisted():
    account = _account(AccountBlockState(
        is_active=False, block_reason="spam", blocked_until=NOW - timedelta(days=1),
    ))
    repo = FakeAccountRepository(account)
    decision = await _gate(repo).evaluate(account, NOW)

    assert decision.allowed
    assert len(repo.writes) == 1
    stored = (await repo.get_by_id(account.id)).block
    assert stored.is_active is True
    assert stored.block_reason is None
    assert stored.blocked_until is None


async def test_reevaluating_lifted_account_is_noop():
    account = _account(AccountBlockState(
        is_active=False, blocked_until=NOW - timedelta(minutes=1),
    ))
    repo = FakeAccountRepository(account)
    gate = _gate(repo)
    await gate.evaluate(account, NOW)
    refreshed = await repo.get_by_id(account.id)
    await gate.evaluate(refreshed, NOW)
    assert len(repo.writes) == 1


async def test_future_block_denied_without_write():
    until = NOW + timedelta(days=2)
    account = _account(AccountBlockState(is_active=False, blocked_until=until))
    repo = FakeAccountRepository(account)
    decision = await _gate(repo).evaluate(account, NOW)
    assert not decision.allowed
    assert decision.blocked_until == until
    assert repo.writes == []


async def test_persistence_failure_propagates_unchanged():
    account = _account(AccountBlockState(
        is_active=False, blocked_until=NOW - timedelta(days=1),
    ))
    repo = FakeAccountRepository(account)
    failure = DatabaseError("connection lost", "execute")
    repo.fail_with = failure
    with pytest.raises(DatabaseError) as exc_info:
        await _gate(repo).evaluate(account, NOW)
    assert exc_info.value is failure
