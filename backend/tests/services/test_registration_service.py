"""Registration Service — tests for inactive sign-up with a confirmation token.

Tests cover:
    - Stored hash verifies against the submitted password
    - Token is 32 random bytes hex-encoded and unlocks the account
    - Duplicate login or email raises ConflictError without writing
    - Unknown group raises ResourceNotFoundError
"""

from uuid import uuid4

import pytest

from meedle.core.account_block import AccountBlockState
from meedle.core.domain_types import AccountId, GroupId, UserRole
from meedle.core.errors import ConflictError, ResourceNotFoundError
from meedle.core.repository_protocols import AccountRecord, GroupRecord
from meedle.services.login import password_matches
from meedle.services.registration import RegistrationService
from tests.services.fakes import FakeAccountRepository, FakeGroupRepository

GROUP = GroupRecord(id=GroupId(uuid4()), name="КН-21")


def _existing() -> AccountRecord:
    return AccountRecord(
        id=AccountId(uuid4()), login="student1", full_name="Петренко Петро",
        email="petro@example.com", role=UserRole.STUDENT,
        password_hash="x", block=AccountBlockState(is_active=True),
    )


def _service(accounts) -> RegistrationService:
    return RegistrationService(accounts, FakeGroupRepository(GROUP), rounds=4)


async def _register(service, **overrides):
    fields = {
        "full_name": "Коваленко Олена",
        "login": "olena",
        "email": "olena@example.com",
        "password": "longenough1",
    }
    fields.update(overrides)
    return await service.register(**fields)


async def test_registration_stores_inactive_pending_account():
    accounts = FakeAccountRepository()
    registration = await _register(_service(accounts), group_id=GROUP.id)

    account = registration.account
    assert account.block.is_active is False
    assert account.pending_confirmation is True
    assert account.group_id == GROUP.id
    assert password_matches("longenough1", account.password_hash)
    assert not password_matches("other-pass", account.password_hash)


async def test_confirmation_token_is_hex_and_unique():
    accounts = FakeAccountRepository()
    service = _service(accounts)
    first = await _register(service)
    second = await _register(service, login="olena2", email="olena2@example.com")

    assert len(first.confirmation_token) == 64
    int(first.confirmation_token, 16)
    assert first.confirmation_token != second.confirmation_token

    confirmed = await accounts.confirm_registration(first.confirmation_token)
    assert confirmed.id == first.account.id
    assert confirmed.block.is_active is True


@pytest.mark.parametrize("login,email", [
    ("student1", "new@example.com"),
    ("newcomer", "petro@example.com"),
])
async def test_duplicate_login_or_email_conflicts(login, email):
    accounts = FakeAccountRepository(_existing())
    with pytest.raises(ConflictError) as exc_info:
        await _register(_service(accounts), login=login, email=email)
    assert exc_info.value.http_status == 409
    assert len(accounts.accounts) == 1


async def test_unknown_group_rejected():
    accounts = FakeAccountRepository()
    with pytest.raises(ResourceNotFoundError):
        await _register(_service(accounts), group_id=GroupId(uuid4()))
    assert accounts.accounts == {}
