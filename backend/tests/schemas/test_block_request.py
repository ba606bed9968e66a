"""Admin block request — duration and blocked_until consistency."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from meedle.core.domain_types import BlockDuration
from meedle.schemas.auth import BlockRequest, LoginRequest


def test_empty_request_blocks_indefinitely():
    request = BlockRequest()
    assert request.duration == BlockDuration.INDEFINITE
    assert request.blocked_until is None


def test_blocked_until_alone_implies_custom():
    until = datetime(2026, 1, 1, tzinfo=timezone.utc)
    request = BlockRequest(blocked_until=until)
    assert request.duration == BlockDuration.CUSTOM


def test_custom_without_blocked_until_rejected():
    with pytest.raises(ValidationError):
        BlockRequest(duration=BlockDuration.CUSTOM)


def test_naive_blocked_until_rejected():
    with pytest.raises(ValidationError):
        BlockRequest(blocked_until=datetime(2026, 1, 1))


def test_reason_max_length():
    with pytest.raises(ValidationError):
        BlockRequest(reason="x" * 501)


def test_login_request_strips_login():
    assert LoginRequest(login=" student1 ", password="p").login == "student1"


def test_login_request_rejects_blank_login():
    with pytest.raises(ValidationError):
        LoginRequest(login="   ", password="p")
