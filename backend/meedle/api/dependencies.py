"""Route Dependencies — wires request-scoped repositories and services for FastAPI.

Invariants:
    - One AsyncSession per request shared by every repository of that request
    - The clock is a dependency (get_now) so tests can pin "now"
    - Settings read through get_settings() (cached), never from module globals

Design Decisions:
    - Plain functions with Depends over a DI container (ADR: explicit wiring, nothing hidden)
"""

from datetime import datetime, timezone

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from meedle.config import get_settings
from meedle.db.repositories import (
    SqlAccountRepository, SqlGroupRepository, SqlLessonRepository,
)
from meedle.infrastructure.database import get_db
from meedle.services.access_gate import AccessGate
from meedle.services.account_admin import AccountAdministration
from meedle.services.login import LoginService
from meedle.services.registration import RegistrationService
from meedle.services.schedule_resolver import ScheduleResolver


def get_now() -> datetime:
    return datetime.now(timezone.utc)


def get_login_service(db: AsyncSession = Depends(get_db)) -> LoginService:
    settings = get_settings()
    accounts = SqlAccountRepository(db)
    gate = AccessGate(
        accounts, settings.display_tz(), settings.default_locale,
    )
    return LoginService(accounts, gate)


def get_registration_service(
    db: AsyncSession = Depends(get_db),
) -> RegistrationService:
    return RegistrationService(SqlAccountRepository(db), SqlGroupRepository(db))


def get_account_admin(
    db: AsyncSession = Depends(get_db),
) -> AccountAdministration:
    return AccountAdministration(SqlAccountRepository(db))


def get_schedule_resolver(
    db: AsyncSession = Depends(get_db),
) -> ScheduleResolver:
    return ScheduleResolver(
        SqlGroupRepository(db),
        SqlLessonRepository(db),
        get_settings().term_calendar(),
    )
