"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - get_now overridden so block expiry and "today" are deterministic
    - db_manager patched for the readiness check, which bypasses get_db

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - bcrypt with 4 rounds: same algorithm as production, fast enough for tests
"""

from datetime import date, datetime, time, timedelta, timezone

import bcrypt
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from meedle.api.dependencies import get_now
from meedle.db.base import Base
from meedle.infrastructure.database import get_db, DatabaseSessionManager
from meedle.models.course import Course
from meedle.models.group import Group
from meedle.models.lesson import Lesson
from meedle.models.user import User
import meedle.infrastructure.database as db_module
from meedle.main import app

# Monday of a LOWER week for term_epoch 2025-09-01
NOW = datetime(2025, 10, 6, 12, 0, tzinfo=timezone.utc)
PASSWORD = "secret123"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB and clock dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: NOW

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture(scope="session")
def password_hash() -> str:
    return bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(rounds=4)).decode()


@pytest.fixture
async def seed_group(test_db):
    group = Group(name="КН-21")
    course = Course(name="Алгоритми", teacher_name="Сидоренко С.С.")
    test_db.add_all([group, course])
    await test_db.commit()
    return group, course


@pytest.fixture
async def seed_users(test_db, seed_group, password_hash):
    """Active, indefinitely blocked and expired-block accounts, keyed by login."""
    group, _ = seed_group

    def _user(login: str, **block) -> User:
        return User(
            full_name=f"User {login}", login=login, email=f"{login}@example.com",
            password_hash=password_hash, role="student", group_id=group.id,
            **block,
        )

    users = {
        "student1": _user("student1", is_active=True),
        "blocked1": _user("blocked1", is_active=False, block_reason="спам"),
        "expired1": _user(
            "expired1", is_active=False, block_reason="спам",
            blocked_until=NOW - timedelta(hours=1),
        ),
        "pending1": _user(
            "pending1", is_active=False, confirmation_token="confirm-me",
        ),
    }
    test_db.add_all(users.values())
    await test_db.commit()
    return users


@pytest.fixture
async def seed_lessons(test_db, seed_group):
    """Monday lecture every week, its room override on NOW's date, Tuesday UPPER lab."""
    group, course = seed_group
    common = {"group_id": group.id, "course_id": course.id}
    lessons = {
        "lecture": Lesson(
            **common, weekday="monday", start_time=time(9, 0), end_time=time(10, 30),
            room="Ауд. 301", kind="lecture", recurrence="every",
        ),
        "override": Lesson(
            **common, weekday="monday", start_time=time(9, 0), end_time=time(10, 30),
            room="Ауд. 999", kind="lecture", recurrence="every",
            is_temporary=True, lesson_date=date(2025, 10, 6),
        ),
        "upper_lab": Lesson(
            **common, weekday="tuesday", start_time=time(11, 0), end_time=time(12, 30),
            room="Лаб. 12", kind="lab", recurrence="upper",
        ),
    }
    test_db.add_all(lessons.values())
    await test_db.commit()
    return lessons
