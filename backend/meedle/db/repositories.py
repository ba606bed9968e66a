"""SQLAlchemy Repositories — async implementations of the core boundary protocols.

Invariants:
    - Every method returns core records (frozen dataclasses), never ORM rows
    - update_block_state writes is_active, block_reason and blocked_until together
    - Datetimes read back without tzinfo (SQLite) are interpreted as UTC
    - Errors are not caught here; the session manager maps SQLAlchemy failures
    - Reads select only the columns the records need; no relationship loads

Design Decisions:
    - One small class per protocol sharing the request's AsyncSession
      (ADR: no god objects, max ~4 methods per class)
    - update_block_state commits immediately: the lift of an expired block must
      survive even if the password check that follows fails
    - Lessons joined to courses in the same query so names come back with the rows
"""

from datetime import date, datetime, timezone

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from meedle.core.account_block import AccountBlockState
from meedle.core.domain_types import (
    AccountId, CourseId, GroupId, LessonId, LessonKind, Recurrence,
    UserRole, Weekday,
)
from meedle.core.repository_protocols import (
    AccountRecord, GroupRecord, NewAccount,
)
from meedle.core.schedule_resolver import LessonOverride, LessonTemplate
from meedle.models.course import Course
from meedle.models.group import Group
from meedle.models.lesson import Lesson
from meedle.models.user import User


def _as_utc(moment: datetime | None) -> datetime | None:
    if moment is None or moment.tzinfo is not None:
        return moment
    return moment.replace(tzinfo=timezone.utc)


def _to_account_record(user: User) -> AccountRecord:
    return AccountRecord(
        id=AccountId(user.id),
        login=user.login,
        full_name=user.full_name,
        email=user.email,
        role=UserRole(user.role),
        password_hash=user.password_hash,
        group_id=GroupId(user.group_id) if user.group_id else None,
        block=AccountBlockState(
            is_active=user.is_active,
            block_reason=None if user.is_active else user.block_reason,
            blocked_until=None if user.is_active else _as_utc(user.blocked_until),
        ),
        pending_confirmation=(
            not user.is_active and user.confirmation_token is not None
        ),
    )


def _to_template(row: Lesson, course_name: str, teacher_name: str | None) -> LessonTemplate:
    return LessonTemplate(
        id=LessonId(row.id),
        group_id=GroupId(row.group_id),
        course_id=CourseId(row.course_id),
        weekday=Weekday(row.weekday),
        start_time=row.start_time,
        end_time=row.end_time,
        room=row.room,
        kind=LessonKind(row.kind),
        recurrence=Recurrence(row.recurrence),
        course_name=course_name,
        teacher_name=teacher_name,
    )


def _to_override(row: Lesson, course_name: str, teacher_name: str | None) -> LessonOverride:
    return LessonOverride(
        id=LessonId(row.id),
        group_id=GroupId(row.group_id),
        course_id=CourseId(row.course_id),
        date=row.lesson_date,
        start_time=row.start_time,
        end_time=row.end_time,
        room=row.room,
        kind=LessonKind(row.kind),
        course_name=course_name,
        teacher_name=teacher_name,
    )


class SqlAccountRepository:
    """AccountRepository backed by the users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, account_id: AccountId) -> AccountRecord | None:
        user = await self.db.get(User, account_id)
        return _to_account_record(user) if user else None

    async def get_by_login(self, login: str) -> AccountRecord | None:
        result = await self.db.execute(select(User).where(User.login == login))
        user = result.scalar_one_or_none()
        return _to_account_record(user) if user else None

    async def update_block_state(
        self, account_id: AccountId, state: AccountBlockState,
    ) -> None:
        values = {
            "is_active": state.is_active,
            "block_reason": state.block_reason,
            "blocked_until": state.blocked_until,
        }
        if state.is_active:
            # activation by an administrator also settles a pending confirmation
            values["confirmation_token"] = None
        await self.db.execute(
            update(User)
            .where(User.id == account_id)
            .values(**values)
            .execution_options(synchronize_session="fetch"),
        )
        await self.db.commit()

    async def confirm_registration(self, token: str) -> AccountRecord | None:
        """Activate the account holding this confirmation token; token is single-use."""
        result = await self.db.execute(
            select(User).where(User.confirmation_token == token),
        )
        user = result.scalar_one_or_none()
        if user is None:
            return None
        user.is_active = True
        user.block_reason = None
        user.blocked_until = None
        user.confirmation_token = None
        await self.db.commit()
        return _to_account_record(user)

    async def login_or_email_taken(self, login: str, email: str) -> bool:
        result = await self.db.execute(
            select(User.id)
            .where(or_(User.login == login, User.email == email))
            .limit(1),
        )
        return result.first() is not None

    async def create(self, account: NewAccount) -> AccountRecord:
        user = User(
            full_name=account.full_name,
            login=account.login,
            email=account.email,
            password_hash=account.password_hash,
            role=account.role.value,
            birth_date=account.birth_date,
            group_id=account.group_id,
            is_active=False,
            confirmation_token=account.confirmation_token,
        )
        self.db.add(user)
        await self.db.commit()
        return _to_account_record(user)


class SqlGroupRepository:
    """GroupRepository backed by the groups table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, group_id: GroupId) -> GroupRecord | None:
        result = await self.db.execute(
            select(Group.id, Group.name).where(Group.id == group_id),
        )
        row = result.first()
        if row is None:
            return None
        return GroupRecord(id=GroupId(row.id), name=row.name)


class SqlLessonRepository:
    """LessonRepository backed by the lessons table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _lessons_with_course(self, group_id: GroupId, temporary: bool):
        return (
            select(Lesson, Course.name, Course.teacher_name)
            .join(Course, Lesson.course_id == Course.id)
            .where(
                Lesson.group_id == group_id,
                Lesson.is_temporary.is_(temporary),
            )
        )

    async def list_templates(self, group_id: GroupId) -> list[LessonTemplate]:
        result = await self.db.execute(self._lessons_with_course(group_id, False))
        return [_to_template(*row) for row in result.all()]

    async def list_overrides(
        self, group_id: GroupId, start: date, end: date,
    ) -> list[LessonOverride]:
        result = await self.db.execute(
            self._lessons_with_course(group_id, True).where(
                Lesson.lesson_date >= start,
                Lesson.lesson_date <= end,
            ),
        )
        return [_to_override(*row) for row in result.all()]
