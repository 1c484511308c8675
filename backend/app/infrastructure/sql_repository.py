"""SQL Repository — durable ScheduleRepository on SQLAlchemy async.

Invariants:
    - One AsyncSession per operation, always through DatabaseSessionManager.session()
    - Unique/primary-key violations -> ConflictError; every other failure -> DatabaseError
      (mapped by the session manager, detail logged, never returned)
    - create_schedule writes the schedule and the creator's admin membership in ONE commit
    - Rows are converted to core entities before leaving this module; datetimes come
      back timezone-aware UTC even from SQLite, which drops the offset
    - Ordering matches InMemoryScheduleRepository (timestamp, then id)

Design Decisions:
    - ORM inserts + Core-style select() for reads: no relationship loading, so no
      lazy-load surprises in async context
    - Datetimes normalized to UTC before binding: SQLite stores wall-clock text, so
      every stored value must share one offset for range filters to compare correctly
"""

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import Period, ScheduleRole
from app.core.entities import (
    RotationTemplate, Schedule, ScheduleWithRole, Shift, ShiftComment, ShiftSpec, User,
    as_utc,
)
from app.core.errors import ConflictError, ResourceNotFoundError
from app.infrastructure.database import DatabaseSessionManager, is_unique_violation
from app.models.rotation_template import RotationTemplateModel
from app.models.schedule import ScheduleModel
from app.models.schedule_member import ScheduleMemberModel
from app.models.shift import ShiftModel
from app.models.shift_comment import ShiftCommentModel
from app.models.user import UserModel

logger = logging.getLogger(__name__)


# ─── Row → entity ────────────────────────────────────────────────

def _to_user(row: UserModel) -> User:
    return User(
        id=row.id, email=row.email,
        is_superadmin=row.is_superadmin, created_at=as_utc(row.created_at),
    )


def _to_schedule(row: ScheduleModel) -> Schedule:
    return Schedule(
        id=row.id, name=row.name, subject_type=row.subject_type,
        subject_name=row.subject_name, created_by=row.created_by,
        created_at=as_utc(row.created_at),
    )


def _to_shift(row: ShiftModel) -> Shift:
    return Shift(
        id=row.id,
        schedule_id=row.schedule_id,
        starts_at=as_utc(row.starts_at),
        ends_at=as_utc(row.ends_at),
        period=Period(row.period),
        assigned_user_id=row.assigned_user_id,
        created_by=row.created_by,
        created_at=as_utc(row.created_at),
    )


def _to_comment(row: ShiftCommentModel) -> ShiftComment:
    return ShiftComment(
        id=row.id, shift_id=row.shift_id, user_id=row.user_id,
        body=row.body, created_at=as_utc(row.created_at),
    )


def _to_template(row: RotationTemplateModel) -> RotationTemplate:
    return RotationTemplate(
        id=row.id, schedule_id=row.schedule_id, name=row.name,
        definition=row.definition, created_by=row.created_by,
        created_at=as_utc(row.created_at),
    )


async def _commit(db: AsyncSession, conflict_message: str | None = None) -> None:
    """Commit; a uniqueness violation becomes ConflictError when a message is given."""
    try:
        await db.commit()
    except IntegrityError as e:
        if conflict_message and is_unique_violation(e):
            await db.rollback()
            logger.warning(f"Uniqueness violation: {conflict_message}")
            raise ConflictError(conflict_message) from None
        raise


class SqlScheduleRepository:
    """ScheduleRepository backed by a relational database."""

    def __init__(self, manager: DatabaseSessionManager):
        self._db = manager

    # ─── Users ───────────────────────────────────────────────────

    async def count_users(self) -> int:
        async with self._db.session() as db:
            result = await db.execute(select(func.count()).select_from(UserModel))
            return int(result.scalar_one())

    async def create_user(
        self, email: str, password_hash: str, is_superadmin: bool,
    ) -> User:
        async with self._db.session() as db:
            row = UserModel(
                email=email, password_hash=password_hash, is_superadmin=is_superadmin,
            )
            db.add(row)
            await _commit(db, "email already exists")
            return _to_user(row)

    async def find_user_by_email(self, email: str) -> tuple[User, str] | None:
        async with self._db.session() as db:
            result = await db.execute(
                select(UserModel).where(UserModel.email == email),
            )
            row = result.scalar_one_or_none()
            return (_to_user(row), row.password_hash) if row else None

    async def get_user(self, user_id: UUID) -> User | None:
        async with self._db.session() as db:
            row = await db.get(UserModel, user_id)
            return _to_user(row) if row else None

    # ─── Schedules and membership ────────────────────────────────

    async def create_schedule(
        self, name: str, subject_type: str, subject_name: str, created_by: UUID,
    ) -> Schedule:
        async with self._db.session() as db:
            row = ScheduleModel(
                name=name, subject_type=subject_type,
                subject_name=subject_name, created_by=created_by,
            )
            db.add(row)
            await db.flush()
            db.add(ScheduleMemberModel(
                schedule_id=row.id, user_id=created_by,
                role=ScheduleRole.ADMIN.value, created_at=row.created_at,
            ))
            await _commit(db)
            return _to_schedule(row)

    async def list_schedules_for_user(self, user_id: UUID) -> list[ScheduleWithRole]:
        async with self._db.session() as db:
            result = await db.execute(
                select(ScheduleModel, ScheduleMemberModel.role)
                .join(
                    ScheduleMemberModel,
                    ScheduleMemberModel.schedule_id == ScheduleModel.id,
                )
                .where(ScheduleMemberModel.user_id == user_id)
                .order_by(ScheduleModel.created_at.desc(), ScheduleModel.id.desc()),
            )
            return [
                ScheduleWithRole(_to_schedule(s), ScheduleRole(role))
                for s, role in result.all()
            ]

    async def get_schedule(self, schedule_id: UUID) -> Schedule | None:
        async with self._db.session() as db:
            row = await db.get(ScheduleModel, schedule_id)
            return _to_schedule(row) if row else None

    async def get_schedule_role(
        self, schedule_id: UUID, user_id: UUID,
    ) -> ScheduleRole | None:
        async with self._db.session() as db:
            result = await db.execute(
                select(ScheduleMemberModel.role).where(
                    ScheduleMemberModel.schedule_id == schedule_id,
                    ScheduleMemberModel.user_id == user_id,
                ),
            )
            role = result.scalar_one_or_none()
            return ScheduleRole(role) if role else None

    async def list_schedule_members(
        self, schedule_id: UUID,
    ) -> list[tuple[User, ScheduleRole]]:
        async with self._db.session() as db:
            result = await db.execute(
                select(UserModel, ScheduleMemberModel.role)
                .join(ScheduleMemberModel, ScheduleMemberModel.user_id == UserModel.id)
                .where(ScheduleMemberModel.schedule_id == schedule_id)
                .order_by(
                    ScheduleMemberModel.created_at.asc(),
                    ScheduleMemberModel.user_id.asc(),
                ),
            )
            return [(_to_user(u), ScheduleRole(role)) for u, role in result.all()]

    async def add_member(
        self, schedule_id: UUID, user_id: UUID, role: ScheduleRole,
    ) -> None:
        async with self._db.session() as db:
            db.add(ScheduleMemberModel(
                schedule_id=schedule_id, user_id=user_id, role=role.value,
            ))
            await _commit(db, "user already in schedule")

    async def set_member_role(
        self, schedule_id: UUID, user_id: UUID, role: ScheduleRole,
    ) -> None:
        async with self._db.session() as db:
            result = await db.execute(
                update(ScheduleMemberModel)
                .where(
                    ScheduleMemberModel.schedule_id == schedule_id,
                    ScheduleMemberModel.user_id == user_id,
                )
                .values(role=role.value),
            )
            if result.rowcount == 0:
                await db.rollback()
                raise ResourceNotFoundError("Membership", f"{schedule_id}/{user_id}")
            await _commit(db)

    # ─── Shifts ──────────────────────────────────────────────────

    async def create_shift(self, spec: ShiftSpec) -> Shift:
        async with self._db.session() as db:
            row = ShiftModel(
                schedule_id=spec.schedule_id,
                starts_at=as_utc(spec.starts_at),
                ends_at=as_utc(spec.ends_at),
                period=spec.period.value,
                assigned_user_id=None,
                created_by=spec.created_by,
            )
            db.add(row)
            await _commit(db)
            return _to_shift(row)

    async def list_shifts(
        self, schedule_id: UUID, start: datetime, end: datetime,
    ) -> list[Shift]:
        async with self._db.session() as db:
            result = await db.execute(
                select(ShiftModel)
                .where(
                    ShiftModel.schedule_id == schedule_id,
                    ShiftModel.starts_at >= as_utc(start),
                    ShiftModel.starts_at < as_utc(end),
                )
                .order_by(ShiftModel.starts_at.asc(), ShiftModel.id.asc()),
            )
            return [_to_shift(row) for row in result.scalars().all()]

    async def get_shift(self, shift_id: UUID) -> Shift | None:
        async with self._db.session() as db:
            row = await db.get(ShiftModel, shift_id)
            return _to_shift(row) if row else None

    async def assign_shift(
        self, shift_id: UUID, assigned_user_id: UUID | None,
    ) -> None:
        async with self._db.session() as db:
            result = await db.execute(
                update(ShiftModel)
                .where(ShiftModel.id == shift_id)
                .values(assigned_user_id=assigned_user_id),
            )
            if result.rowcount == 0:
                await db.rollback()
                raise ResourceNotFoundError("Shift", str(shift_id))
            await _commit(db)

    # ─── Comments ────────────────────────────────────────────────

    async def add_shift_comment(
        self, shift_id: UUID, user_id: UUID, body: str,
    ) -> ShiftComment:
        async with self._db.session() as db:
            row = ShiftCommentModel(shift_id=shift_id, user_id=user_id, body=body)
            db.add(row)
            await _commit(db)
            return _to_comment(row)

    async def list_shift_comments(self, shift_id: UUID) -> list[ShiftComment]:
        async with self._db.session() as db:
            result = await db.execute(
                select(ShiftCommentModel)
                .where(ShiftCommentModel.shift_id == shift_id)
                .order_by(ShiftCommentModel.created_at.asc(), ShiftCommentModel.id.asc()),
            )
            return [_to_comment(row) for row in result.scalars().all()]

    # ─── Rotation templates ──────────────────────────────────────

    async def create_template(
        self, schedule_id: UUID, name: str, definition: Any, created_by: UUID,
    ) -> RotationTemplate:
        async with self._db.session() as db:
            row = RotationTemplateModel(
                schedule_id=schedule_id, name=name,
                definition=definition, created_by=created_by,
            )
            db.add(row)
            await _commit(db)
            return _to_template(row)

    async def list_templates(self, schedule_id: UUID) -> list[RotationTemplate]:
        async with self._db.session() as db:
            result = await db.execute(
                select(RotationTemplateModel)
                .where(RotationTemplateModel.schedule_id == schedule_id)
                .order_by(
                    RotationTemplateModel.created_at.desc(),
                    RotationTemplateModel.id.desc(),
                ),
            )
            return [_to_template(row) for row in result.scalars().all()]

    async def get_template(self, template_id: UUID) -> RotationTemplate | None:
        async with self._db.session() as db:
            row = await db.get(RotationTemplateModel, template_id)
            return _to_template(row) if row else None

    async def health_check(self) -> bool:
        return await self._db.health_check()
