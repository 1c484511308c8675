"""In-Memory Repository — process-local ScheduleRepository for tests and demos.

Invariants:
    - One aggregate state value (_MemoryState) behind one AsyncReaderWriterLock:
      reads share the lock, every mutation holds it exclusively
    - Same observable behavior as SqlScheduleRepository:
        duplicate email / membership -> ConflictError (state unchanged)
        missing membership on set_member_role, missing shift on assign_shift -> ResourceNotFoundError
        dangling references or a shift ending before it starts (what a foreign key
        or check constraint would reject) -> DatabaseError
    - Same ordering as the SQL adapter, including the id tie-break
    - Stored records are frozen dataclasses; updates store a replacement

Design Decisions:
    - No per-entity locks: one lock around the whole state avoids ordering hazards
    - Membership dict keyed by (schedule_id, user_id): uniqueness is the key itself
"""

import copy
import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from app.core.domain_types import ScheduleRole
from app.core.entities import (
    Membership, RotationTemplate, Schedule, ScheduleWithRole,
    Shift, ShiftComment, ShiftSpec, User, as_utc,
)
from app.core.errors import ConflictError, DatabaseError, ResourceNotFoundError
from app.infrastructure.rwlock import AsyncReaderWriterLock

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class _MemoryState:
    users: dict[UUID, tuple[User, str]] = field(default_factory=dict)
    schedules: dict[UUID, Schedule] = field(default_factory=dict)
    members: dict[tuple[UUID, UUID], Membership] = field(default_factory=dict)
    shifts: dict[UUID, Shift] = field(default_factory=dict)
    comments: dict[UUID, list[ShiftComment]] = field(default_factory=dict)
    templates: dict[UUID, RotationTemplate] = field(default_factory=dict)


class InMemoryScheduleRepository:
    """ScheduleRepository backed by dictionaries."""

    def __init__(self) -> None:
        self._state = _MemoryState()
        self._lock = AsyncReaderWriterLock()

    # ─── Referential checks (mirror the SQL foreign keys) ────────

    def _require_user(self, user_id: UUID, operation: str) -> None:
        if user_id not in self._state.users:
            logger.error(f"{operation}: user {user_id} does not exist")
            raise DatabaseError(operation)

    def _require_schedule(self, schedule_id: UUID, operation: str) -> None:
        if schedule_id not in self._state.schedules:
            logger.error(f"{operation}: schedule {schedule_id} does not exist")
            raise DatabaseError(operation)

    # ─── Users ───────────────────────────────────────────────────

    async def count_users(self) -> int:
        async with self._lock.read():
            return len(self._state.users)

    async def create_user(
        self, email: str, password_hash: str, is_superadmin: bool,
    ) -> User:
        async with self._lock.write():
            if any(u.email == email for u, _ in self._state.users.values()):
                raise ConflictError("email already exists")
            user = User(
                id=uuid.uuid4(), email=email,
                is_superadmin=is_superadmin, created_at=_now(),
            )
            self._state.users[user.id] = (user, password_hash)
            return user

    async def find_user_by_email(self, email: str) -> tuple[User, str] | None:
        async with self._lock.read():
            for user, password_hash in self._state.users.values():
                if user.email == email:
                    return user, password_hash
            return None

    async def get_user(self, user_id: UUID) -> User | None:
        async with self._lock.read():
            entry = self._state.users.get(user_id)
            return entry[0] if entry else None

    # ─── Schedules and membership ────────────────────────────────

    async def create_schedule(
        self, name: str, subject_type: str, subject_name: str, created_by: UUID,
    ) -> Schedule:
        async with self._lock.write():
            self._require_user(created_by, "create_schedule")
            now = _now()
            schedule = Schedule(
                id=uuid.uuid4(), name=name, subject_type=subject_type,
                subject_name=subject_name, created_by=created_by, created_at=now,
            )
            self._state.schedules[schedule.id] = schedule
            self._state.members[(schedule.id, created_by)] = Membership(
                schedule_id=schedule.id, user_id=created_by,
                role=ScheduleRole.ADMIN, created_at=now,
            )
            return schedule

    async def list_schedules_for_user(self, user_id: UUID) -> list[ScheduleWithRole]:
        async with self._lock.read():
            out = [
                ScheduleWithRole(self._state.schedules[m.schedule_id], m.role)
                for m in self._state.members.values()
                if m.user_id == user_id and m.schedule_id in self._state.schedules
            ]
        out.sort(key=lambda x: (x.schedule.created_at, x.schedule.id), reverse=True)
        return out

    async def get_schedule(self, schedule_id: UUID) -> Schedule | None:
        async with self._lock.read():
            return self._state.schedules.get(schedule_id)

    async def get_schedule_role(
        self, schedule_id: UUID, user_id: UUID,
    ) -> ScheduleRole | None:
        async with self._lock.read():
            membership = self._state.members.get((schedule_id, user_id))
            return membership.role if membership else None

    async def list_schedule_members(
        self, schedule_id: UUID,
    ) -> list[tuple[User, ScheduleRole]]:
        async with self._lock.read():
            rows = [
                (m, self._state.users[m.user_id][0])
                for m in self._state.members.values()
                if m.schedule_id == schedule_id and m.user_id in self._state.users
            ]
        rows.sort(key=lambda r: (r[0].created_at, r[0].user_id))
        return [(user, m.role) for m, user in rows]

    async def add_member(
        self, schedule_id: UUID, user_id: UUID, role: ScheduleRole,
    ) -> None:
        async with self._lock.write():
            key = (schedule_id, user_id)
            if key in self._state.members:
                raise ConflictError("user already in schedule")
            self._require_schedule(schedule_id, "add_member")
            self._require_user(user_id, "add_member")
            self._state.members[key] = Membership(
                schedule_id=schedule_id, user_id=user_id, role=role, created_at=_now(),
            )

    async def set_member_role(
        self, schedule_id: UUID, user_id: UUID, role: ScheduleRole,
    ) -> None:
        async with self._lock.write():
            key = (schedule_id, user_id)
            membership = self._state.members.get(key)
            if membership is None:
                raise ResourceNotFoundError("Membership", f"{schedule_id}/{user_id}")
            self._state.members[key] = replace(membership, role=role)

    # ─── Shifts ──────────────────────────────────────────────────

    async def create_shift(self, spec: ShiftSpec) -> Shift:
        async with self._lock.write():
            self._require_schedule(spec.schedule_id, "create_shift")
            self._require_user(spec.created_by, "create_shift")
            starts_at, ends_at = as_utc(spec.starts_at), as_utc(spec.ends_at)
            if ends_at <= starts_at:
                raise DatabaseError("create_shift")
            shift = Shift(
                id=uuid.uuid4(),
                schedule_id=spec.schedule_id,
                starts_at=starts_at,
                ends_at=ends_at,
                period=spec.period,
                assigned_user_id=None,
                created_by=spec.created_by,
                created_at=_now(),
            )
            self._state.shifts[shift.id] = shift
            return shift

    async def list_shifts(
        self, schedule_id: UUID, start: datetime, end: datetime,
    ) -> list[Shift]:
        start, end = as_utc(start), as_utc(end)
        async with self._lock.read():
            out = [
                s for s in self._state.shifts.values()
                if s.schedule_id == schedule_id and start <= s.starts_at < end
            ]
        out.sort(key=lambda s: (s.starts_at, s.id))
        return out

    async def get_shift(self, shift_id: UUID) -> Shift | None:
        async with self._lock.read():
            return self._state.shifts.get(shift_id)

    async def assign_shift(
        self, shift_id: UUID, assigned_user_id: UUID | None,
    ) -> None:
        async with self._lock.write():
            shift = self._state.shifts.get(shift_id)
            if shift is None:
                raise ResourceNotFoundError("Shift", str(shift_id))
            if assigned_user_id is not None:
                self._require_user(assigned_user_id, "assign_shift")
            self._state.shifts[shift_id] = replace(
                shift, assigned_user_id=assigned_user_id,
            )

    # ─── Comments ────────────────────────────────────────────────

    async def add_shift_comment(
        self, shift_id: UUID, user_id: UUID, body: str,
    ) -> ShiftComment:
        async with self._lock.write():
            if shift_id not in self._state.shifts:
                logger.error(f"add_shift_comment: shift {shift_id} does not exist")
                raise DatabaseError("add_shift_comment")
            self._require_user(user_id, "add_shift_comment")
            comment = ShiftComment(
                id=uuid.uuid4(), shift_id=shift_id, user_id=user_id,
                body=body, created_at=_now(),
            )
            self._state.comments.setdefault(shift_id, []).append(comment)
            return comment

    async def list_shift_comments(self, shift_id: UUID) -> list[ShiftComment]:
        async with self._lock.read():
            out = list(self._state.comments.get(shift_id, []))
        out.sort(key=lambda c: (c.created_at, c.id))
        return out

    # ─── Rotation templates ──────────────────────────────────────

    async def create_template(
        self, schedule_id: UUID, name: str, definition: Any, created_by: UUID,
    ) -> RotationTemplate:
        async with self._lock.write():
            self._require_schedule(schedule_id, "create_template")
            self._require_user(created_by, "create_template")
            template = RotationTemplate(
                id=uuid.uuid4(), schedule_id=schedule_id, name=name,
                definition=copy.deepcopy(definition), created_by=created_by,
                created_at=_now(),
            )
            self._state.templates[template.id] = template
            return template

    async def list_templates(self, schedule_id: UUID) -> list[RotationTemplate]:
        async with self._lock.read():
            out = [
                t for t in self._state.templates.values()
                if t.schedule_id == schedule_id
            ]
        out.sort(key=lambda t: (t.created_at, t.id), reverse=True)
        return out

    async def get_template(self, template_id: UUID) -> RotationTemplate | None:
        async with self._lock.read():
            return self._state.templates.get(template_id)

    async def health_check(self) -> bool:
        return True
