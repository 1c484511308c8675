"""Entities — immutable records exchanged between core, adapters and routes.

Invariants:
    - All timestamps are timezone-aware UTC datetimes
    - User never carries the password hash (the port returns it separately)
    - Records are frozen; mutation goes through the repository, which stores a replacement

Design Decisions:
    - Plain dataclasses, not ORM rows: both storage adapters produce the same type,
      so routes and tests cannot tell which adapter served them
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from app.core.domain_types import Period, ScheduleRole


def as_utc(value: datetime) -> datetime:
    """Aware UTC copy of value; a naive value is read as UTC wall-clock, never host-local."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class User:
    id: UUID
    email: str
    is_superadmin: bool
    created_at: datetime


@dataclass(frozen=True)
class Schedule:
    id: UUID
    name: str
    subject_type: str
    subject_name: str
    created_by: UUID
    created_at: datetime


@dataclass(frozen=True)
class ScheduleWithRole:
    """A schedule as seen by one member."""
    schedule: Schedule
    role: ScheduleRole


@dataclass(frozen=True)
class Membership:
    schedule_id: UUID
    user_id: UUID
    role: ScheduleRole
    created_at: datetime


@dataclass(frozen=True)
class Shift:
    id: UUID
    schedule_id: UUID
    starts_at: datetime
    ends_at: datetime
    period: Period
    assigned_user_id: UUID | None
    created_by: UUID
    created_at: datetime


@dataclass(frozen=True)
class ShiftSpec:
    """An unsaved shift — output of template expansion, input of create_shift."""
    schedule_id: UUID
    starts_at: datetime
    ends_at: datetime
    period: Period
    created_by: UUID


@dataclass(frozen=True)
class ShiftComment:
    id: UUID
    shift_id: UUID
    user_id: UUID
    body: str
    created_at: datetime


@dataclass(frozen=True)
class RotationTemplate:
    id: UUID
    schedule_id: UUID
    name: str
    definition: Any
    created_by: UUID
    created_at: datetime


@dataclass(frozen=True)
class Caller:
    """Authenticated identity of the current request."""
    id: UUID
    is_superadmin: bool
