"""Boundary Protocols — the persistence contract between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Every storage operation used by services goes through ScheduleRepository
    - Implementations raise only errors from core/errors.py:
        ConflictError on uniqueness violations (email, membership pair)
        ResourceNotFoundError where an update targets a missing row
        InternalError / DatabaseError for everything else
    - Ordering is part of the contract (see each method)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but the core pure functions that consume their results are never async
    - Two implementations (infrastructure/sql_repository.py and
      infrastructure/memory_repository.py) share one conformance suite
"""

from typing import Any, Protocol
from uuid import UUID
from datetime import datetime

from app.core.domain_types import ScheduleRole
from app.core.entities import (
    RotationTemplate, Schedule, ScheduleWithRole, Shift, ShiftComment, ShiftSpec, User,
)


class ScheduleRepository(Protocol):
    """Contract for all persistence — implemented by shell."""

    # Users
    async def count_users(self) -> int: ...
    async def create_user(
        self, email: str, password_hash: str, is_superadmin: bool,
    ) -> User: ...
    async def find_user_by_email(self, email: str) -> tuple[User, str] | None: ...
    async def get_user(self, user_id: UUID) -> User | None: ...

    # Schedules and membership
    async def create_schedule(
        self, name: str, subject_type: str, subject_name: str, created_by: UUID,
    ) -> Schedule:
        """Insert the schedule AND the creator's admin membership as one unit."""
        ...
    async def list_schedules_for_user(self, user_id: UUID) -> list[ScheduleWithRole]:
        """Newest schedule first."""
        ...
    async def get_schedule(self, schedule_id: UUID) -> Schedule | None: ...
    async def get_schedule_role(
        self, schedule_id: UUID, user_id: UUID,
    ) -> ScheduleRole | None: ...
    async def list_schedule_members(
        self, schedule_id: UUID,
    ) -> list[tuple[User, ScheduleRole]]:
        """Oldest membership first."""
        ...
    async def add_member(
        self, schedule_id: UUID, user_id: UUID, role: ScheduleRole,
    ) -> None: ...
    async def set_member_role(
        self, schedule_id: UUID, user_id: UUID, role: ScheduleRole,
    ) -> None: ...

    # Shifts
    async def create_shift(self, spec: ShiftSpec) -> Shift: ...
    async def list_shifts(
        self, schedule_id: UUID, start: datetime, end: datetime,
    ) -> list[Shift]:
        """Shifts with start <= starts_at < end, earliest first."""
        ...
    async def get_shift(self, shift_id: UUID) -> Shift | None: ...
    async def assign_shift(
        self, shift_id: UUID, assigned_user_id: UUID | None,
    ) -> None: ...

    # Comments
    async def add_shift_comment(
        self, shift_id: UUID, user_id: UUID, body: str,
    ) -> ShiftComment: ...
    async def list_shift_comments(self, shift_id: UUID) -> list[ShiftComment]:
        """Oldest comment first."""
        ...

    # Rotation templates
    async def create_template(
        self, schedule_id: UUID, name: str, definition: Any, created_by: UUID,
    ) -> RotationTemplate: ...
    async def list_templates(self, schedule_id: UUID) -> list[RotationTemplate]:
        """Newest template first."""
        ...
    async def get_template(self, template_id: UUID) -> RotationTemplate | None: ...

    # Probes
    async def health_check(self) -> bool: ...
