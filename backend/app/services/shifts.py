"""Shifts — creation, windowed listing, assignment and comments.

Invariants:
    - Creating shifts is admin-only; reading them needs membership
    - Assignment target defaults to the caller; others need admin (enforce_access)
    - Comments need membership AND (admin, superadmin or current assignee)
    - Comment bodies are trimmed and must not be empty
"""

import logging
from datetime import datetime
from uuid import UUID

from app.core.domain_types import Period
from app.core.entities import Caller, Shift, ShiftComment, ShiftSpec
from app.core.enforce_access import check_assign_target, check_can_comment
from app.core.errors import BadRequestError, ResourceNotFoundError
from app.core.repository_protocols import ScheduleRepository
from app.services.access import require_schedule_admin, require_schedule_member

logger = logging.getLogger(__name__)


async def get_shift_or_404(repo: ScheduleRepository, shift_id: UUID) -> Shift:
    shift = await repo.get_shift(shift_id)
    if shift is None:
        raise ResourceNotFoundError("Shift", str(shift_id))
    return shift


async def create_shift(
    repo: ScheduleRepository,
    caller: Caller,
    schedule_id: UUID,
    starts_at: datetime,
    ends_at: datetime,
    period: Period,
) -> Shift:
    await require_schedule_admin(repo, caller, schedule_id)
    if ends_at <= starts_at:
        raise BadRequestError("ends_at must be after starts_at", field="ends_at")
    return await repo.create_shift(ShiftSpec(
        schedule_id=schedule_id,
        starts_at=starts_at,
        ends_at=ends_at,
        period=period,
        created_by=caller.id,
    ))


async def list_shifts(
    repo: ScheduleRepository,
    caller: Caller,
    schedule_id: UUID,
    start: datetime,
    end: datetime,
) -> list[Shift]:
    await require_schedule_member(repo, caller, schedule_id)
    return await repo.list_shifts(schedule_id, start, end)


async def get_shift(
    repo: ScheduleRepository, caller: Caller, shift_id: UUID,
) -> Shift:
    shift = await get_shift_or_404(repo, shift_id)
    await require_schedule_member(repo, caller, shift.schedule_id)
    return shift


async def assign_shift(
    repo: ScheduleRepository,
    caller: Caller,
    shift_id: UUID,
    assigned_user_id: UUID | None,
) -> UUID:
    """Assign the shift; returns the user it was assigned to."""
    shift = await get_shift_or_404(repo, shift_id)
    role = await require_schedule_member(repo, caller, shift.schedule_id)
    target = check_assign_target(caller, role, assigned_user_id)
    await repo.assign_shift(shift_id, target)
    logger.info(
        "Shift assigned",
        extra={"user_id": target, "shift_id": shift_id, "schedule_id": shift.schedule_id},
    )
    return target


async def add_comment(
    repo: ScheduleRepository, caller: Caller, shift_id: UUID, body: str,
) -> ShiftComment:
    shift = await get_shift_or_404(repo, shift_id)
    role = await require_schedule_member(repo, caller, shift.schedule_id)
    check_can_comment(caller, role, shift)
    body = body.strip()
    if not body:
        raise BadRequestError("comment body is required", field="body")
    return await repo.add_shift_comment(shift_id, caller.id, body)


async def list_comments(
    repo: ScheduleRepository, caller: Caller, shift_id: UUID,
) -> list[ShiftComment]:
    shift = await get_shift_or_404(repo, shift_id)
    await require_schedule_member(repo, caller, shift.schedule_id)
    return await repo.list_shift_comments(shift_id)
