"""Schedules — creation, listing and membership management."""

import logging
from uuid import UUID

from app.core.domain_types import ScheduleRole
from app.core.entities import Caller, Schedule, ScheduleWithRole, User
from app.core.errors import BadRequestError, ResourceNotFoundError
from app.core.repository_protocols import ScheduleRepository
from app.services.access import require_schedule_admin, require_schedule_member
from app.services.accounts import normalize_email

logger = logging.getLogger(__name__)


async def create_schedule(
    repo: ScheduleRepository,
    caller: Caller,
    name: str,
    subject_type: str,
    subject_name: str,
) -> Schedule:
    """Any authenticated user may create a schedule; they become its admin."""
    name = name.strip()
    if not name:
        raise BadRequestError("name is required", field="name")
    schedule = await repo.create_schedule(
        name, subject_type.strip(), subject_name.strip(), caller.id,
    )
    logger.info(
        "Schedule created",
        extra={"user_id": caller.id, "schedule_id": schedule.id},
    )
    return schedule


async def list_my_schedules(
    repo: ScheduleRepository, caller: Caller,
) -> list[ScheduleWithRole]:
    return await repo.list_schedules_for_user(caller.id)


async def get_schedule(
    repo: ScheduleRepository, caller: Caller, schedule_id: UUID,
) -> Schedule:
    await require_schedule_member(repo, caller, schedule_id)
    schedule = await repo.get_schedule(schedule_id)
    if schedule is None:
        raise ResourceNotFoundError("Schedule", str(schedule_id))
    return schedule


async def list_members(
    repo: ScheduleRepository, caller: Caller, schedule_id: UUID,
) -> list[tuple[User, ScheduleRole]]:
    await require_schedule_member(repo, caller, schedule_id)
    return await repo.list_schedule_members(schedule_id)


async def add_member(
    repo: ScheduleRepository,
    caller: Caller,
    schedule_id: UUID,
    email: str,
    role: ScheduleRole,
) -> None:
    """Add an existing user, found by email, to the schedule."""
    await require_schedule_admin(repo, caller, schedule_id)
    found = await repo.find_user_by_email(normalize_email(email))
    if found is None:
        raise BadRequestError("user email not found", field="email")
    user, _ = found
    await repo.add_member(schedule_id, user.id, role)
    logger.info(
        f"Member added as {role.value}",
        extra={"user_id": user.id, "schedule_id": schedule_id},
    )


async def set_member_role(
    repo: ScheduleRepository,
    caller: Caller,
    schedule_id: UUID,
    user_id: UUID,
    role: ScheduleRole,
) -> None:
    await require_schedule_admin(repo, caller, schedule_id)
    await repo.set_member_role(schedule_id, user_id, role)
    logger.info(
        f"Member role set to {role.value}",
        extra={"user_id": user_id, "schedule_id": schedule_id},
    )
