"""Access Shell — role lookup around the pure checks in core/enforce_access.py.

Invariants:
    - Superadmins never trigger a membership lookup; their schedule is only checked
      for existence so an unknown id is a 404 instead of a storage failure
    - Everyone else costs exactly one get_schedule_role call
    - Denials are logged at info level with user and schedule ids

Design Decisions:
    - Impureim sandwich: IO here (lookup), decision in core (pure), IO again in the caller
"""

import logging
from uuid import UUID

from app.core.domain_types import ScheduleRole
from app.core.entities import Caller
from app.core.enforce_access import require_admin, require_member_or_admin
from app.core.errors import ForbiddenError, ResourceNotFoundError
from app.core.repository_protocols import ScheduleRepository

logger = logging.getLogger(__name__)


async def lookup_role(
    repo: ScheduleRepository, caller: Caller, schedule_id: UUID,
) -> ScheduleRole | None:
    """Caller's membership role; None for superadmins (they do not need one)."""
    if caller.is_superadmin:
        if await repo.get_schedule(schedule_id) is None:
            raise ResourceNotFoundError("Schedule", str(schedule_id))
        return None
    return await repo.get_schedule_role(schedule_id, caller.id)


async def require_schedule_member(
    repo: ScheduleRepository, caller: Caller, schedule_id: UUID,
) -> ScheduleRole:
    """Require membership (or superadmin); return the effective role."""
    role = await lookup_role(repo, caller, schedule_id)
    try:
        return require_member_or_admin(caller, role)
    except ForbiddenError:
        logger.info(
            "Membership required",
            extra={"user_id": caller.id, "schedule_id": schedule_id},
        )
        raise


async def require_schedule_admin(
    repo: ScheduleRepository, caller: Caller, schedule_id: UUID,
) -> None:
    """Require schedule admin (or superadmin)."""
    role = await lookup_role(repo, caller, schedule_id)
    try:
        require_admin(caller, role)
    except ForbiddenError:
        logger.info(
            "Admin role required",
            extra={"user_id": caller.id, "schedule_id": schedule_id},
        )
        raise
