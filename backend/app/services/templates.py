"""Rotation Templates — storing weekly patterns and applying them to a week.

Invariants:
    - Creating and applying templates is admin-only; listing needs membership
    - A template can only be applied through the schedule that owns it
    - Apply inserts one shift per slot, in slot order, as each slot expands:
      a bad slot aborts the rest, shifts already inserted stay (non-atomic)
    - Apply is not idempotent: the same week applied twice creates duplicates

Design Decisions:
    - Definition stored unchecked on create (opaque JSON); shape errors surface on apply
"""

import logging
from datetime import date, datetime
from typing import Any
from uuid import UUID

from app.core.entities import Caller, RotationTemplate, Shift
from app.core.errors import BadRequestError, ForbiddenError, ResourceNotFoundError
from app.core.expand_template import iter_template_shifts, parse_definition
from app.core.repository_protocols import ScheduleRepository
from app.services.access import require_schedule_admin, require_schedule_member

logger = logging.getLogger(__name__)


def parse_week_start(value: str) -> date:
    """YYYY-MM-DD (a Monday is expected but not enforced)."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise BadRequestError("week_start must be YYYY-MM-DD", field="week_start")


async def create_template(
    repo: ScheduleRepository,
    caller: Caller,
    schedule_id: UUID,
    name: str,
    definition: Any,
) -> RotationTemplate:
    await require_schedule_admin(repo, caller, schedule_id)
    name = name.strip()
    if not name:
        raise BadRequestError("name is required", field="name")
    return await repo.create_template(schedule_id, name, definition, caller.id)


async def list_templates(
    repo: ScheduleRepository, caller: Caller, schedule_id: UUID,
) -> list[RotationTemplate]:
    await require_schedule_member(repo, caller, schedule_id)
    return await repo.list_templates(schedule_id)


async def apply_template(
    repo: ScheduleRepository,
    caller: Caller,
    schedule_id: UUID,
    template_id: UUID,
    week_start: str,
) -> list[Shift]:
    """Generate the week's shifts from the template; returns the created shifts."""
    await require_schedule_admin(repo, caller, schedule_id)
    template = await repo.get_template(template_id)
    if template is None:
        raise ResourceNotFoundError("RotationTemplate", str(template_id))
    if template.schedule_id != schedule_id:
        raise ForbiddenError("template belongs to another schedule")

    start_day = parse_week_start(week_start)
    slots = parse_definition(template.definition)

    created: list[Shift] = []
    for spec in iter_template_shifts(slots, start_day, schedule_id, caller.id):
        created.append(await repo.create_shift(spec))

    logger.info(
        f"Template applied for week of {start_day.isoformat()}",
        extra={
            "template_id": template_id, "schedule_id": schedule_id,
            "count": len(created),
        },
    )
    return created
