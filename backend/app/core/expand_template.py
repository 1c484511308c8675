"""Template Expansion — turns a weekly slot definition into dated shift specs.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Definition shape is validated up front; a shape error rejects the whole template
    - Slots are expanded in definition order; the first bad slot raises BadRequestError
    - Date = week_start + dow days (0 = Monday); clock times are UTC wall-clock
    - Overnight rule: end <= start moves end forward by exactly one day, once
    - Expansion never deduplicates: the same week expanded twice yields the same specs twice

Design Decisions:
    - iter_template_shifts is a generator: the apply use case inserts each shift
      before the next slot is validated, so shifts from earlier slots stay committed
      when a later slot fails (non-atomic apply)
    - week_start is not forced to be a Monday: alignment is the caller's job
    - Pydantic for the shape only; range and format checks run per slot so the
      error names the slot field that failed
    - Strict slot types: "5", 5.0 or true are not a dow, so stored JSON is never coerced
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Iterator
from uuid import UUID

from pydantic import BaseModel, StrictInt, StrictStr, ValidationError

from app.core.domain_types import Period
from app.core.entities import ShiftSpec
from app.core.errors import BadRequestError

DAYS_PER_WEEK = 7
CLOCK_FORMAT = "%H:%M"


class TemplateSlot(BaseModel):
    """One weekly slot. dow: 0=Mon..6=Sun, start/end: HH:MM (24h)."""
    dow: StrictInt
    period: Period
    start: StrictStr
    end: StrictStr


class TemplateDefinition(BaseModel):
    slots: list[TemplateSlot]


def parse_definition(definition: Any) -> list[TemplateSlot]:
    """Validate the stored definition shape and return its slots."""
    try:
        return TemplateDefinition.model_validate(definition).slots
    except ValidationError:
        raise BadRequestError("invalid template definition", field="definition")


def parse_clock(value: str, field: str) -> time:
    """Parse HH:MM into a time."""
    try:
        return datetime.strptime(value, CLOCK_FORMAT).time()
    except ValueError:
        raise BadRequestError(f"{field} must be HH:MM", field=field)


def expand_slot(
    slot: TemplateSlot, week_start: date, schedule_id: UUID, created_by: UUID,
) -> ShiftSpec:
    """Place one slot on its calendar day within the target week."""
    if not 0 <= slot.dow < DAYS_PER_WEEK:
        raise BadRequestError("slot.dow must be 0..6", field="slot.dow")
    start_clock = parse_clock(slot.start, "slot.start")
    end_clock = parse_clock(slot.end, "slot.end")

    try:
        day = week_start + timedelta(days=slot.dow)
        starts_at = datetime.combine(day, start_clock, tzinfo=timezone.utc)
        ends_at = datetime.combine(day, end_clock, tzinfo=timezone.utc)
        if ends_at <= starts_at:
            ends_at += timedelta(days=1)
    except OverflowError:
        raise BadRequestError("invalid date", field="week_start")

    return ShiftSpec(
        schedule_id=schedule_id,
        starts_at=starts_at,
        ends_at=ends_at,
        period=slot.period,
        created_by=created_by,
    )


def iter_template_shifts(
    slots: list[TemplateSlot], week_start: date, schedule_id: UUID, created_by: UUID,
) -> Iterator[ShiftSpec]:
    """Yield one spec per slot, validating each slot only when it is reached."""
    for slot in slots:
        yield expand_slot(slot, week_start, schedule_id, created_by)


def expand_template(
    definition: Any, week_start: date, schedule_id: UUID, created_by: UUID,
) -> list[ShiftSpec]:
    """Expand a whole definition; raises before returning anything if any slot is bad."""
    slots = parse_definition(definition)
    return list(iter_template_shifts(slots, week_start, schedule_id, created_by))
