"""Shift Routes — shifts in a schedule, assignment and comments.

Invariants:
    - from/to window bounds are RFC 3339 instants with an explicit offset;
      anything else is a 400 naming the bad parameter
    - Assign accepts an empty body (assign to self)
"""

import logging
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.dependencies import get_current_caller
from app.core.entities import Caller
from app.core.errors import BadRequestError
from app.core.repository_protocols import ScheduleRepository
from app.infrastructure.storage import get_repository
from app.schemas.shift import (
    AssignShiftRequest, CommentCreate, CommentResponse, ShiftCreate,
    ShiftResponse,
)
from app.services import shifts

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["shifts"])


def parse_instant(value: str, name: str) -> datetime:
    """RFC 3339 timestamp; a missing offset is rejected."""
    message = f"invalid {name} (RFC3339 required)"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise BadRequestError(message, field=name)
    if parsed.tzinfo is None:
        raise BadRequestError(message, field=name)
    return parsed


@router.get(
    "/schedules/{schedule_id}/shifts", response_model=list[ShiftResponse],
)
async def list_shifts(
    schedule_id: UUID,
    from_: str = Query(alias="from"),
    to: str = Query(),
    caller: Caller = Depends(get_current_caller),
    repo: ScheduleRepository = Depends(get_repository),
):
    """Shifts starting in [from, to), ordered by start time."""
    start = parse_instant(from_, "from")
    end = parse_instant(to, "to")
    items = await shifts.list_shifts(repo, caller, schedule_id, start, end)
    return [ShiftResponse.model_validate(s) for s in items]


@router.post(
    "/schedules/{schedule_id}/shifts",
    response_model=ShiftResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_shift(
    schedule_id: UUID,
    body: ShiftCreate,
    caller: Caller = Depends(get_current_caller),
    repo: ScheduleRepository = Depends(get_repository),
):
    shift = await shifts.create_shift(
        repo, caller, schedule_id, body.starts_at, body.ends_at, body.period,
    )
    return ShiftResponse.model_validate(shift)


@router.get("/shifts/{shift_id}", response_model=ShiftResponse)
async def get_shift(
    shift_id: UUID,
    caller: Caller = Depends(get_current_caller),
    repo: ScheduleRepository = Depends(get_repository),
):
    shift = await shifts.get_shift(repo, caller, shift_id)
    return ShiftResponse.model_validate(shift)


@router.post("/shifts/{shift_id}/assign", status_code=status.HTTP_204_NO_CONTENT)
async def assign_shift(
    shift_id: UUID,
    body: AssignShiftRequest | None = None,
    caller: Caller = Depends(get_current_caller),
    repo: ScheduleRepository = Depends(get_repository),
):
    """Assign to self, or (admins only) to another user."""
    target = body.assigned_user_id if body else None
    await shifts.assign_shift(repo, caller, shift_id, target)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ─── Comments ───────────────────────────────────────────────────

@router.get(
    "/shifts/{shift_id}/comments", response_model=list[CommentResponse],
)
async def list_comments(
    shift_id: UUID,
    caller: Caller = Depends(get_current_caller),
    repo: ScheduleRepository = Depends(get_repository),
):
    items = await shifts.list_comments(repo, caller, shift_id)
    return [CommentResponse.model_validate(c) for c in items]


@router.post(
    "/shifts/{shift_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    shift_id: UUID,
    body: CommentCreate,
    caller: Caller = Depends(get_current_caller),
    repo: ScheduleRepository = Depends(get_repository),
):
    comment = await shifts.add_comment(repo, caller, shift_id, body.body)
    return CommentResponse.model_validate(comment)
