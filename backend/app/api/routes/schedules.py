"""Schedule Routes — schedules and their memberships.

Invariants:
    - Every route requires a bearer token (get_current_caller)
    - Routes never decide access themselves; services/ does, via enforce_access
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_current_caller
from app.core.entities import Caller
from app.core.repository_protocols import ScheduleRepository
from app.infrastructure.storage import get_repository
from app.schemas.auth import UserResponse
from app.schemas.schedule import (
    MemberAdd, MemberResponse, RoleUpdate, ScheduleCreate, ScheduleResponse,
    ScheduleWithRoleResponse,
)
from app.services import schedules

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/schedules", tags=["schedules"])


@router.get("", response_model=list[ScheduleWithRoleResponse])
async def list_schedules(
    caller: Caller = Depends(get_current_caller),
    repo: ScheduleRepository = Depends(get_repository),
):
    """Schedules the caller belongs to, newest first, with the caller's role."""
    items = await schedules.list_my_schedules(repo, caller)
    return [ScheduleWithRoleResponse.model_validate(item) for item in items]


@router.post(
    "", response_model=ScheduleResponse, status_code=status.HTTP_201_CREATED,
)
async def create_schedule(
    body: ScheduleCreate,
    caller: Caller = Depends(get_current_caller),
    repo: ScheduleRepository = Depends(get_repository),
):
    schedule = await schedules.create_schedule(
        repo, caller, body.name, body.subject_type, body.subject_name,
    )
    return ScheduleResponse.model_validate(schedule)


@router.get("/{schedule_id}", response_model=ScheduleResponse)
async def get_schedule(
    schedule_id: UUID,
    caller: Caller = Depends(get_current_caller),
    repo: ScheduleRepository = Depends(get_repository),
):
    schedule = await schedules.get_schedule(repo, caller, schedule_id)
    return ScheduleResponse.model_validate(schedule)


# ─── Members ────────────────────────────────────────────────────

@router.get("/{schedule_id}/members", response_model=list[MemberResponse])
async def list_members(
    schedule_id: UUID,
    caller: Caller = Depends(get_current_caller),
    repo: ScheduleRepository = Depends(get_repository),
):
    members = await schedules.list_members(repo, caller, schedule_id)
    return [
        MemberResponse(user=UserResponse.model_validate(user), role=role)
        for user, role in members
    ]


@router.post("/{schedule_id}/members", status_code=status.HTTP_204_NO_CONTENT)
async def add_member(
    schedule_id: UUID,
    body: MemberAdd,
    caller: Caller = Depends(get_current_caller),
    repo: ScheduleRepository = Depends(get_repository),
):
    """Add an already registered user (by email) to the schedule."""
    await schedules.add_member(repo, caller, schedule_id, body.email, body.role)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{schedule_id}/members/{user_id}/role",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def set_member_role(
    schedule_id: UUID,
    user_id: UUID,
    body: RoleUpdate,
    caller: Caller = Depends(get_current_caller),
    repo: ScheduleRepository = Depends(get_repository),
):
    await schedules.set_member_role(repo, caller, schedule_id, user_id, body.role)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
