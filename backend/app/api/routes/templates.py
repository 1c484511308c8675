"""Template Routes — rotation templates and applying them to a week.

Invariants:
    - apply answers 201 with the shifts it created, in slot order
    - A failing slot answers with that slot's error; earlier shifts stay created
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_current_caller
from app.core.entities import Caller
from app.core.repository_protocols import ScheduleRepository
from app.infrastructure.storage import get_repository
from app.schemas.shift import ShiftResponse
from app.schemas.template import (
    ApplyTemplateRequest, TemplateCreate, TemplateResponse,
)
from app.services import templates

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/schedules", tags=["templates"])


@router.get("/{schedule_id}/templates", response_model=list[TemplateResponse])
async def list_templates(
    schedule_id: UUID,
    caller: Caller = Depends(get_current_caller),
    repo: ScheduleRepository = Depends(get_repository),
):
    items = await templates.list_templates(repo, caller, schedule_id)
    return [TemplateResponse.model_validate(t) for t in items]


@router.post(
    "/{schedule_id}/templates",
    response_model=TemplateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_template(
    schedule_id: UUID,
    body: TemplateCreate,
    caller: Caller = Depends(get_current_caller),
    repo: ScheduleRepository = Depends(get_repository),
):
    template = await templates.create_template(
        repo, caller, schedule_id, body.name, body.definition,
    )
    return TemplateResponse.model_validate(template)


@router.post(
    "/{schedule_id}/templates/{template_id}/apply",
    response_model=list[ShiftResponse],
    status_code=status.HTTP_201_CREATED,
)
async def apply_template(
    schedule_id: UUID,
    template_id: UUID,
    body: ApplyTemplateRequest,
    caller: Caller = Depends(get_current_caller),
    repo: ScheduleRepository = Depends(get_repository),
):
    created = await templates.apply_template(
        repo, caller, schedule_id, template_id, body.week_start,
    )
    return [ShiftResponse.model_validate(s) for s in created]
