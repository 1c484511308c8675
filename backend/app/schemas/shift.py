"""Shift Schemas — shifts, assignment and comments.

Invariants:
    - Shift instants must carry an offset (RFC 3339); naive datetimes are rejected
    - assigned_user_id omitted or null means "assign to me"
"""

from datetime import datetime
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict

from app.core.domain_types import Period


class ShiftCreate(BaseModel):
    starts_at: AwareDatetime
    ends_at: AwareDatetime
    period: Period


class ShiftResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    schedule_id: UUID
    starts_at: datetime
    ends_at: datetime
    period: Period
    assigned_user_id: UUID | None
    created_by: UUID
    created_at: datetime


class AssignShiftRequest(BaseModel):
    assigned_user_id: UUID | None = None


class CommentCreate(BaseModel):
    body: str


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    shift_id: UUID
    user_id: UUID
    body: str
    created_at: datetime
