"""Schedule Schemas — schedules, memberships and roles."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.core.domain_types import ScheduleRole
from app.schemas.auth import UserResponse


class ScheduleCreate(BaseModel):
    name: str
    subject_type: str
    subject_name: str


class ScheduleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    subject_type: str
    subject_name: str
    created_by: UUID
    created_at: datetime


class ScheduleWithRoleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    schedule: ScheduleResponse
    role: ScheduleRole


class MemberAdd(BaseModel):
    email: str
    role: ScheduleRole


class RoleUpdate(BaseModel):
    role: ScheduleRole


class MemberResponse(BaseModel):
    user: UserResponse
    role: ScheduleRole
