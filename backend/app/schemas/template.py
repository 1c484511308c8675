"""Template Schemas — rotation templates and their application.

Invariants:
    - definition is accepted as any JSON value; its shape is checked on apply
    - week_start is a string so the YYYY-MM-DD check and message live in one place
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class TemplateCreate(BaseModel):
    name: str
    definition: Any


class TemplateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    schedule_id: UUID
    name: str
    definition: Any
    created_by: UUID
    created_at: datetime


class ApplyTemplateRequest(BaseModel):
    week_start: str
