"""Auth Schemas — credentials in, token and user profile out.

Invariants:
    - Credentials are passed through untouched; normalization and length rules
      live in services/accounts.py so every entry point shares them
    - UserResponse never carries the password hash
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuthRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    token: str


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    is_superadmin: bool
    created_at: datetime
