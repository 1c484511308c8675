"""Auth Routes — register, login and the current user.

Invariants:
    - register/login are the only unauthenticated /api routes
    - Both answer 200 with {"token": ...}
"""

import logging

from fastapi import APIRouter, Depends

from app.api.dependencies import get_current_user
from app.config import Settings, get_settings
from app.core.entities import User
from app.core.repository_protocols import ScheduleRepository
from app.infrastructure.storage import get_repository
from app.schemas.auth import AuthRequest, TokenResponse, UserResponse
from app.services import accounts

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/auth/register", response_model=TokenResponse)
async def register(
    body: AuthRequest,
    repo: ScheduleRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    """Create an account; the first account ever created is superadmin."""
    token = await accounts.register(repo, settings, body.email, body.password)
    return TokenResponse(token=token)


@router.post("/auth/login", response_model=TokenResponse)
async def login(
    body: AuthRequest,
    repo: ScheduleRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    token = await accounts.login(repo, settings, body.email, body.password)
    return TokenResponse(token=token)


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)):
    return UserResponse.model_validate(user)
