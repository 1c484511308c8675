"""Accounts — registration, login and bearer-token caller resolution.

Invariants:
    - Emails are trimmed and lowercased before storage or lookup
    - Passwords shorter than settings.password_min_length are rejected
    - The first registered user becomes superadmin (count-based, decided once)
    - Login failures never reveal whether the email exists
    - resolve_caller re-reads the user on every request: a deleted user is
      unauthorized and the privilege flag comes from storage, not the token

Design Decisions:
    - The superadmin count check and the insert are two calls: two simultaneous
      first registrations can both see zero users (accepted)
"""

import logging

from app.config import Settings
from app.core.entities import Caller, User
from app.core.errors import BadRequestError, UnauthorizedError
from app.core.repository_protocols import ScheduleRepository
from app.infrastructure.security import (
    decode_token, hash_password, issue_token, verify_password,
)

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def register(
    repo: ScheduleRepository, settings: Settings, email: str, password: str,
) -> str:
    """Create an account and return a token for it."""
    email = normalize_email(email)
    if not email or len(password) < settings.password_min_length:
        raise BadRequestError(
            f"email must be set and password must be >= {settings.password_min_length} chars",
        )
    is_superadmin = await repo.count_users() == 0
    user = await repo.create_user(email, hash_password(password), is_superadmin)
    logger.info(
        f"User registered (superadmin={user.is_superadmin})",
        extra={"user_id": user.id},
    )
    return issue_token(user.id, user.is_superadmin, settings.jwt_secret, settings.jwt_ttl_hours)


async def login(
    repo: ScheduleRepository, settings: Settings, email: str, password: str,
) -> str:
    """Check credentials and return a fresh token."""
    found = await repo.find_user_by_email(normalize_email(email))
    if found is None:
        raise UnauthorizedError("invalid credentials")
    user, password_hash = found
    if not verify_password(password, password_hash):
        raise UnauthorizedError("invalid credentials")
    return issue_token(user.id, user.is_superadmin, settings.jwt_secret, settings.jwt_ttl_hours)


async def resolve_user(
    repo: ScheduleRepository, settings: Settings, token: str,
) -> User:
    claims = decode_token(token, settings.jwt_secret)
    user = await repo.get_user(claims.user_id)
    if user is None:
        raise UnauthorizedError()
    return user


async def resolve_caller(
    repo: ScheduleRepository, settings: Settings, token: str,
) -> Caller:
    """Turn a bearer token into the caller identity for this request."""
    user = await resolve_user(repo, settings, token)
    return Caller(id=user.id, is_superadmin=user.is_superadmin)
