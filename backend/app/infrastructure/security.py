"""Credentials & Tokens — password hashing and bearer-token issuance/verification.

Invariants:
    - Passwords are hashed with argon2 (salted, memory-hard); plaintext is never stored
    - verify_password returns a bool for a well-formed hash; a corrupt stored hash is
      an InternalError, not a failed login
    - Tokens are HS256 JWTs carrying sub (user id), is_superadmin, iat, exp
    - Validity window is fixed at issuance (default 24h)
    - Any decode failure (expired, tampered, malformed, bad sub) is UnauthorizedError

Design Decisions:
    - passlib CryptContext: the hashing scheme can be rotated later via deprecated="auto"
    - PyJWT with an explicit algorithms list: rejects alg=none and algorithm confusion
    - Secret passed in by the caller (from Settings): no config import in this module
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from passlib.context import CryptContext

from app.core.errors import InternalError, UnauthorizedError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
DEFAULT_TOKEN_TTL_HOURS = 24

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


@dataclass(frozen=True)
class TokenClaims:
    user_id: UUID
    is_superadmin: bool
    expires_at: datetime


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash."""
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError) as e:
        logger.error(f"Stored password hash is unreadable: {e}")
        raise InternalError()


def issue_token(
    user_id: UUID,
    is_superadmin: bool,
    secret: str,
    ttl_hours: int = DEFAULT_TOKEN_TTL_HOURS,
) -> str:
    """Issue a signed bearer token for the user."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "is_superadmin": is_superadmin,
        "iat": now,
        "exp": now + timedelta(hours=ttl_hours),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_token(token: str, secret: str) -> TokenClaims:
    """Verify signature and expiry; return the claims."""
    try:
        payload = jwt.decode(
            token, secret, algorithms=[JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
        user_id = UUID(payload["sub"])
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise UnauthorizedError()
    except (ValueError, TypeError):
        raise UnauthorizedError()
    return TokenClaims(
        user_id=user_id,
        is_superadmin=bool(payload.get("is_superadmin", False)),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
