"""Request Dependencies — bearer-token authentication for protected routes.

Invariants:
    - A missing, malformed or expired token is always 401 (UnauthorizedError)
    - The caller is resolved from storage on every request (see services/accounts.py)
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import Settings, get_settings
from app.core.entities import Caller, User
from app.core.errors import UnauthorizedError
from app.core.repository_protocols import ScheduleRepository
from app.infrastructure.storage import get_repository
from app.services import accounts

# auto_error=False: absent credentials go through UnauthorizedError, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return credentials.credentials


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    repo: ScheduleRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
) -> User:
    return await accounts.resolve_user(repo, settings, _bearer_token(credentials))


async def get_current_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    repo: ScheduleRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
) -> Caller:
    return await accounts.resolve_caller(repo, settings, _bearer_token(credentials))
