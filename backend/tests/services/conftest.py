"""Service test fixtures — FastAPI test client over a fresh repository.

Invariants:
    - Every test gets a fresh InMemoryScheduleRepository (sql_client: fresh SQLite)
    - get_repository dependency overridden; the lifespan is not run
    - The first account registered is the superadmin, so fixtures register it
      explicitly before any regular user

Design Decisions:
    - In-memory adapter by default: route tests exercise HTTP and access rules;
      adapter parity is covered by tests/infrastructure
"""

from contextlib import asynccontextmanager

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.db.base import Base
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.memory_repository import InMemoryScheduleRepository
from app.infrastructure.sql_repository import SqlScheduleRepository
from app.infrastructure.storage import get_repository
from app.main import app
from tests.services.route_helpers import add_member, create_schedule, register


@asynccontextmanager
async def _client_for(repo):
    app.dependency_overrides[get_repository] = lambda: repo
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test",
        ) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def client():
    """FastAPI test client backed by the in-memory repository."""
    async with _client_for(InMemoryScheduleRepository()) as c:
        yield c


@pytest.fixture
async def sql_client():
    """FastAPI test client backed by the SQL repository on in-memory SQLite."""
    manager = DatabaseSessionManager(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with _client_for(SqlScheduleRepository(manager)) as c:
        yield c
    await manager.dispose()


# ─── Accounts ────────────────────────────────────────────────────

@pytest.fixture
async def superadmin(client):
    return await register(client, "root@example.com")


@pytest.fixture
async def alice(client, superadmin):
    """Regular user who owns (administers) the schedules in these tests."""
    return await register(client, "alice@example.com")


@pytest.fixture
async def bob(client, superadmin):
    """Regular user, added as a plain member where needed."""
    return await register(client, "bob@example.com")


@pytest.fixture
async def carol(client, superadmin):
    """Regular user who never joins anything."""
    return await register(client, "carol@example.com")


@pytest.fixture
async def schedule(client, alice, bob):
    """Alice's schedule with Bob as a plain member."""
    created = await create_schedule(client, alice)
    await add_member(client, alice, created["id"], "bob@example.com")
    return created
