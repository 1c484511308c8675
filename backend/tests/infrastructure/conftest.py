"""Infrastructure test fixtures — one repository fixture, both adapters.

Invariants:
    - Every repository test runs against the in-memory adapter AND the SQL adapter
    - The SQL adapter uses a fresh in-memory SQLite database per test, with
      foreign keys enforced by DatabaseSessionManager

Design Decisions:
    - StaticPool: an in-memory SQLite database lives only as long as its single
      connection, so every session must share it
"""

import pytest
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.db.base import Base
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.memory_repository import InMemoryScheduleRepository
from app.infrastructure.sql_repository import SqlScheduleRepository


async def make_sqlite_manager() -> DatabaseSessionManager:
    manager = DatabaseSessionManager(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return manager


@pytest.fixture
async def sql_manager():
    manager = await make_sqlite_manager()
    yield manager
    await manager.dispose()


@pytest.fixture(params=["memory", "sql"])
async def repo(request):
    """A ScheduleRepository; tests using it run once per adapter."""
    if request.param == "memory":
        yield InMemoryScheduleRepository()
        return
    manager = await make_sqlite_manager()
    yield SqlScheduleRepository(manager)
    await manager.dispose()
