"""Repository Wiring — builds the configured ScheduleRepository adapter.

Invariants:
    - Exactly one repository per process, created in the FastAPI lifespan
    - Routes obtain it only through get_repository (overridable in tests)

Design Decisions:
    - Module singleton mirrors database.db_manager (ADR: no global import side effects)
"""

import logging

from app.config import Settings
from app.core.repository_protocols import ScheduleRepository
from app.infrastructure.database import init_db
from app.infrastructure.memory_repository import InMemoryScheduleRepository
from app.infrastructure.sql_repository import SqlScheduleRepository

logger = logging.getLogger(__name__)

repository: ScheduleRepository | None = None


def build_repository(settings: Settings) -> ScheduleRepository:
    """Create the adapter named by settings.storage_backend."""
    if settings.storage_backend == "memory":
        logger.info("Using in-memory storage")
        return InMemoryScheduleRepository()
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Using SQL storage")
    return SqlScheduleRepository(manager)


def init_repository(settings: Settings) -> ScheduleRepository:
    global repository
    repository = build_repository(settings)
    return repository


def get_repository() -> ScheduleRepository:
    """FastAPI dependency for the storage port."""
    if repository is None:
        raise RuntimeError("Repository not initialized")
    return repository
