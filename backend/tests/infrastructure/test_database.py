"""Database Session Manager — error mapping, uniqueness detection and health.

Tests cover:
    - is_unique_violation recognizes PostgreSQL sqlstate and SQLite messages
    - Other integrity failures are not uniqueness violations
    - SQLAlchemy failures inside session() surface as DatabaseError
    - health_check reports a reachable database
"""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from app.core.errors import DatabaseError
from app.infrastructure.database import is_unique_violation


class _PgError(Exception):
    sqlstate = "23505"


class _PgForeignKeyError(Exception):
    sqlstate = "23503"


def _integrity(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, orig)


def test_postgres_unique_violation_detected():
    assert is_unique_violation(_integrity(_PgError("duplicate key")))


def test_wrapped_postgres_unique_violation_detected():
    outer = Exception("wrapped")
    outer.__cause__ = _PgError("duplicate key")
    assert is_unique_violation(_integrity(outer))


def test_sqlite_unique_violation_detected():
    orig = Exception("UNIQUE constraint failed: app_user.email")
    assert is_unique_violation(_integrity(orig))


def test_foreign_key_failure_is_not_unique_violation():
    assert not is_unique_violation(_integrity(_PgForeignKeyError("fk")))
    assert not is_unique_violation(_integrity(Exception("FOREIGN KEY constraint failed")))


async def test_session_maps_sqlalchemy_errors(sql_manager):
    with pytest.raises(DatabaseError):
        async with sql_manager.session() as db:
            await db.execute(text("SELECT * FROM no_such_table"))


async def test_health_check(sql_manager):
    assert await sql_manager.health_check() is True
