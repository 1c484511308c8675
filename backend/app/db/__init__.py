"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - All ORM models share db/base.Base metadata

Design Decisions:
    - asyncpg driver for PostgreSQL in production, aiosqlite in tests
"""
