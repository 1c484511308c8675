"""SQLAlchemy Declarative Base — shared base class for the Buddy Schedule tables.

Invariants:
    - All six models (models/) inherit from Base
    - Base.metadata is what alembic/env.py and the SQLite test fixtures build from

Design Decisions:
    - Separate file for Base: models import it without importing each other
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all Buddy Schedule ORM models."""
    pass
