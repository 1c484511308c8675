"""User ORM — registered account with an opaque credential hash.

Invariants:
    - email is unique (storage-enforced; duplicates surface as ConflictError)
    - password_hash never leaves the infrastructure layer except through
      find_user_by_email, which exists for login
    - is_superadmin is decided once at registration

Design Decisions:
    - Table named app_user: `user` is reserved in PostgreSQL
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class UserModel(Base):
    """Account row."""
    __tablename__ = "app_user"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    is_superadmin: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
