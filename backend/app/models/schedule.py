"""Schedule ORM — a named rotation for one subject (person, family, pet...).

Invariants:
    - created_by references an existing user (restrict on delete)
    - Always created together with the creator's admin ScheduleMemberModel row

Design Decisions:
    - subject_type/subject_name are free text: no taxonomy of subjects is enforced
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class ScheduleModel(Base):
    """Schedule aggregate root — owns members, shifts and templates."""
    __tablename__ = "schedule"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    subject_type: Mapped[str] = mapped_column(Text, nullable=False)
    subject_name: Mapped[str] = mapped_column(Text, nullable=False)
    created_by: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("app_user.id", ondelete="RESTRICT"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
