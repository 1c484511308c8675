"""Shift ORM — a time-bounded slot in a schedule, optionally assigned.

Invariants:
    - period is the lowercase Period tag; not validated against the times
    - assigned_user_id is nulled if the user is deleted
    - ends_at > starts_at (check constraint shift_time_ok)
    - No overlap constraint between shifts of the same schedule

Design Decisions:
    - Composite index (schedule_id, starts_at, ends_at): list_shifts filters by
      schedule and start window
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class ShiftModel(Base):
    __tablename__ = "shift"
    __table_args__ = (
        Index("idx_shift_schedule_time", "schedule_id", "starts_at", "ends_at"),
        CheckConstraint("ends_at > starts_at", name="shift_time_ok"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    schedule_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("schedule.id", ondelete="CASCADE"), nullable=False,
    )
    starts_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    ends_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    period: Mapped[str] = mapped_column(Text, nullable=False)
    assigned_user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True,
    )
    created_by: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("app_user.id", ondelete="RESTRICT"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
