"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, ScheduleId, ShiftId, CommentId, TemplateId wrap UUIDs
    - ScheduleRole is a flat two-value enumeration (compared by equality, never ordered)
    - Period is a classification only; it is never validated against shift times
    - Enum values are the lowercase tags persisted in storage and sent over the wire

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Superadmin is NOT a role value: it lives on the caller as a boolean, keeping
      system-scoped and schedule-scoped privilege apart
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
ScheduleId = NewType("ScheduleId", UUID)
ShiftId = NewType("ShiftId", UUID)
CommentId = NewType("CommentId", UUID)
TemplateId = NewType("TemplateId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class ScheduleRole(str, Enum):
    """Per-schedule membership role — maps to `schedule_member.role`."""
    ADMIN = "admin"
    USER = "user"


class Period(str, Enum):
    """Coarse shift label — maps to `shift.period`."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"
    SLEEP = "sleep"
