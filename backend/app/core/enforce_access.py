"""Access Enforcement — pure authorization checks for schedule-scoped operations.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Input is the caller plus the caller's membership role (None = not a member);
      superadmin callers never need the role
    - Violations raise ForbiddenError; success returns the effective value
    - Roles compare by equality (ADMIN vs USER); superadmin is never a role

Design Decisions:
    - Pure functions over a policy object: testable without mocks or storage
    - Raise (not return error dicts): services propagate errors straight to the
      global handler, so there is no tool-result envelope to keep uniform
"""

from uuid import UUID

from app.core.domain_types import ScheduleRole
from app.core.entities import Caller, Shift
from app.core.errors import ForbiddenError, ErrorContext


def require_member_or_admin(
    caller: Caller, role: ScheduleRole | None,
) -> ScheduleRole:
    """Superadmins act as ADMIN; everyone else needs a membership row."""
    if caller.is_superadmin:
        return ScheduleRole.ADMIN
    if role is None:
        raise ForbiddenError(
            "not a member of this schedule",
            ErrorContext(user_id=str(caller.id)),
        )
    return role


def require_admin(caller: Caller, role: ScheduleRole | None) -> None:
    """Superadmins pass unconditionally; otherwise the role must be ADMIN."""
    if caller.is_superadmin:
        return
    if role != ScheduleRole.ADMIN:
        raise ForbiddenError(
            "schedule admin role required",
            ErrorContext(user_id=str(caller.id)),
        )


def is_elevated(caller: Caller, role: ScheduleRole | None) -> bool:
    """True for superadmins and schedule admins."""
    return caller.is_superadmin or role == ScheduleRole.ADMIN


def check_assign_target(
    caller: Caller, role: ScheduleRole | None, target_user_id: UUID | None,
) -> UUID:
    """Resolve who a shift is assigned to.

    The target defaults to the caller. Members may always take a shift
    themselves; handing it to someone else needs admin or superadmin.
    """
    target = target_user_id if target_user_id is not None else caller.id
    if target != caller.id and not is_elevated(caller, role):
        raise ForbiddenError(
            "only admins can assign shifts to other users",
            ErrorContext(user_id=str(caller.id)),
        )
    return target


def check_can_comment(
    caller: Caller, role: ScheduleRole | None, shift: Shift,
) -> None:
    """Comments are limited to admins, superadmins and the shift's assignee."""
    if is_elevated(caller, role):
        return
    if shift.assigned_user_id != caller.id:
        raise ForbiddenError(
            "only the assigned user or an admin can comment on this shift",
            ErrorContext(user_id=str(caller.id), schedule_id=str(shift.schedule_id)),
        )
