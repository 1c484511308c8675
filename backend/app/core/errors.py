"""Error Hierarchy — typed, categorized exceptions for all Buddy Schedule failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Six kinds only: unauthorized, forbidden, not found, bad request, conflict, internal
    - Client errors (4xx) are recoverable; internal errors (500) are critical
    - No storage or crypto detail in user-facing messages

Design Decisions:
    - Single hierarchy with BuddyScheduleError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - Core and adapters raise these directly; only api/error_handlers.py knows HTTP
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    schedule_id: str | None = None
    debug_info: dict[str, Any] | None = None


class BuddyScheduleError(Exception):
    """Base exception for all Buddy Schedule errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "schedule_id": self.context.schedule_id,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class UnauthorizedError(BuddyScheduleError):
    """Missing, invalid or expired credential, or the identity no longer exists."""
    def __init__(self, message: str = "unauthorized", context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(BuddyScheduleError):
    """Authenticated, but lacking the membership or role the operation needs."""
    def __init__(self, message: str = "forbidden", context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(BuddyScheduleError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class BadRequestError(BuddyScheduleError):
    """Malformed input: empty field, bad date/time, bad template definition."""
    def __init__(
        self, message: str, field: str | None = None, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "BAD_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ConflictError(BuddyScheduleError):
    """Uniqueness violation: duplicate email or duplicate membership."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Internal Errors (500-level) ────────────────────────────────

class InternalError(BuddyScheduleError):
    """Unclassified failure. The message is always opaque."""
    def __init__(
        self,
        category: ErrorCategory = ErrorCategory.INTERNAL,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            "internal error", "INTERNAL_ERROR", category,
            ErrorSeverity.CRITICAL, context, 500,
        )


class DatabaseError(InternalError):
    """Storage operation failed. `operation` is for logs, never for clients."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(ErrorCategory.DATABASE, context)
        self.operation = operation
