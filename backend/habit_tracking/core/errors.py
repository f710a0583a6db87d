"""Error Hierarchy — typed, categorized exceptions for all habit-tracking failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors are raised at construction; state and conflict errors at mutation
    - Nothing is retried: the core performs no IO, so every failure is final
    - to_response() produces the REST envelope used by the API error handlers

Design Decisions:
    - Single hierarchy with HabitTrackingError base: one FastAPI handler catches all
    - Intermediate classes (HabitValidationError, HabitStateError) let callers catch
      a whole condition family without enumerating concrete errors
    - ErrorContext as dataclass: rich observability without coupling to logging
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
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    habit_id: str | None = None
    day_key: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class HabitTrackingError(Exception):
    """Base exception for all habit-tracking errors."""

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
                    "habit_id": self.context.habit_id,
                    "day_key": self.context.day_key,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Validation Errors (raised at construction) ─────────────────

class HabitValidationError(HabitTrackingError):
    """Habit or value-object input failed validation."""
    def __init__(
        self,
        message: str,
        field: str,
        code: str = "VALIDATION_ERROR",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class EmptyNameError(HabitValidationError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Habit name cannot be empty", "name", "EMPTY_NAME", context,
        )


class MissingScheduleError(HabitValidationError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Habit must have a schedule", "schedule", "MISSING_SCHEDULE", context,
        )


class InvalidCueError(HabitValidationError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Cue description cannot be empty", "cue", "INVALID_CUE", context,
        )


class InvalidFrequencyError(HabitValidationError):
    """Weekly/custom frequency without days of week."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "schedule.days_of_week", "INVALID_FREQUENCY", context,
        )


class InvalidQuantityError(HabitValidationError):
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "quantity", "INVALID_QUANTITY", context,
        )


class InvalidScheduleError(HabitValidationError):
    """End date not strictly after start date."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "End date must be after start date", "schedule.end_date",
            "INVALID_SCHEDULE", context,
        )


class NegativeProgressError(HabitValidationError):
    def __init__(self, value: float, context: ErrorContext | None = None):
        super().__init__(
            f"Progress value cannot be negative (got {value})", "value",
            "NEGATIVE_PROGRESS", context,
        )
        self.value = value


class NonFiniteProgressError(HabitValidationError):
    def __init__(self, value: float, context: ErrorContext | None = None):
        super().__init__(
            f"Progress value must be a finite number (got {value})", "value",
            "NON_FINITE_PROGRESS", context,
        )
        self.value = value


# ─── State Errors (lifecycle gates) ─────────────────────────────

class HabitStateError(HabitTrackingError):
    """Operation disallowed in the habit's current lifecycle state."""
    def __init__(
        self, message: str, code: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )


class CannotActivateArchivedError(HabitStateError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Cannot activate an archived habit. Unarchive it first.",
            "CANNOT_ACTIVATE_ARCHIVED", context,
        )


class CannotDeactivateArchivedError(HabitStateError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Cannot deactivate an archived habit",
            "CANNOT_DEACTIVATE_ARCHIVED", context,
        )


class NotArchivedError(HabitStateError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Only archived habits can be unarchived", "NOT_ARCHIVED", context,
        )


class ArchivedHabitError(HabitStateError):
    """Day record write attempted on an archived habit."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot {operation} for an archived habit",
            "HABIT_ARCHIVED", context,
        )


class InactiveHabitError(HabitStateError):
    """Day record write attempted on an inactive habit."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot {operation} for an inactive habit",
            "HABIT_INACTIVE", context,
        )


# ─── Conflict / Unsupported ─────────────────────────────────────

class DuplicateDayRecordError(HabitTrackingError):
    """Binary habits accept exactly one status per day."""
    def __init__(self, day_key: str, context: ErrorContext | None = None):
        super().__init__(
            f"Status for {day_key} already recorded. "
            "Habits can only be marked once per day.",
            "DUPLICATE_DAY_RECORD", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.day_key = day_key


class UnsupportedOperationError(HabitTrackingError):
    """Operation not available for this habit kind."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNSUPPORTED_OPERATION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 422,
        )


# ─── Persistence / Infrastructure Errors ────────────────────────

class ResourceNotFoundError(HabitTrackingError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class HabitAlreadyExistsError(HabitTrackingError):
    """save() called for an identifier that is already stored."""
    def __init__(self, habit_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Habit with id {habit_id} already exists",
            "HABIT_ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class DatabaseError(HabitTrackingError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
