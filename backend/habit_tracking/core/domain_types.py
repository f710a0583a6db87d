"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - HabitId wraps a UUID string — assigned once at creation, never reassigned
    - DayKey is always YYYY-MM-DD (UTC calendar date)
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

HabitId = NewType("HabitId", str)
DayKey = NewType("DayKey", str)


# ─── Enums ───────────────────────────────────────────────────────

class HabitKind(str, Enum):
    """Closed set of habit variants — the tag of the habit union."""
    COMPLETION = "completion"
    MEASURED = "measured"


class HabitStatus(str, Enum):
    """Lifecycle states — maps to DB `status` column."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class CompletionStatus(str, Enum):
    """Per-day outcome. PENDING is read-only: it is never stored."""
    COMPLETED = "completed"
    MISSED = "missed"
    SKIPPED = "skipped"
    PENDING = "pending"
    COMMITTED = "committed"


class FrequencyInterval(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"


class DayOfWeek(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


class TargetType(str, Enum):
    """goal: reaching the target is success. limit: staying under it is."""
    GOAL = "goal"
    LIMIT = "limit"
