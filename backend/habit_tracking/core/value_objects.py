"""Value Objects — immutable, self-validating descriptors attached to a habit.

Invariants:
    - Built only through create(): validation happens once, at construction
    - Frozen dataclasses: structural equality, no mutation after create()
    - Cue.id is generated but excluded from equality (compare=False)
    - Schedule dates are stored as aware UTC datetimes

Design Decisions:
    - Classmethod factories over __post_init__ checks: the bare constructor stays
      available to the snapshot mapper, which restores already-validated state
"""

import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime

from habit_tracking.core.day_keys import as_utc
from habit_tracking.core.domain_types import (
    DayOfWeek, FrequencyInterval, TargetType,
)
from habit_tracking.core.errors import (
    InvalidCueError, InvalidFrequencyError, InvalidQuantityError,
    InvalidScheduleError,
)

_DAYS_REQUIRED = frozenset({FrequencyInterval.WEEKLY, FrequencyInterval.CUSTOM})


@dataclass(frozen=True)
class Cue:
    """Trigger that reminds the user to perform the habit."""
    description: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()), compare=False)

    @classmethod
    def create(cls, description: str) -> "Cue":
        text = (description or "").strip()
        if not text:
            raise InvalidCueError()
        return cls(description=text)


@dataclass(frozen=True)
class Frequency:
    interval: FrequencyInterval
    days_of_week: tuple[DayOfWeek, ...] = ()

    @classmethod
    def create(
        cls,
        interval: FrequencyInterval | str,
        days_of_week: list[DayOfWeek | str] | None = None,
    ) -> "Frequency":
        try:
            interval = FrequencyInterval(interval)
        except ValueError:
            raise InvalidFrequencyError(f"Unknown frequency interval: {interval}")
        if interval not in _DAYS_REQUIRED:
            # days are meaningless for daily habits
            return cls(interval=interval)
        if not days_of_week:
            raise InvalidFrequencyError(
                "Days of week must be provided for weekly and custom frequency",
            )
        try:
            days = tuple(dict.fromkeys(DayOfWeek(d) for d in days_of_week))
        except ValueError as e:
            raise InvalidFrequencyError(f"Unknown day of week: {e}")
        return cls(interval=interval, days_of_week=days)


@dataclass(frozen=True)
class Quantity:
    """Numeric target for measured habits."""
    target_amount: float
    unit: str
    target_type: TargetType

    @classmethod
    def create(
        cls, amount: float, unit: str, target_type: TargetType | str,
    ) -> "Quantity":
        if not math.isfinite(amount):
            raise InvalidQuantityError("Target amount must be a finite number")
        if amount <= 0:
            raise InvalidQuantityError("Target amount must be greater than zero")
        try:
            target_type = TargetType(target_type)
        except ValueError:
            raise InvalidQuantityError(f"Unknown target type: {target_type}")
        return cls(target_amount=amount, unit=unit, target_type=target_type)


@dataclass(frozen=True)
class Schedule:
    start_date: datetime
    frequency: Frequency
    end_date: datetime | None = None

    @classmethod
    def create(
        cls,
        start_date: datetime,
        frequency: Frequency,
        end_date: datetime | None = None,
    ) -> "Schedule":
        start = as_utc(start_date)
        end = as_utc(end_date) if end_date is not None else None
        if end is not None and end <= start:
            raise InvalidScheduleError()
        return cls(start_date=start, frequency=frequency, end_date=end)


# ─── Raw construction inputs ─────────────────────────────────────

@dataclass
class ScheduleProps:
    """Unvalidated schedule fields as they arrive from a caller."""
    start_date: datetime
    interval: FrequencyInterval | str
    end_date: datetime | None = None
    days_of_week: list[DayOfWeek | str] | None = None

    def to_schedule(self) -> Schedule:
        frequency = Frequency.create(self.interval, self.days_of_week)
        return Schedule.create(self.start_date, frequency, self.end_date)


@dataclass
class QuantityProps:
    amount: float
    unit: str
    target_type: TargetType | str

    def to_quantity(self) -> Quantity:
        return Quantity.create(self.amount, self.unit, self.target_type)
