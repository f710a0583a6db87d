"""Quantity Habit — measured habits whose daily status is derived from progress.

Invariants:
    - Progress values are finite and never negative
    - A day's status is recomputed after every progress write, never asserted
    - No progress recorded for a day -> status untouched (reads as pending)
    - goal:  progress >= target -> completed, else committed
    - limit: progress >= target -> missed,    else completed
    - mark_completed / mark_missed always fail: completion is derived

Design Decisions:
    - Recompute on every write (no sticky completed): lowering progress with
      set_progress may move a goal day from completed back to committed
    - derive_completion_status is a pure function so it can be tested in isolation
"""

import math
from datetime import date, datetime

from habit_tracking.core.day_keys import to_day_key
from habit_tracking.core.domain_types import (
    CompletionStatus, DayKey, HabitKind, TargetType,
)
from habit_tracking.core.errors import (
    EmptyNameError, ErrorContext, MissingScheduleError, NegativeProgressError,
    NonFiniteProgressError, UnsupportedOperationError,
)
from habit_tracking.core.habit import Habit
from habit_tracking.core.value_objects import Cue, Quantity, QuantityProps, ScheduleProps

_DERIVED_ONLY = (
    "Measured habits cannot be marked as {}. Progress is determined "
    "automatically based on goal achievement."
)


def create_quantity_habit(
    name: str,
    description: str,
    quantity: QuantityProps,
    schedule: ScheduleProps | None,
    cue: str | None = None,
) -> Habit:
    """Validating factory. Fails before any entity exists."""
    if not (name or "").strip():
        raise EmptyNameError()
    if schedule is None:
        raise MissingScheduleError()
    return Habit(
        name=name,
        description=description,
        kind=HabitKind.MEASURED,
        schedule=schedule.to_schedule(),
        cue=Cue.create(cue) if cue is not None else None,
        quantity=quantity.to_quantity(),
    )


def derive_completion_status(progress: float, quantity: Quantity) -> CompletionStatus:
    reached = progress >= quantity.target_amount
    if quantity.target_type == TargetType.GOAL:
        return CompletionStatus.COMPLETED if reached else CompletionStatus.COMMITTED
    return CompletionStatus.MISSED if reached else CompletionStatus.COMPLETED


def set_progress(habit: Habit, when: date | datetime, value: float) -> None:
    """Overwrite the day's amount, then recompute its status."""
    day_key = _prepare_progress_write(habit, when, value, "set progress")
    habit.progress_records[day_key] = value
    check_completion(habit, when)


def add_progress(habit: Habit, when: date | datetime, value: float) -> None:
    """Add to the day's amount (absent = 0), then recompute its status."""
    day_key = _prepare_progress_write(habit, when, value, "add progress")
    habit.progress_records[day_key] = habit.progress_records.get(day_key, 0) + value
    check_completion(habit, when)


def get_progress(habit: Habit, when: date | datetime) -> float:
    return habit.progress_records.get(to_day_key(when), 0)


def check_completion(habit: Habit, when: date | datetime) -> None:
    day_key = to_day_key(when)
    progress = habit.progress_records.get(day_key)
    if progress is None:
        return
    habit.completion_records[day_key] = derive_completion_status(
        progress, habit.quantity,
    )


def mark_completed(habit: Habit, when: date | datetime) -> None:
    raise UnsupportedOperationError(
        _DERIVED_ONLY.format("completed"),
        ErrorContext(habit_id=habit.id, day_key=to_day_key(when), operation="mark completion"),
    )


def mark_missed(habit: Habit, when: date | datetime) -> None:
    raise UnsupportedOperationError(
        _DERIVED_ONLY.format("missed"),
        ErrorContext(habit_id=habit.id, day_key=to_day_key(when), operation="mark missed"),
    )


def _prepare_progress_write(
    habit: Habit, when: date | datetime, value: float, operation: str,
) -> DayKey:
    if habit.kind != HabitKind.MEASURED:
        raise UnsupportedOperationError(
            f"Cannot {operation} on a {habit.kind.value} habit",
            ErrorContext(habit_id=habit.id, operation=operation),
        )
    day_key = habit.ensure_day_writable(when, operation)
    context = ErrorContext(habit_id=habit.id, day_key=day_key, operation=operation)
    if not math.isfinite(value):
        raise NonFiniteProgressError(value, context)
    if value < 0:
        raise NegativeProgressError(value, context)
    return day_key
