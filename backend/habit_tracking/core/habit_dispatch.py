"""Habit Dispatch — explicit routing from habit kind to variant handler.

Invariants:
    - Every kind -> handler mapping is visible here, no getattr magic
    - HabitKind is a closed set: a missing mapping is a programming error (KeyError)
    - skipped is shared behavior and goes straight to Habit.mark_skipped
"""

from collections.abc import Callable
from datetime import date, datetime

from habit_tracking.core import binary_habit, quantity_habit
from habit_tracking.core.domain_types import CompletionStatus, HabitKind
from habit_tracking.core.errors import HabitValidationError
from habit_tracking.core.habit import Habit

DayHandler = Callable[[Habit, date | datetime], None]

_MARK_COMPLETED: dict[HabitKind, DayHandler] = {
    HabitKind.COMPLETION: binary_habit.mark_completed,
    HabitKind.MEASURED: quantity_habit.mark_completed,
}

_MARK_MISSED: dict[HabitKind, DayHandler] = {
    HabitKind.COMPLETION: binary_habit.mark_missed,
    HabitKind.MEASURED: quantity_habit.mark_missed,
}

# Statuses a caller may assert directly; pending and committed are read/derived only
MARKABLE_STATUSES = frozenset({
    CompletionStatus.COMPLETED, CompletionStatus.MISSED, CompletionStatus.SKIPPED,
})


def mark_completed(habit: Habit, when: date | datetime) -> None:
    _MARK_COMPLETED[habit.kind](habit, when)


def mark_missed(habit: Habit, when: date | datetime) -> None:
    _MARK_MISSED[habit.kind](habit, when)


def mark_day(
    habit: Habit, when: date | datetime, status: CompletionStatus,
) -> None:
    """Route an asserted day status to the matching operation."""
    if status == CompletionStatus.COMPLETED:
        mark_completed(habit, when)
    elif status == CompletionStatus.MISSED:
        mark_missed(habit, when)
    elif status == CompletionStatus.SKIPPED:
        habit.mark_skipped(when)
    else:
        raise HabitValidationError(
            f"Status '{status.value}' cannot be marked directly", "status",
        )
