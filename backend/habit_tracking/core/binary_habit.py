"""Binary Habit — completion-tracked habits marked explicitly day by day.

Invariants:
    - Exactly one stored status per day (write-once, enforced by the shared gate)
    - mark_completed / mark_missed go through Habit.ensure_day_writable
"""

from datetime import date, datetime

from habit_tracking.core.domain_types import CompletionStatus, HabitKind
from habit_tracking.core.errors import EmptyNameError, MissingScheduleError
from habit_tracking.core.habit import Habit
from habit_tracking.core.value_objects import Cue, ScheduleProps


def create_binary_habit(
    name: str,
    description: str,
    schedule: ScheduleProps | None,
    cue: str | None = None,
    note_name: str | None = None,
) -> Habit:
    """Validating factory. Fails before any entity exists."""
    if not (name or "").strip():
        raise EmptyNameError()
    if schedule is None:
        raise MissingScheduleError()
    return Habit(
        name=name,
        description=description,
        kind=HabitKind.COMPLETION,
        schedule=schedule.to_schedule(),
        cue=Cue.create(cue) if cue is not None else None,
        note_name=note_name,
    )


def mark_completed(habit: Habit, when: date | datetime) -> None:
    day_key = habit.ensure_day_writable(when, "mark completion")
    habit.completion_records[day_key] = CompletionStatus.COMPLETED


def mark_missed(habit: Habit, when: date | datetime) -> None:
    day_key = habit.ensure_day_writable(when, "mark missed")
    habit.completion_records[day_key] = CompletionStatus.MISSED
