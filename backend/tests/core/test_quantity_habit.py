"""Quantity Habit — tests for progress tracking and derived completion.

Tests cover:
    - derive_completion_status for goal and limit targets
    - set_progress overwrites, add_progress accumulates
    - Status recomputed after every write (goal may drop back to committed)
    - Negative and non-finite values, archived/inactive gates, binary habits refused
    - Direct completed/missed marks always refused
"""

from datetime import datetime, timedelta, timezone

import pytest

from habit_tracking.core import quantity_habit as measured
from habit_tracking.core.domain_types import CompletionStatus, HabitKind
from habit_tracking.core.errors import (
    ArchivedHabitError, InactiveHabitError, InvalidQuantityError,
    NegativeProgressError, NonFiniteProgressError, UnsupportedOperationError,
)
from habit_tracking.core.value_objects import Quantity, QuantityProps, ScheduleProps

DAY = datetime(2025, 6, 10, 12, 0, tzinfo=timezone.utc)


# ─── derive_completion_status ───────────────────────────────────

@pytest.mark.parametrize("progress, expected", [
    (0, CompletionStatus.COMMITTED),
    (29.9, CompletionStatus.COMMITTED),
    (30, CompletionStatus.COMPLETED),
    (45, CompletionStatus.COMPLETED),
])
def test_goal_status(progress, expected):
    assert measured.derive_completion_status(
        progress, Quantity.create(30, "pages", "goal"),
    ) == expected


@pytest.mark.parametrize("progress, expected", [
    (0, CompletionStatus.COMPLETED),
    (1, CompletionStatus.COMPLETED),
    (2, CompletionStatus.MISSED),
    (3, CompletionStatus.MISSED),
])
def test_limit_status(progress, expected):
    assert measured.derive_completion_status(
        progress, Quantity.create(2, "cups", "limit"),
    ) == expected


# ─── Construction ───────────────────────────────────────────────

def test_factory_builds_measured_habit(goal_habit):
    assert goal_habit.kind == HabitKind.MEASURED
    assert goal_habit.quantity.target_amount == 30
    assert goal_habit.note_name is None


def test_factory_rejects_zero_target():
    with pytest.raises(InvalidQuantityError):
        measured.create_quantity_habit(
            "Water", "", QuantityProps(amount=0, unit="glasses", target_type="goal"),
            ScheduleProps(start_date=DAY, interval="daily"),
        )


# ─── Progress writes ────────────────────────────────────────────

def test_goal_reached_in_two_steps(goal_habit):
    measured.add_progress(goal_habit, DAY, 15)
    assert goal_habit.get_completion_status(DAY) == CompletionStatus.COMMITTED
    measured.add_progress(goal_habit, DAY, 15)
    assert measured.get_progress(goal_habit, DAY) == 30
    assert goal_habit.get_completion_status(DAY) == CompletionStatus.COMPLETED


def test_limit_exceeded_after_overwrite(limit_habit):
    measured.set_progress(limit_habit, DAY, 1)
    assert limit_habit.get_completion_status(DAY) == CompletionStatus.COMPLETED
    measured.set_progress(limit_habit, DAY, 3)
    assert measured.get_progress(limit_habit, DAY) == 3
    assert limit_habit.get_completion_status(DAY) == CompletionStatus.MISSED


def test_limit_recovers_when_lowered(limit_habit):
    measured.set_progress(limit_habit, DAY, 5)
    measured.set_progress(limit_habit, DAY, 0)
    assert limit_habit.get_completion_status(DAY) == CompletionStatus.COMPLETED


def test_goal_drops_back_to_committed_when_lowered(goal_habit):
    measured.set_progress(goal_habit, DAY, 40)
    measured.set_progress(goal_habit, DAY, 10)
    assert goal_habit.get_completion_status(DAY) == CompletionStatus.COMMITTED


def test_set_progress_overwrites(goal_habit):
    measured.set_progress(goal_habit, DAY, 12)
    measured.set_progress(goal_habit, DAY, 5)
    assert measured.get_progress(goal_habit, DAY) == 5


def test_add_progress_starts_from_zero(goal_habit):
    measured.add_progress(goal_habit, DAY, 7)
    assert measured.get_progress(goal_habit, DAY) == 7


def test_progress_is_per_day(goal_habit):
    measured.add_progress(goal_habit, DAY, 10)
    measured.add_progress(goal_habit, DAY + timedelta(days=1), 30)
    assert measured.get_progress(goal_habit, DAY) == 10
    assert goal_habit.get_completion_status(DAY) == CompletionStatus.COMMITTED
    assert goal_habit.get_completion_status(
        DAY + timedelta(days=1),
    ) == CompletionStatus.COMPLETED


def test_progress_updates_do_not_count_as_duplicates(goal_habit):
    for _ in range(4):
        measured.add_progress(goal_habit, DAY, 1)
    assert measured.get_progress(goal_habit, DAY) == 4


def test_empty_day_reads_zero_and_pending(goal_habit):
    assert measured.get_progress(goal_habit, DAY) == 0
    assert goal_habit.get_completion_status(DAY) == CompletionStatus.PENDING


def test_check_completion_without_progress_leaves_day_untouched(goal_habit):
    measured.check_completion(goal_habit, DAY)
    assert goal_habit.completion_records == {}


def test_zero_progress_on_goal_is_committed(goal_habit):
    measured.set_progress(goal_habit, DAY, 0)
    assert goal_habit.get_completion_status(DAY) == CompletionStatus.COMMITTED


# ─── Refusals ───────────────────────────────────────────────────

@pytest.mark.parametrize("write", [measured.set_progress, measured.add_progress])
def test_negative_progress_rejected(goal_habit, write):
    with pytest.raises(NegativeProgressError):
        write(goal_habit, DAY, -1)
    assert goal_habit.progress_records == {}


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
@pytest.mark.parametrize("write", [measured.set_progress, measured.add_progress])
def test_non_finite_progress_rejected(limit_habit, write, value):
    with pytest.raises(NonFiniteProgressError) as exc_info:
        write(limit_habit, DAY, value)
    assert exc_info.value.context.day_key == "2025-06-10"
    assert limit_habit.progress_records == {}
    assert limit_habit.get_completion_status(DAY) == CompletionStatus.PENDING


def test_archived_habit_refuses_progress(goal_habit):
    goal_habit.archive()
    with pytest.raises(ArchivedHabitError, match="Cannot set progress"):
        measured.set_progress(goal_habit, DAY, 10)


def test_inactive_habit_refuses_progress(goal_habit):
    goal_habit.deactivate()
    with pytest.raises(InactiveHabitError):
        measured.add_progress(goal_habit, DAY, 10)


def test_binary_habit_refuses_progress(binary_habit):
    with pytest.raises(UnsupportedOperationError):
        measured.set_progress(binary_habit, DAY, 1)
    assert binary_habit.progress_records == {}


@pytest.mark.parametrize("mark", [measured.mark_completed, measured.mark_missed])
def test_direct_marks_always_refused(goal_habit, mark):
    with pytest.raises(UnsupportedOperationError, match="determined automatically"):
        mark(goal_habit, DAY)
    assert goal_habit.completion_records == {}


def test_skip_overwrites_derived_status(goal_habit):
    measured.add_progress(goal_habit, DAY, 5)
    goal_habit.mark_skipped(DAY)
    assert goal_habit.get_completion_status(DAY) == CompletionStatus.SKIPPED
