"""Habit Lifecycle — tests for construction and the active/inactive/archived state machine.

Tests cover:
    - Factories start every habit as active
    - Construction failures (empty name, missing schedule, bad frequency)
    - activate/deactivate idempotence and archived refusal
    - archive idempotence, unarchive only from archived
    - Name setter re-validation
"""

from datetime import datetime, timezone

import pytest

from habit_tracking.core.binary_habit import create_binary_habit
from habit_tracking.core.domain_types import HabitKind, HabitStatus
from habit_tracking.core.errors import (
    CannotActivateArchivedError, CannotDeactivateArchivedError, EmptyNameError,
    HabitStateError, InvalidFrequencyError, MissingScheduleError,
    NotArchivedError,
)
from habit_tracking.core.habit import Habit
from habit_tracking.core.value_objects import ScheduleProps

START = datetime(2025, 1, 1, tzinfo=timezone.utc)


def daily_schedule() -> ScheduleProps:
    return ScheduleProps(start_date=START, interval="daily")


# ─── Construction ────────────────────────────────────────────────

def test_new_binary_habit_is_active(binary_habit):
    assert binary_habit.status == HabitStatus.ACTIVE
    assert binary_habit.kind == HabitKind.COMPLETION


def test_new_quantity_habit_is_active(goal_habit):
    assert goal_habit.status == HabitStatus.ACTIVE
    assert goal_habit.kind == HabitKind.MEASURED


def test_name_is_trimmed():
    habit = create_binary_habit("  Stretch  ", "", daily_schedule())
    assert habit.name == "Stretch"


def test_each_habit_gets_its_own_id():
    a = create_binary_habit("A", "", daily_schedule())
    b = create_binary_habit("B", "", daily_schedule())
    assert a.id != b.id


@pytest.mark.parametrize("name", ["", "   ", None])
def test_empty_name_rejected(name):
    with pytest.raises(EmptyNameError):
        create_binary_habit(name, "", daily_schedule())


def test_missing_schedule_rejected():
    with pytest.raises(MissingScheduleError):
        create_binary_habit("Walk", "", None)


def test_habit_constructor_also_rejects_missing_schedule():
    with pytest.raises(MissingScheduleError):
        Habit("Walk", "", HabitKind.COMPLETION, None)


def test_weekly_without_days_fails_before_habit_exists():
    with pytest.raises(InvalidFrequencyError):
        create_binary_habit(
            "Gym", "", ScheduleProps(start_date=START, interval="weekly"),
        )


def test_cue_attached_when_given():
    habit = create_binary_habit("Floss", "", daily_schedule(), cue=" after brushing ")
    assert habit.cue.description == "after brushing"


def test_note_name_kept_on_binary_habit():
    habit = create_binary_habit("Journal", "", daily_schedule(), note_name="Daily Journal")
    assert habit.note_name == "Daily Journal"


# ─── Renaming ────────────────────────────────────────────────────

def test_rename_trims(binary_habit):
    binary_habit.name = "  Breathe  "
    assert binary_habit.name == "Breathe"


def test_rename_to_blank_rejected_and_keeps_old_name(binary_habit):
    with pytest.raises(EmptyNameError):
        binary_habit.name = "  "
    assert binary_habit.name == "Meditate"


# ─── activate / deactivate ──────────────────────────────────────

def test_deactivate_then_activate(binary_habit):
    binary_habit.deactivate()
    assert binary_habit.status == HabitStatus.INACTIVE
    binary_habit.activate()
    assert binary_habit.status == HabitStatus.ACTIVE


def test_activate_is_idempotent(binary_habit):
    binary_habit.activate()
    binary_habit.activate()
    assert binary_habit.status == HabitStatus.ACTIVE


def test_deactivate_is_idempotent(binary_habit):
    binary_habit.deactivate()
    binary_habit.deactivate()
    assert binary_habit.status == HabitStatus.INACTIVE


def test_activate_archived_fails(binary_habit):
    binary_habit.archive()
    with pytest.raises(CannotActivateArchivedError):
        binary_habit.activate()
    assert binary_habit.status == HabitStatus.ARCHIVED


def test_deactivate_archived_fails(goal_habit):
    goal_habit.archive()
    with pytest.raises(CannotDeactivateArchivedError):
        goal_habit.deactivate()


# ─── archive / unarchive ────────────────────────────────────────

def test_archive_is_idempotent(binary_habit):
    binary_habit.archive()
    assert binary_habit.status == HabitStatus.ARCHIVED
    binary_habit.archive()
    assert binary_habit.status == HabitStatus.ARCHIVED


def test_archive_from_inactive(binary_habit):
    binary_habit.deactivate()
    binary_habit.archive()
    assert binary_habit.status == HabitStatus.ARCHIVED


def test_unarchive_returns_to_active(binary_habit):
    binary_habit.deactivate()
    binary_habit.archive()
    binary_habit.unarchive()
    assert binary_habit.status == HabitStatus.ACTIVE


@pytest.mark.parametrize("prepare", [lambda h: None, lambda h: h.deactivate()])
def test_unarchive_requires_archived(binary_habit, prepare):
    prepare(binary_habit)
    with pytest.raises(NotArchivedError):
        binary_habit.unarchive()


def test_state_errors_share_a_base_and_carry_habit_id(binary_habit):
    binary_habit.archive()
    with pytest.raises(HabitStateError) as exc_info:
        binary_habit.activate()
    assert exc_info.value.context.habit_id == binary_habit.id
    assert exc_info.value.http_status == 409
