"""Habit Schemas — tests for creation payload validation at the API boundary.

Tests cover:
    - Discriminated union routing on `type`
    - Cross-field schedule rules reported on the right field path
    - Quantity bounds, stripped strings, note_name only on completion habits
    - validate_create_habit_payload never raises
"""

import pytest
from pydantic import ValidationError

from habit_tracking.core.domain_types import FrequencyInterval, TargetType
from habit_tracking.schemas.habit import (
    CompletionHabitCreate, HabitUpdate, MeasuredHabitCreate, ProgressInput,
    ScheduleInput, validate_create_habit_payload,
)


def _payload(**overrides) -> dict:
    data = {
        "type": "completion",
        "name": "Meditate",
        "description": "Ten minutes",
        "schedule": {"start_date": "2025-01-01T00:00:00Z", "interval": "daily"},
    }
    data.update(overrides)
    return data


def _fields(errors: list[dict]) -> set[str]:
    return {e["field"] for e in errors}


# ─── Routing ─────────────────────────────────────────────────────

def test_completion_payload_parses():
    payload, errors = validate_create_habit_payload(_payload(note_name="Journal"))
    assert errors == []
    assert isinstance(payload, CompletionHabitCreate)
    assert payload.note_name == "Journal"


def test_measured_payload_parses():
    payload, errors = validate_create_habit_payload(_payload(
        type="measured",
        quantity={"amount": 8, "unit": " glasses ", "target_type": "goal"},
    ))
    assert errors == []
    assert isinstance(payload, MeasuredHabitCreate)
    assert payload.quantity.unit == "glasses"
    assert payload.quantity.target_type == TargetType.GOAL


def test_unknown_type_rejected():
    payload, errors = validate_create_habit_payload(_payload(type="streak"))
    assert payload is None
    assert errors


def test_non_object_payload_rejected():
    payload, errors = validate_create_habit_payload(["not", "an", "object"])
    assert payload is None
    assert errors


def test_measured_requires_quantity():
    _, errors = validate_create_habit_payload(_payload(type="measured"))
    assert "quantity" in _fields(errors)


def test_measured_payload_ignores_note_name():
    payload, _ = validate_create_habit_payload(_payload(
        type="measured", note_name="ignored",
        quantity={"amount": 1, "unit": "km", "target_type": "goal"},
    ))
    assert not hasattr(payload, "note_name")


# ─── Field rules ─────────────────────────────────────────────────

def test_blank_name_rejected():
    _, errors = validate_create_habit_payload(_payload(name="   "))
    assert _fields(errors) == {"name"}


def test_name_is_stripped():
    payload, _ = validate_create_habit_payload(_payload(name="  Walk  "))
    assert payload.name == "Walk"


def test_blank_cue_rejected():
    _, errors = validate_create_habit_payload(_payload(cue=" "))
    assert "cue" in _fields(errors)


def test_description_defaults_to_empty():
    data = _payload()
    del data["description"]
    payload, _ = validate_create_habit_payload(data)
    assert payload.description == ""


@pytest.mark.parametrize("amount", [0, -3])
def test_quantity_amount_must_be_positive(amount):
    _, errors = validate_create_habit_payload(_payload(
        type="measured",
        quantity={"amount": amount, "unit": "pages", "target_type": "goal"},
    ))
    assert "quantity.amount" in _fields(errors)


@pytest.mark.parametrize("amount", [float("nan"), float("inf")])
def test_quantity_amount_must_be_finite(amount):
    _, errors = validate_create_habit_payload(_payload(
        type="measured",
        quantity={"amount": amount, "unit": "pages", "target_type": "goal"},
    ))
    assert "quantity.amount" in _fields(errors)


def test_quantity_target_type_must_be_known():
    _, errors = validate_create_habit_payload(_payload(
        type="measured",
        quantity={"amount": 2, "unit": "cups", "target_type": "maximum"},
    ))
    assert "quantity.target_type" in _fields(errors)


# ─── Schedule rules ─────────────────────────────────────────────

def test_weekly_without_days_reports_days_field():
    _, errors = validate_create_habit_payload(_payload(
        schedule={"start_date": "2025-01-01T00:00:00Z", "interval": "weekly"},
    ))
    assert "schedule.days_of_week" in _fields(errors)


def test_end_before_start_reports_end_field():
    _, errors = validate_create_habit_payload(_payload(schedule={
        "start_date": "2025-02-01T00:00:00Z",
        "end_date": "2025-01-01T00:00:00Z",
        "interval": "daily",
    }))
    assert "schedule.end_date" in _fields(errors)


def test_unknown_weekday_rejected():
    _, errors = validate_create_habit_payload(_payload(schedule={
        "start_date": "2025-01-01T00:00:00Z",
        "interval": "custom",
        "days_of_week": ["Someday"],
    }))
    assert any(f.startswith("schedule.days_of_week") for f in _fields(errors))


def test_schedule_input_converts_to_props():
    schedule = ScheduleInput(
        start_date="2025-01-06T00:00:00Z", interval="weekly",
        days_of_week=["Monday"],
    )
    props = schedule.to_props()
    assert props.interval == FrequencyInterval.WEEKLY
    assert props.to_schedule().frequency.days_of_week[0].value == "Monday"


# ─── Other bodies ───────────────────────────────────────────────

def test_progress_input_rejects_negative():
    with pytest.raises(ValidationError):
        ProgressInput(value=-1)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_progress_input_rejects_non_finite(value):
    with pytest.raises(ValidationError):
        ProgressInput(value=value)


def test_progress_input_accepts_zero():
    assert ProgressInput(value=0).value == 0


def test_habit_update_all_optional():
    assert HabitUpdate().model_dump(exclude_none=True) == {}


def test_habit_update_rejects_blank_name():
    with pytest.raises(ValidationError):
        HabitUpdate(name="  ")
