"""Habit Snapshot — serialization / deserialization between Habit and a JSON-safe dict.

Invariants:
    - habit_to_snapshot produces a JSON-safe dict (no Enums, no datetimes, no tuples)
    - habit_from_snapshot restores id, status, completion and progress records verbatim
    - Day maps are copied in both directions, never aliased
    - Value objects are rebuilt through their validating factories; the cue keeps its id
    - Unknown enum values (type, status, day status) raise HabitValidationError

Design Decisions:
    - Lives in core (pure, no IO): every repository serializes through the same mapper
    - Restoration bypasses the lifecycle state machine: status is data here, not a transition
"""

from datetime import datetime
from enum import Enum
from typing import TypeVar

from habit_tracking.core.domain_types import (
    CompletionStatus, DayKey, HabitKind, HabitStatus,
)
from habit_tracking.core.errors import HabitValidationError, InvalidQuantityError
from habit_tracking.core.habit import Habit
from habit_tracking.core.value_objects import Cue, Frequency, Quantity, Schedule

E = TypeVar("E", bound=Enum)


def _serialize_schedule(schedule: Schedule) -> dict:
    return {
        "start_date": schedule.start_date.isoformat(),
        "end_date": schedule.end_date.isoformat() if schedule.end_date else None,
        "interval": schedule.frequency.interval.value,
        "days_of_week": [d.value for d in schedule.frequency.days_of_week],
    }


def _serialize_cue(cue: Cue | None) -> dict | None:
    if cue is None:
        return None
    return {"id": cue.id, "description": cue.description}


def _serialize_quantity(quantity: Quantity | None) -> dict | None:
    if quantity is None:
        return None
    return {
        "amount": quantity.target_amount,
        "unit": quantity.unit,
        "target_type": quantity.target_type.value,
    }


def habit_to_snapshot(habit: Habit) -> dict:
    """Serialize a Habit to a JSON-safe dict. Pure, no IO."""
    return {
        "id": habit.id,
        "name": habit.name,
        "description": habit.description,
        "type": habit.kind.value,
        "status": habit.status.value,
        "schedule": _serialize_schedule(habit.schedule),
        "cue": _serialize_cue(habit.cue),
        "note_name": habit.note_name,
        "quantity": _serialize_quantity(habit.quantity),
        "completion_records": {
            day: status.value for day, status in habit.completion_records.items()
        },
        "progress_records": dict(habit.progress_records),
    }


def _restore_schedule(data: dict) -> Schedule:
    frequency = Frequency.create(data["interval"], data.get("days_of_week") or None)
    end_raw = data.get("end_date")
    return Schedule.create(
        datetime.fromisoformat(data["start_date"]),
        frequency,
        datetime.fromisoformat(end_raw) if end_raw else None,
    )


def _restore_cue(raw: dict | None) -> Cue | None:
    if not raw:
        return None
    cue = Cue.create(raw["description"])
    if raw.get("id"):
        cue = Cue(description=cue.description, id=raw["id"])
    return cue


def _enum_value(enum_type: type[E], raw: object, field: str) -> E:
    try:
        return enum_type(raw)
    except ValueError:
        raise HabitValidationError(f"Unknown {field}: {raw}", field)


def habit_from_snapshot(data: dict) -> Habit:
    """Reconstruct a Habit from a snapshot dict. Pure, no IO."""
    kind = _enum_value(HabitKind, data["type"], "type")

    quantity = None
    if kind == HabitKind.MEASURED:
        raw = data.get("quantity")
        if not raw:
            raise InvalidQuantityError("Measured habit must have quantity")
        quantity = Quantity.create(raw["amount"], raw["unit"], raw["target_type"])

    habit = Habit(
        name=data["name"],
        description=data.get("description", ""),
        kind=kind,
        schedule=_restore_schedule(data["schedule"]),
        cue=_restore_cue(data.get("cue")),
        quantity=quantity,
        note_name=data.get("note_name"),
        habit_id=data["id"],
        status=_enum_value(HabitStatus, data["status"], "status"),
    )
    habit.completion_records = {
        DayKey(day): _enum_value(CompletionStatus, status, "completion_records")
        for day, status in (data.get("completion_records") or {}).items()
    }
    habit.progress_records = {
        DayKey(day): amount
        for day, amount in (data.get("progress_records") or {}).items()
    }
    return habit
