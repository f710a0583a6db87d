"""Habit Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - CreateHabitRequest is a discriminated union on `type` (completion | measured)
    - name, unit and cue are stripped and must be non-empty
    - weekly/custom schedules require days_of_week; end_date must follow start_date
    - Measured habits carry a quantity; only completion habits carry note_name
    - validate_create_habit_payload never raises: it returns a payload or error list

Design Decisions:
    - Literal type discriminator over str enum: Pydantic handles routing natively
    - validate_default on dependent fields so cross-field rules report the real
      field path (schedule.days_of_week, schedule.end_date) instead of the model
    - Domain factories re-validate everything: schemas are the first gate, not the only one
"""

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import (
    BaseModel, Field, TypeAdapter, ValidationError, ValidationInfo,
    field_validator,
)

from habit_tracking.core.day_keys import as_utc
from habit_tracking.core.domain_types import DayOfWeek, FrequencyInterval, TargetType
from habit_tracking.core.value_objects import QuantityProps, ScheduleProps


def _strip_non_empty(v: str, label: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{label} cannot be empty")
    return v


class ScheduleInput(BaseModel):
    start_date: datetime
    end_date: datetime | None = Field(None, validate_default=True)
    interval: FrequencyInterval
    days_of_week: list[DayOfWeek] | None = Field(None, validate_default=True)

    @field_validator("end_date")
    @classmethod
    def end_after_start(cls, v: datetime | None, info: ValidationInfo):
        start = info.data.get("start_date")
        if v is not None and start is not None and as_utc(v) <= as_utc(start):
            raise ValueError("End date must be after start date")
        return v

    @field_validator("days_of_week")
    @classmethod
    def days_required_for_weekly(cls, v: list[DayOfWeek] | None, info: ValidationInfo):
        interval = info.data.get("interval")
        if interval in (FrequencyInterval.WEEKLY, FrequencyInterval.CUSTOM) and not v:
            raise ValueError(
                "Days of week must be provided for weekly or custom frequency intervals",
            )
        return v

    def to_props(self) -> ScheduleProps:
        return ScheduleProps(
            start_date=self.start_date,
            interval=self.interval,
            end_date=self.end_date,
            days_of_week=self.days_of_week,
        )


class QuantityInput(BaseModel):
    amount: float = Field(gt=0, allow_inf_nan=False)
    unit: str
    target_type: TargetType

    @field_validator("unit")
    @classmethod
    def strip_unit(cls, v: str) -> str:
        return _strip_non_empty(v, "Unit")

    def to_props(self) -> QuantityProps:
        return QuantityProps(
            amount=self.amount, unit=self.unit, target_type=self.target_type,
        )


class _HabitCreateBase(BaseModel):
    name: str = Field(max_length=200)
    description: str = Field("", max_length=5000)
    schedule: ScheduleInput
    cue: str | None = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_non_empty(v, "Habit name")

    @field_validator("cue")
    @classmethod
    def strip_cue(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _strip_non_empty(v, "Cue description")


class CompletionHabitCreate(_HabitCreateBase):
    """Binary habit creation payload."""
    type: Literal["completion"]
    note_name: str | None = Field(None, max_length=500)

    @field_validator("note_name")
    @classmethod
    def strip_note_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _strip_non_empty(v, "Note name")


class MeasuredHabitCreate(_HabitCreateBase):
    """Quantity habit creation payload."""
    type: Literal["measured"]
    quantity: QuantityInput


CreateHabitRequest = Annotated[
    Union[CompletionHabitCreate, MeasuredHabitCreate],
    Field(discriminator="type"),
]

_create_adapter = TypeAdapter(CreateHabitRequest)


def format_validation_errors(exc: ValidationError) -> list[dict]:
    """Flatten Pydantic errors to [{field, message}], dropping the union tag."""
    details = []
    for e in exc.errors():
        loc = list(e["loc"])
        if loc and loc[0] in ("completion", "measured"):
            loc = loc[1:]
        details.append({
            "field": ".".join(str(part) for part in loc),
            "message": e["msg"],
        })
    return details


def validate_create_habit_payload(
    data: object,
) -> tuple[CompletionHabitCreate | MeasuredHabitCreate | None, list[dict]]:
    """Validate an untyped payload. Returns (payload, []) or (None, errors)."""
    try:
        return _create_adapter.validate_python(data), []
    except ValidationError as exc:
        return None, format_validation_errors(exc)


# --- Other request / response bodies ------------------------------------------

class HabitUpdate(BaseModel):
    """Partial update — only fields present are applied."""
    name: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=5000)
    cue: str | None = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _strip_non_empty(v, "Habit name")


class DayMark(BaseModel):
    status: Literal["completed", "missed", "skipped"]


class ProgressInput(BaseModel):
    value: float = Field(ge=0, allow_inf_nan=False)


class HabitSummary(BaseModel):
    id: str
    name: str
    type: str
    status: str


class HabitCreated(BaseModel):
    message: str = "Habit created successfully"
    habit: HabitSummary


class DayState(BaseModel):
    day: str
    status: str
    progress: float | None = None
