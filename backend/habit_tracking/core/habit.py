"""Habit — shared state and lifecycle for every habit kind.

Invariants:
    - name is never empty after strip (checked at construction and on rename)
    - schedule is always present
    - id and kind never change after construction
    - Lifecycle: active <-> inactive, active|inactive -> archived, archived -> active
      only via unarchive()
    - Day records are written only through ensure_day_writable(): archived first,
      then inactive, then (binary habits only) write-once per day
    - completion_records / progress_records are owned dicts, never shared

Design Decisions:
    - One class for both kinds, tagged by HabitKind: variant behavior lives in
      binary_habit / quantity_habit and is selected by tag in habit_dispatch,
      not by subclass override
    - Plain class over dataclass: name and status need guarded write access
"""

import uuid
from datetime import date, datetime

from habit_tracking.core.day_keys import to_day_key
from habit_tracking.core.domain_types import (
    CompletionStatus, DayKey, HabitId, HabitKind, HabitStatus,
)
from habit_tracking.core.errors import (
    ArchivedHabitError, CannotActivateArchivedError,
    CannotDeactivateArchivedError, DuplicateDayRecordError, EmptyNameError,
    ErrorContext, InactiveHabitError, MissingScheduleError, NotArchivedError,
)
from habit_tracking.core.value_objects import Cue, Quantity, Schedule


def _clean_name(name: str | None) -> str:
    text = (name or "").strip()
    if not text:
        raise EmptyNameError()
    return text


class Habit:
    """A recurring personal habit with per-day completion tracking."""

    def __init__(
        self,
        name: str,
        description: str,
        kind: HabitKind,
        schedule: Schedule | None,
        cue: Cue | None = None,
        quantity: Quantity | None = None,
        note_name: str | None = None,
        habit_id: str | None = None,
        status: HabitStatus = HabitStatus.ACTIVE,
    ):
        self._name = _clean_name(name)
        if schedule is None:
            raise MissingScheduleError()
        self._id = HabitId(habit_id or str(uuid.uuid4()))
        self._kind = HabitKind(kind)
        self._status = HabitStatus(status)
        self.description = description
        self.schedule = schedule
        self.cue = cue
        self.quantity = quantity
        self.note_name = note_name
        self.completion_records: dict[DayKey, CompletionStatus] = {}
        self.progress_records: dict[DayKey, float] = {}

    def __repr__(self) -> str:
        return (
            f"Habit(id={self._id!r}, name={self._name!r}, "
            f"kind={self._kind.value}, status={self._status.value})"
        )

    # --- Identity & naming ----------------------------------------------------

    @property
    def id(self) -> HabitId:
        return self._id

    @property
    def kind(self) -> HabitKind:
        return self._kind

    @property
    def status(self) -> HabitStatus:
        return self._status

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = _clean_name(value)

    # --- Lifecycle ------------------------------------------------------------

    def activate(self) -> None:
        if self._status == HabitStatus.ARCHIVED:
            raise CannotActivateArchivedError(self._context("activate"))
        self._status = HabitStatus.ACTIVE

    def deactivate(self) -> None:
        if self._status == HabitStatus.ARCHIVED:
            raise CannotDeactivateArchivedError(self._context("deactivate"))
        self._status = HabitStatus.INACTIVE

    def archive(self) -> None:
        """Always valid, whatever the current status."""
        self._status = HabitStatus.ARCHIVED

    def unarchive(self) -> None:
        if self._status != HabitStatus.ARCHIVED:
            raise NotArchivedError(self._context("unarchive"))
        self._status = HabitStatus.ACTIVE

    # --- Day records ----------------------------------------------------------

    def ensure_day_writable(self, when: date | datetime, operation: str) -> DayKey:
        """Gate applied before any day-record write. Returns the day key.

        `operation` is the human phrase used in the error message,
        e.g. "mark completion" or "set progress".
        """
        day_key = to_day_key(when)
        ctx = self._context(operation, day_key)
        if self._status == HabitStatus.ARCHIVED:
            raise ArchivedHabitError(operation, ctx)
        if self._status != HabitStatus.ACTIVE:
            raise InactiveHabitError(operation, ctx)
        if self._kind == HabitKind.COMPLETION and day_key in self.completion_records:
            raise DuplicateDayRecordError(day_key, ctx)
        return day_key

    def mark_skipped(self, when: date | datetime) -> None:
        day_key = self.ensure_day_writable(when, "mark skipped")
        self.completion_records[day_key] = CompletionStatus.SKIPPED

    def get_completion_status(self, when: date | datetime) -> CompletionStatus:
        """Stored status for the day, or PENDING. Pure read."""
        return self.completion_records.get(
            to_day_key(when), CompletionStatus.PENDING,
        )

    def _context(self, operation: str, day_key: str | None = None) -> ErrorContext:
        return ErrorContext(habit_id=self._id, day_key=day_key, operation=operation)
