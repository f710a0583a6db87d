"""Habit Service — imperative shell around the pure habit core.

Invariants:
    - Every mutation is load -> pure core call -> update; never a partial write
    - Domain errors propagate untouched; the API layer maps them to responses
    - Lifecycle actions routed through an explicit dict (no getattr on user input)

Design Decisions:
    - One service per request, holding a HabitRepository: routes stay thin and
      the service is testable against InMemoryHabitRepository without FastAPI
"""

import logging
from collections.abc import Callable
from datetime import date

from habit_tracking.core import habit_dispatch, quantity_habit
from habit_tracking.core.binary_habit import create_binary_habit
from habit_tracking.core.domain_types import CompletionStatus, HabitKind
from habit_tracking.core.errors import ResourceNotFoundError
from habit_tracking.core.habit import Habit
from habit_tracking.core.quantity_habit import create_quantity_habit
from habit_tracking.core.repository_protocols import HabitRepository
from habit_tracking.core.value_objects import Cue
from habit_tracking.schemas.habit import (
    CompletionHabitCreate, DayState, HabitUpdate, MeasuredHabitCreate,
)

logger = logging.getLogger(__name__)

LIFECYCLE_ACTIONS: dict[str, Callable[[Habit], None]] = {
    "activate": Habit.activate,
    "deactivate": Habit.deactivate,
    "archive": Habit.archive,
    "unarchive": Habit.unarchive,
}


def build_habit(payload: CompletionHabitCreate | MeasuredHabitCreate) -> Habit:
    """Turn a validated creation payload into a domain habit."""
    if isinstance(payload, MeasuredHabitCreate):
        return create_quantity_habit(
            name=payload.name,
            description=payload.description,
            quantity=payload.quantity.to_props(),
            schedule=payload.schedule.to_props(),
            cue=payload.cue,
        )
    return create_binary_habit(
        name=payload.name,
        description=payload.description,
        schedule=payload.schedule.to_props(),
        cue=payload.cue,
        note_name=payload.note_name,
    )


class HabitService:
    """Use cases over a HabitRepository."""

    def __init__(self, repository: HabitRepository):
        self.repository = repository

    async def create_habit(
        self, payload: CompletionHabitCreate | MeasuredHabitCreate,
    ) -> Habit:
        habit = build_habit(payload)
        await self.repository.save(habit)
        logger.info(
            "Habit created",
            extra={"habit_id": habit.id, "habit_kind": habit.kind.value},
        )
        return habit

    async def get_habit(self, habit_id: str) -> Habit:
        habit = await self.repository.find_by_id(habit_id)
        if habit is None:
            raise ResourceNotFoundError("Habit", habit_id)
        return habit

    async def update_details(self, habit_id: str, changes: HabitUpdate) -> Habit:
        habit = await self.get_habit(habit_id)
        if changes.name is not None:
            habit.name = changes.name
        if changes.description is not None:
            habit.description = changes.description
        if changes.cue is not None:
            habit.cue = Cue.create(changes.cue)
        await self.repository.update(habit)
        logger.info("Habit details updated", extra={"habit_id": habit_id})
        return habit

    async def delete_habit(self, habit_id: str) -> None:
        if not await self.repository.delete(habit_id):
            raise ResourceNotFoundError("Habit", habit_id)
        logger.info("Habit deleted", extra={"habit_id": habit_id})

    async def change_status(self, habit_id: str, action: str) -> Habit:
        transition = LIFECYCLE_ACTIONS[action]
        habit = await self.get_habit(habit_id)
        transition(habit)
        await self.repository.update(habit)
        logger.info(
            f"Habit {action}",
            extra={
                "habit_id": habit_id, "operation": action,
                "status": habit.status.value,
            },
        )
        return habit

    async def mark_day(
        self, habit_id: str, day: date, status: CompletionStatus,
    ) -> DayState:
        habit = await self.get_habit(habit_id)
        habit_dispatch.mark_day(habit, day, status)
        await self.repository.update(habit)
        logger.info(
            "Day marked",
            extra={
                "habit_id": habit_id, "day_key": day.isoformat(),
                "status": status.value,
            },
        )
        return self._day_state(habit, day)

    async def set_progress(self, habit_id: str, day: date, value: float) -> DayState:
        habit = await self.get_habit(habit_id)
        quantity_habit.set_progress(habit, day, value)
        await self.repository.update(habit)
        logger.info(
            "Progress set",
            extra={"habit_id": habit_id, "day_key": day.isoformat()},
        )
        return self._day_state(habit, day)

    async def add_progress(self, habit_id: str, day: date, value: float) -> DayState:
        habit = await self.get_habit(habit_id)
        quantity_habit.add_progress(habit, day, value)
        await self.repository.update(habit)
        logger.info(
            "Progress added",
            extra={"habit_id": habit_id, "day_key": day.isoformat()},
        )
        return self._day_state(habit, day)

    async def get_day(self, habit_id: str, day: date) -> DayState:
        return self._day_state(await self.get_habit(habit_id), day)

    @staticmethod
    def _day_state(habit: Habit, day: date) -> DayState:
        progress = None
        if habit.kind == HabitKind.MEASURED:
            progress = quantity_habit.get_progress(habit, day)
        return DayState(
            day=day.isoformat(),
            status=habit.get_completion_status(day).value,
            progress=progress,
        )
