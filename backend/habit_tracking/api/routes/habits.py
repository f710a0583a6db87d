"""Habit Routes — CRUD, lifecycle and per-day endpoints for habits.

Invariants:
    - Creation payload validated by validate_create_habit_payload before any factory call
    - Domain errors are not caught here: global handlers map them to JSON envelopes
    - Day path segment is a calendar date (YYYY-MM-DD); FastAPI rejects anything else

Design Decisions:
    - POST /habits reads the raw body: invalid JSON and schema failures both
      answer 400 with field-level details, same shape as RequestValidationError
    - Lifecycle actions share one route with a Literal path parameter
"""

import json
import logging
from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, Request, Response, status

from habit_tracking.api.error_handlers import validation_error_response
from habit_tracking.core.domain_types import CompletionStatus
from habit_tracking.core.habit_snapshot import habit_to_snapshot
from habit_tracking.core.repository_protocols import HabitRepository
from habit_tracking.infrastructure.repository_factory import get_habit_repository
from habit_tracking.schemas.habit import (
    DayMark, DayState, HabitCreated, HabitSummary, HabitUpdate, ProgressInput,
    validate_create_habit_payload,
)
from habit_tracking.services.habit_service import HabitService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/habits", tags=["habits"])


def get_habit_service(
    repository: HabitRepository = Depends(get_habit_repository),
) -> HabitService:
    return HabitService(repository)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=HabitCreated)
async def create_habit(
    request: Request, service: HabitService = Depends(get_habit_service),
):
    """Create a completion or measured habit."""
    raw = await request.body()
    if not raw:
        return validation_error_response("Request body is required")
    try:
        data = json.loads(raw)
    except ValueError:
        return validation_error_response("Invalid JSON in request body")

    payload, errors = validate_create_habit_payload(data)
    if payload is None:
        logger.warning(f"Habit payload rejected: {errors}")
        return validation_error_response("Validation failed", errors)

    habit = await service.create_habit(payload)
    return HabitCreated(habit=HabitSummary(
        id=habit.id, name=habit.name,
        type=habit.kind.value, status=habit.status.value,
    ))


@router.get("/{habit_id}")
async def get_habit(
    habit_id: str, service: HabitService = Depends(get_habit_service),
):
    """Full habit state, including day records."""
    return habit_to_snapshot(await service.get_habit(habit_id))


@router.patch("/{habit_id}")
async def update_habit(
    habit_id: str,
    body: HabitUpdate,
    service: HabitService = Depends(get_habit_service),
):
    return habit_to_snapshot(await service.update_details(habit_id, body))


@router.delete("/{habit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_habit(
    habit_id: str, service: HabitService = Depends(get_habit_service),
):
    await service.delete_habit(habit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{habit_id}/{action}", response_model=HabitSummary)
async def change_habit_status(
    habit_id: str,
    action: Literal["activate", "deactivate", "archive", "unarchive"],
    service: HabitService = Depends(get_habit_service),
):
    """Lifecycle transition: activate | deactivate | archive | unarchive."""
    habit = await service.change_status(habit_id, action)
    return HabitSummary(
        id=habit.id, name=habit.name,
        type=habit.kind.value, status=habit.status.value,
    )


@router.get("/{habit_id}/days/{day}", response_model=DayState)
async def get_day(
    habit_id: str, day: date, service: HabitService = Depends(get_habit_service),
):
    return await service.get_day(habit_id, day)


@router.post("/{habit_id}/days/{day}", response_model=DayState)
async def mark_day(
    habit_id: str,
    day: date,
    body: DayMark,
    service: HabitService = Depends(get_habit_service),
):
    """Assert completed / missed / skipped for a day."""
    return await service.mark_day(habit_id, day, CompletionStatus(body.status))


@router.put("/{habit_id}/days/{day}/progress", response_model=DayState)
async def set_progress(
    habit_id: str,
    day: date,
    body: ProgressInput,
    service: HabitService = Depends(get_habit_service),
):
    """Overwrite a measured habit's progress for the day."""
    return await service.set_progress(habit_id, day, body.value)


@router.post("/{habit_id}/days/{day}/progress", response_model=DayState)
async def add_progress(
    habit_id: str,
    day: date,
    body: ProgressInput,
    service: HabitService = Depends(get_habit_service),
):
    """Add to a measured habit's progress for the day."""
    return await service.add_progress(habit_id, day, body.value)
