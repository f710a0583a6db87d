"""SQL Habit Repository — SQLAlchemy implementation of the HabitRepository contract.

Invariants:
    - save() is a conditional insert: existing id -> HabitAlreadyExistsError
    - update() is a conditional replace: unknown id -> ResourceNotFoundError
    - Every write commits; the caller's session is left clean
    - Rows and entities meet only through habit_to_snapshot / habit_from_snapshot

Design Decisions:
    - Existence checked before insert AND IntegrityError mapped on commit: the
      check gives a clean error, the constraint covers concurrent inserts
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from habit_tracking.core.errors import HabitAlreadyExistsError, ResourceNotFoundError
from habit_tracking.core.habit import Habit
from habit_tracking.core.habit_snapshot import habit_from_snapshot, habit_to_snapshot
from habit_tracking.models.habit import HabitRecord

logger = logging.getLogger(__name__)


def _apply_snapshot(record: HabitRecord, snapshot: dict) -> None:
    record.name = snapshot["name"]
    record.description = snapshot["description"]
    record.kind = snapshot["type"]
    record.status = snapshot["status"]
    record.schedule = snapshot["schedule"]
    cue = snapshot["cue"]
    record.cue = cue["description"] if cue else None
    record.cue_id = cue["id"] if cue else None
    record.note_name = snapshot["note_name"]
    record.quantity = snapshot["quantity"]
    record.completion_records = snapshot["completion_records"]
    record.progress_records = snapshot["progress_records"]


def _record_to_snapshot(record: HabitRecord) -> dict:
    return {
        "id": record.id,
        "name": record.name,
        "description": record.description,
        "type": record.kind,
        "status": record.status,
        "schedule": record.schedule,
        "cue": (
            {"id": record.cue_id, "description": record.cue}
            if record.cue is not None else None
        ),
        "note_name": record.note_name,
        "quantity": record.quantity,
        "completion_records": dict(record.completion_records or {}),
        "progress_records": dict(record.progress_records or {}),
    }


class SqlHabitRepository:
    """HabitRepository backed by the `habits` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, habit: Habit) -> None:
        if await self.exists(habit.id):
            raise HabitAlreadyExistsError(habit.id)
        record = HabitRecord(id=habit.id)
        _apply_snapshot(record, habit_to_snapshot(habit))
        self.db.add(record)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise HabitAlreadyExistsError(habit.id)
        logger.debug("Habit row inserted", extra={"habit_id": habit.id})

    async def find_by_id(self, habit_id: str) -> Habit | None:
        record = await self.db.get(HabitRecord, habit_id)
        if record is None:
            return None
        return habit_from_snapshot(_record_to_snapshot(record))

    async def update(self, habit: Habit) -> None:
        record = await self.db.get(HabitRecord, habit.id)
        if record is None:
            raise ResourceNotFoundError("Habit", habit.id)
        _apply_snapshot(record, habit_to_snapshot(habit))
        record.updated_at = datetime.now(timezone.utc)
        await self.db.commit()

    async def delete(self, habit_id: str) -> bool:
        record = await self.db.get(HabitRecord, habit_id)
        if record is None:
            return False
        await self.db.delete(record)
        await self.db.commit()
        return True

    async def exists(self, habit_id: str) -> bool:
        result = await self.db.execute(
            select(HabitRecord.id).where(HabitRecord.id == habit_id),
        )
        return result.scalar_one_or_none() is not None
