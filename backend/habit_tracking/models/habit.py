"""Habit ORM — persistence shape of the Habit entity.

Invariants:
    - id is the domain-assigned UUID string (never generated by the database)
    - schedule, quantity and the two day maps are stored as JSON, mirroring
      habit_to_snapshot() field-for-field
    - kind/status stored as their enum .value strings

Design Decisions:
    - JSON columns for day maps: one row per habit, no per-day join table
      (the day maps are always loaded and saved whole)
    - updated_at touched on every update() for optimistic-concurrency callers
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from habit_tracking.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HabitRecord(Base):
    """Stored habit row."""
    __tablename__ = "habits"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="active", index=True,
    )
    schedule: Mapped[dict] = mapped_column(JSON, nullable=False)
    cue: Mapped[str | None] = mapped_column(String(500), nullable=True)
    cue_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    note_name: Mapped[str | None] = mapped_column(String(500), nullable=True)
    quantity: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    completion_records: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict,
    )
    progress_records: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
