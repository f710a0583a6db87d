"""Repository Factory — selects the HabitRepository adapter from settings.

Invariants:
    - "memory" always returns the same process-wide InMemoryHabitRepository
    - "sql" wraps a request-scoped AsyncSession; one repository per request

Design Decisions:
    - Module-level memory repository: deliberate global, single-process only,
      contents lost on restart
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from habit_tracking.config import get_settings
from habit_tracking.core.repository_protocols import HabitRepository
from habit_tracking.infrastructure import database
from habit_tracking.infrastructure.in_memory_habit_repository import InMemoryHabitRepository
from habit_tracking.infrastructure.sql_habit_repository import SqlHabitRepository

memory_habit_repository = InMemoryHabitRepository()


def create_habit_repository(
    kind: str, db: AsyncSession | None = None,
) -> HabitRepository:
    if kind == "memory":
        return memory_habit_repository
    if db is None:
        raise RuntimeError("SQL habit repository requires a database session")
    return SqlHabitRepository(db)


async def get_habit_repository() -> AsyncGenerator[HabitRepository, None]:
    """FastAPI dependency — repository chosen by settings.habit_repository."""
    settings = get_settings()
    if not settings.uses_sql:
        yield create_habit_repository(settings.habit_repository)
        return
    if not database.db_manager:
        raise RuntimeError("Database not initialized")
    async with database.db_manager.session() as db:
        yield create_habit_repository(settings.habit_repository, db)
