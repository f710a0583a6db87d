"""In-Memory Habit Repository — dict-backed HabitRepository for tests and local runs.

Invariants:
    - Stores snapshots, not entities: callers never share state with the store
    - save() rejects existing ids; update() rejects unknown ids

Design Decisions:
    - Snapshot round-trip on every read/write: same mapper as the SQL adapter,
      so both adapters restore entities the same way
"""

from habit_tracking.core.errors import HabitAlreadyExistsError, ResourceNotFoundError
from habit_tracking.core.habit import Habit
from habit_tracking.core.habit_snapshot import habit_from_snapshot, habit_to_snapshot


class InMemoryHabitRepository:
    """HabitRepository over a process-local dict."""

    def __init__(self):
        self._habits: dict[str, dict] = {}

    async def save(self, habit: Habit) -> None:
        if habit.id in self._habits:
            raise HabitAlreadyExistsError(habit.id)
        self._habits[habit.id] = habit_to_snapshot(habit)

    async def find_by_id(self, habit_id: str) -> Habit | None:
        snapshot = self._habits.get(habit_id)
        return habit_from_snapshot(snapshot) if snapshot else None

    async def update(self, habit: Habit) -> None:
        if habit.id not in self._habits:
            raise ResourceNotFoundError("Habit", habit.id)
        self._habits[habit.id] = habit_to_snapshot(habit)

    async def delete(self, habit_id: str) -> bool:
        return self._habits.pop(habit_id, None) is not None

    async def exists(self, habit_id: str) -> bool:
        return habit_id in self._habits

    # Test helpers
    def clear(self) -> None:
        self._habits.clear()

    def count(self) -> int:
        return len(self._habits)
