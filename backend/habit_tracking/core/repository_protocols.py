"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Repositories receive fully validated Habit entities
    - Implementations copy day maps on save and load (never alias)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the core functions that
      produce the entities are never async — the shell orchestrates the calls
"""

from typing import Protocol

from habit_tracking.core.habit import Habit


class HabitRepository(Protocol):
    """Contract for habit persistence — implemented by shell."""

    async def save(self, habit: Habit) -> None:
        """Insert. Raises HabitAlreadyExistsError if the id is already stored."""
        ...

    async def find_by_id(self, habit_id: str) -> Habit | None: ...

    async def update(self, habit: Habit) -> None:
        """Replace. Raises ResourceNotFoundError if the id is not stored."""
        ...

    async def delete(self, habit_id: str) -> bool: ...

    async def exists(self, habit_id: str) -> bool: ...
