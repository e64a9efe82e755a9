"""Habit store protocol."""

from __future__ import annotations

from datetime import date
from typing import Protocol

from ...models.habit import Habit, HabitCompletion


class HabitStore(Protocol):
    """Storage for habits and their completions, scoped by owning user.

    Reads raise ``FetchError`` and writes raise ``MutationError`` when the
    backend rejects the call.
    """

    def list_habits(self, user_id: str) -> list[Habit]:
        """List habits owned by ``user_id`` ordered by id."""
        ...

    def create_habit(self, title: str, user_id: str) -> Habit:
        """Insert a habit and return the stored row."""
        ...

    def delete_habit(self, habit_id: int, user_id: str) -> None:
        """Delete a habit by id."""
        ...

    def list_completions(self, habit_id: int, user_id: str) -> list[HabitCompletion]:
        """List completion rows for one habit."""
        ...

    def insert_completion(self, habit_id: int, user_id: str, day: date) -> HabitCompletion:
        """Mark ``day`` complete and return the stored row."""
        ...

    def delete_completion(self, habit_id: int, user_id: str, day: date) -> list[HabitCompletion]:
        """Unmark ``day`` and return the rows removed."""
        ...
