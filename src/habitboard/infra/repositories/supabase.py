"""Habit store backed by Supabase tables.

Row-level security on the hosted project restricts rows to the signed-in user;
every query still filters on ``user_id`` so the client never relies on it alone.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, TypeVar

import httpx
from supabase import Client, PostgrestAPIError

from ...config import BaseConfig
from ...errors import FetchError, MutationError
from ...logging_config import get_logger
from ...models.habit import Habit, HabitCompletion
from ...services.days import format_day, parse_day

logger = get_logger(__name__)

T = TypeVar("T")

_BACKEND_ERRORS = (PostgrestAPIError, httpx.HTTPError)


def _error_message(exc: Exception) -> str:
    message = getattr(exc, "message", None)
    return str(message) if message else str(exc)


def habit_from_row(row: dict[str, Any]) -> Habit:
    return Habit(id=int(row["id"]), user_id=str(row["user_id"]), title=str(row["title"]))


def completion_from_row(row: dict[str, Any]) -> HabitCompletion:
    return HabitCompletion(
        habit_id=int(row["habit_id"]),
        user_id=str(row["user_id"]),
        completed_at=parse_day(row["completed_at"]),
    )


class SupabaseHabitStore:
    """Pass-through CRUD against the ``habits`` and ``habit_completions`` tables."""

    def __init__(
        self,
        client: Client,
        *,
        habits_table: str = BaseConfig.HABITS_TABLE,
        completions_table: str = BaseConfig.COMPLETIONS_TABLE,
    ):
        self.client = client
        self.habits_table = habits_table
        self.completions_table = completions_table

    def _fetch(self, resource: str, call: Callable[[], T]) -> T:
        try:
            return call()
        except _BACKEND_ERRORS as exc:
            logger.error("Supabase read failed", extra={"resource": resource}, exc_info=True)
            raise FetchError(_error_message(exc), resource=resource) from exc

    def _mutate(self, operation: str, call: Callable[[], T]) -> T:
        try:
            return call()
        except _BACKEND_ERRORS as exc:
            logger.error("Supabase write failed", extra={"operation": operation}, exc_info=True)
            raise MutationError(operation, _error_message(exc)) from exc

    def list_habits(self, user_id: str) -> list[Habit]:
        response = self._fetch(
            self.habits_table,
            lambda: self.client.table(self.habits_table)
            .select("*")
            .eq("user_id", user_id)
            .order("id")
            .execute(),
        )
        return [habit_from_row(row) for row in response.data or []]

    def create_habit(self, title: str, user_id: str) -> Habit:
        response = self._mutate(
            "create habit",
            lambda: self.client.table(self.habits_table)
            .insert({"title": title, "user_id": user_id})
            .execute(),
        )
        if not response.data:
            raise MutationError("create habit", "backend returned no row")
        return habit_from_row(response.data[0])

    def delete_habit(self, habit_id: int, user_id: str) -> None:
        self._mutate(
            "delete habit",
            lambda: self.client.table(self.habits_table)
            .delete()
            .eq("id", habit_id)
            .eq("user_id", user_id)
            .execute(),
        )

    def list_completions(self, habit_id: int, user_id: str) -> list[HabitCompletion]:
        response = self._fetch(
            self.completions_table,
            lambda: self.client.table(self.completions_table)
            .select("habit_id, user_id, completed_at")
            .eq("habit_id", habit_id)
            .eq("user_id", user_id)
            .order("completed_at")
            .execute(),
        )
        return [completion_from_row(row) for row in response.data or []]

    def insert_completion(self, habit_id: int, user_id: str, day: date) -> HabitCompletion:
        payload = {"habit_id": habit_id, "user_id": user_id, "completed_at": format_day(day)}
        response = self._mutate(
            "insert completion",
            lambda: self.client.table(self.completions_table).insert(payload).execute(),
        )
        if not response.data:
            raise MutationError("insert completion", "backend returned no row")
        return completion_from_row(response.data[0])

    def delete_completion(self, habit_id: int, user_id: str, day: date) -> list[HabitCompletion]:
        match = {"user_id": user_id, "habit_id": habit_id, "completed_at": format_day(day)}
        response = self._mutate(
            "delete completion",
            lambda: self.client.table(self.completions_table).delete().match(match).execute(),
        )
        return [completion_from_row(row) for row in response.data or []]
