"""Habit service: user-scoped reads through the cache, mutations against the store."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Iterable, Mapping

from ..devtools import dev_log
from ..domain.repositories import HabitStore
from ..errors import MutationError
from ..forms import HabitForm
from ..logging_config import get_logger
from ..models.habit import Habit
from . import days
from .cache import QueryCache, completions_key, habits_key
from .days import format_day
from .reconcile import SelectionPlan, is_completed_on, plan_selection_change, plan_toggle

logger = get_logger(__name__)


def compute_streaks(completed: Iterable[date], *, today: date | None = None) -> tuple[int, int]:
    """Return (current_streak, longest_streak) from completion days."""

    today = today or days.today()
    done = set(completed)

    # Current streak: walk backwards from today until a gap.
    current = 0
    cursor = today
    while cursor in done:
        current += 1
        cursor -= timedelta(days=1)

    # Longest streak: sweep sorted days counting consecutive runs.
    longest = 0
    run = 0
    last_day: date | None = None
    for day in sorted(done):
        if last_day is not None and day == last_day + timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = day

    return current, longest


class HabitService:
    """Operations behind the habit list and habit cards for one signed-in user."""

    def __init__(self, store: HabitStore, cache: QueryCache, user_id: str, *, config=None):
        self.store = store
        self.cache = cache
        self.user_id = user_id
        self.config = config

    # Habits

    def list_habits(self) -> list[Habit]:
        """Habits owned by the current user, ordered by id."""
        return list(self.cache.get_or_fetch(habits_key(self.user_id), self._fetch_habits))

    def _fetch_habits(self) -> list[Habit]:
        rows = self.store.list_habits(self.user_id)
        owned = [habit for habit in rows if habit.user_id == self.user_id]
        if len(owned) != len(rows):
            logger.warning(
                "Dropped habits owned by another user",
                extra={"user_id": self.user_id, "dropped": len(rows) - len(owned)},
            )
        return sorted(owned, key=lambda habit: habit.id or 0)

    def create_habit(self, form: HabitForm | Mapping[str, Any]) -> Habit:
        """Validate and insert a habit; raises pydantic ``ValidationError`` on bad input."""
        if not isinstance(form, HabitForm):
            form = HabitForm.model_validate(dict(form))
        created = self.store.create_habit(form.title, self.user_id)
        self.cache.update(
            habits_key(self.user_id),
            lambda habits: sorted([*habits, created], key=lambda habit: habit.id or 0),
        )
        logger.info("Habit created", extra={"habit_id": created.id})
        dev_log(self.config, "Habit created", context={"title": created.title})
        return created

    def delete_habit(self, habit_id: int) -> None:
        self.store.delete_habit(habit_id, self.user_id)
        self.cache.update(
            habits_key(self.user_id),
            lambda habits: [habit for habit in habits if habit.id != habit_id],
        )
        self.cache.invalidate(completions_key(habit_id))
        logger.info("Habit deleted", extra={"habit_id": habit_id})

    # Completions

    def completions(self, habit_id: int) -> list[date]:
        """Completed days for a habit, ascending. Raises ``FetchError``."""
        return list(
            self.cache.get_or_fetch(
                completions_key(habit_id), lambda: self._fetch_completions(habit_id)
            )
        )

    def confirmed_completions(self, habit_id: int) -> list[date] | None:
        """Last server-confirmed completion days without touching the store."""
        cached = self.cache.peek(completions_key(habit_id))
        return None if cached is None else list(cached)

    def _fetch_completions(self, habit_id: int) -> list[date]:
        rows = self.store.list_completions(habit_id, self.user_id)
        return sorted({row.completed_at for row in rows})

    def is_completed_today(self, habit_id: int, *, today: date | None = None) -> bool:
        return is_completed_on(self.completions(habit_id), today or days.today())

    def streaks(self, habit_id: int, *, today: date | None = None) -> tuple[int, int]:
        return compute_streaks(self.completions(habit_id), today=today)

    def apply_plan(self, habit_id: int, plan: SelectionPlan) -> list[date]:
        """Issue the plan's deletes then inserts, folding each server response into the cache.

        Stops at the first failure; mutations already confirmed stay applied.
        """
        key = completions_key(habit_id)
        for day in plan.deletes:
            removed = self.store.delete_completion(habit_id, self.user_id, day)
            gone = {format_day(row.completed_at) for row in removed} | {format_day(day)}
            self.cache.update(key, lambda current: [d for d in current if format_day(d) not in gone])
            logger.info("Completion removed", extra={"habit_id": habit_id, "day": format_day(day)})
        for day in plan.inserts:
            row = self.store.insert_completion(habit_id, self.user_id, day)
            self.cache.update(key, lambda current: sorted({*current, row.completed_at}))
            logger.info("Completion added", extra={"habit_id": habit_id, "day": format_day(day)})
        return self.completions(habit_id)

    def toggle_today(self, habit_id: int, *, today: date | None = None) -> list[date]:
        plan = plan_toggle(today or days.today(), self.completions(habit_id))
        return self.apply_plan(habit_id, plan)


class CompletionSelection:
    """Rendered calendar selection for one habit card.

    Seeded from the completion set, updated optimistically on user input and
    reverted to the last confirmed completions when a mutation fails.
    """

    def __init__(self, service: HabitService, habit_id: int):
        self.service = service
        self.habit_id = habit_id
        self.selection: list[date] = []

    def sync(self) -> list[date]:
        self.selection = self.service.completions(self.habit_id)
        return self.selection

    def change(self, new: list[date]) -> SelectionPlan:
        """Reconcile a calendar change from the current selection to ``new``."""
        plan = plan_selection_change(
            self.selection, new, self.service.completions(self.habit_id)
        )
        self._apply(plan)
        return plan

    def toggle_today(self, *, today: date | None = None) -> SelectionPlan:
        plan = plan_toggle(today or days.today(), self.service.completions(self.habit_id))
        self._apply(plan)
        return plan

    def _apply(self, plan: SelectionPlan) -> None:
        previous = list(self.selection)
        self.selection = list(plan.selection)
        if plan.is_noop:
            return
        try:
            self.selection = self.service.apply_plan(self.habit_id, plan)
        except MutationError as exc:
            confirmed = self.service.confirmed_completions(self.habit_id)
            self.selection = previous if confirmed is None else confirmed
            logger.error(
                "Completion update failed, selection reverted",
                extra={"habit_id": self.habit_id, "operation": exc.operation},
                exc_info=True,
            )
            raise


__all__ = ["CompletionSelection", "HabitService", "compute_streaks"]
