"""Habit card: today toggle, delete action and completion calendar."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Callable, Optional

import flet as ft

from ...errors import FetchError, MutationError
from ...logging_config import get_logger
from ...models.habit import Habit
from ...services import days
from ...services.habits import CompletionSelection, compute_streaks
from ...services.reconcile import is_completed_on
from .calendar import MultiDateCalendar
from .feedback import show_snack

if TYPE_CHECKING:
    from ...services.habits import HabitService

logger = get_logger(__name__)


class HabitCard:
    """One habit on the dashboard.

    The card owns the calendar selection for its habit and keeps it in step
    with the completion set after every mutation.
    """

    def __init__(
        self,
        page: ft.Page,
        service: HabitService,
        habit: Habit,
        *,
        on_deleted: Optional[Callable[[int], None]] = None,
        today: date | None = None,
    ):
        self.page = page
        self.service = service
        self.habit = habit
        self.on_deleted = on_deleted
        self.today = today or days.today()
        self.selection = CompletionSelection(service, habit.id)
        self.error: FetchError | None = None

        self.complete_button = ft.ElevatedButton(
            "Complete",
            icon=ft.Icons.CHECK,
            on_click=lambda _e: self.toggle_today(),
        )
        self.delete_button = ft.ElevatedButton(
            "Delete",
            icon=ft.Icons.DELETE_OUTLINE,
            color=ft.Colors.WHITE,
            bgcolor=ft.Colors.RED,
            on_click=lambda _e: self.delete(),
        )
        self.streak_text = ft.Text("", size=12, color=ft.Colors.ON_SURFACE_VARIANT)
        self.calendar = MultiDateCalendar(on_change=self.on_calendar_change, today=self.today)
        self.body = ft.Column(spacing=8)
        self.control = ft.Card(
            content=ft.Container(
                content=ft.Column(
                    controls=[
                        ft.Row(
                            controls=[
                                ft.Column(
                                    controls=[
                                        ft.Text(habit.title, size=16, weight=ft.FontWeight.BOLD),
                                        self.streak_text,
                                    ],
                                    spacing=2,
                                    expand=True,
                                ),
                                self.complete_button,
                                self.delete_button,
                            ],
                            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                        ),
                        self.body,
                    ],
                    spacing=8,
                ),
                padding=12,
            ),
        )
        self.load()

    @property
    def completed_today(self) -> bool:
        return is_completed_on(self.selection.selection, self.today)

    def load(self) -> None:
        """Fetch completions and seed the calendar; fetch failures render in place."""
        try:
            self.selection.sync()
            self.error = None
        except FetchError as exc:
            logger.error(
                "Could not load completions",
                extra={"habit_id": self.habit.id, "resource": exc.resource},
                exc_info=True,
            )
            self.error = exc
        self._render()

    def _render(self) -> None:
        if self.error is not None:
            self.body.controls = [
                ft.Text(f"Could not load completions: {self.error.message}", color=ft.Colors.ERROR),
                ft.TextButton("Try again", on_click=lambda _e: self.load()),
            ]
            self.complete_button.disabled = True
        else:
            self.calendar.set_value(self.selection.selection)
            self.body.controls = [self.calendar.control]
            self.complete_button.disabled = False
        done = self.error is None and self.completed_today
        self.complete_button.text = "Completed" if done else "Complete"
        self.complete_button.bgcolor = ft.Colors.GREEN if done else ft.Colors.BLUE
        self.complete_button.color = ft.Colors.WHITE
        current, longest = compute_streaks(self.selection.selection, today=self.today)
        self.streak_text.value = f"Current streak: {current} · Longest: {longest}"
        if getattr(self.control, "page", None):
            self.control.update()

    def _run(self, action: Callable[[], object], failure: str) -> None:
        try:
            action()
        except MutationError as exc:
            show_snack(
                self.page,
                f"{failure}: {exc.message}",
                error=True,
                retry=lambda: self._run(action, failure),
            )
        except FetchError as exc:
            self.error = exc
        self._render()

    def toggle_today(self) -> None:
        self._run(
            lambda: self.selection.toggle_today(today=self.today),
            "Could not update today's completion",
        )

    def on_calendar_change(self, new: list[date]) -> None:
        self._run(lambda: self.selection.change(new), "Could not update completions")

    def delete(self) -> None:
        try:
            self.service.delete_habit(self.habit.id)
        except MutationError as exc:
            show_snack(
                self.page,
                f"Could not delete '{self.habit.title}': {exc.message}",
                error=True,
                retry=self.delete,
            )
            return
        show_snack(self.page, f"Habit '{self.habit.title}' deleted")
        if self.on_deleted is not None:
            self.on_deleted(self.habit.id)
