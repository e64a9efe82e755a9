"""Habit list view: every habit of the signed-in user as a card."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from ...errors import FetchError
from ...logging_config import get_logger
from ...services import days
from ..components import HabitCard, build_app_bar, empty_state
from ..components.dialogs import show_habit_dialog
from ..navigation import HOME_ROUTE

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)


def build_habits_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the habits dashboard."""

    service = ctx.habit_service()
    habit_list = ft.Column(spacing=8)
    cards: dict[int, HabitCard] = {}

    def refresh_habit_list() -> None:
        try:
            habits = service.list_habits()
        except FetchError as exc:
            logger.error("Could not load habits", exc_info=True)
            habit_list.controls = [
                ft.Text(f"Could not load habits: {exc.message}", color=ft.Colors.ERROR),
                ft.TextButton("Try again", on_click=lambda _e: refresh_habit_list()),
            ]
            page.update()
            return

        today = days.today()
        cards.clear()
        for habit in habits:
            cards[habit.id] = HabitCard(
                page,
                service,
                habit,
                on_deleted=lambda _hid: refresh_habit_list(),
                today=today,
            )
        if cards:
            habit_list.controls = [card.control for card in cards.values()]
        else:
            habit_list.controls = [
                empty_state("No habits yet", "Create your first habit to start tracking")
            ]
        page.update()

    refresh_habit_list()

    content = ft.Column(
        controls=[
            ft.Row(
                controls=[
                    ft.Text("Habits", size=24, weight=ft.FontWeight.BOLD),
                    ft.Text(
                        days.today().strftime("%A, %B %d, %Y"),
                        color=ft.Colors.ON_SURFACE_VARIANT,
                    ),
                    ft.FilledButton(
                        "Create Habit",
                        icon=ft.Icons.ADD,
                        on_click=lambda _e: show_habit_dialog(
                            page, service, on_save_callback=lambda _h: refresh_habit_list()
                        ),
                    ),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            ft.Container(height=8),
            habit_list,
            ft.Container(height=40),
        ],
        expand=True,
        scroll=ft.ScrollMode.AUTO,
    )

    view = ft.View(
        route=HOME_ROUTE,
        appbar=build_app_bar(ctx, "HabitBoard", page),
        controls=[ft.Container(content=content, padding=16, expand=True)],
        padding=0,
    )
    # Exposed for tests and for the app shell
    view.data = {"cards": cards, "refresh": refresh_habit_list}
    return view
