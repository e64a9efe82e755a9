"""Create-habit dialog.

The title is validated before submission; once valid the dialog closes and
clears whether or not the insert succeeds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional

import flet as ft

from ....errors import MutationError
from ....forms import TITLE_MAX_LENGTH, HabitForm, parse_habit_form
from ....logging_config import get_logger
from ....models.habit import Habit
from ..feedback import show_snack

if TYPE_CHECKING:
    from ....services.habits import HabitService

logger = get_logger(__name__)


def submit_habit(
    page: ft.Page,
    service: HabitService,
    form: HabitForm,
    on_save_callback: Optional[Callable[[Habit], None]] = None,
) -> Optional[Habit]:
    """Insert the habit, reporting failure with a Retry action."""

    try:
        created = service.create_habit(form)
    except MutationError as exc:
        logger.error(f"Failed to create habit: {exc}", exc_info=True)
        show_snack(
            page,
            f"Could not create habit: {exc.message}",
            error=True,
            retry=lambda: submit_habit(page, service, form, on_save_callback),
        )
        return None
    show_snack(page, f"Habit '{created.title}' created")
    if on_save_callback:
        on_save_callback(created)
    return created


def show_habit_dialog(
    page: ft.Page,
    service: HabitService,
    on_save_callback: Optional[Callable[[Habit], None]] = None,
) -> ft.AlertDialog:
    """Open the create-habit dialog and return it."""

    title_field = ft.TextField(
        label="Title",
        hint_text="e.g., Exercise, Read, Meditate",
        autofocus=True,
        max_length=TITLE_MAX_LENGTH,
        width=400,
    )

    def _close() -> None:
        title_field.value = ""
        title_field.error_text = None
        dialog.open = False
        page.update()

    def _submit(_e) -> None:
        form, errors = parse_habit_form({"title": title_field.value or ""})
        if form is None:
            title_field.error_text = "; ".join(errors.get("title", ["Invalid title"]))
            page.update()
            return
        _close()
        submit_habit(page, service, form, on_save_callback)

    title_field.on_submit = _submit

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text("Create New Habit"),
        content=ft.Column(controls=[title_field], tight=True, width=420),
        actions=[
            ft.TextButton("Cancel", on_click=lambda _e: _close()),
            ft.FilledButton("Add", on_click=_submit),
        ],
    )

    page.dialog = dialog
    dialog.open = True
    page.update()
    return dialog
