"""Snack bar helpers for surfacing results and failures."""

from __future__ import annotations

from typing import Callable, Optional

import flet as ft


def show_snack(
    page: ft.Page,
    message: str,
    *,
    error: bool = False,
    retry: Optional[Callable[[], None]] = None,
) -> ft.SnackBar:
    """Display a snack bar; ``retry`` adds a Retry action that re-runs the failed call."""

    snack = ft.SnackBar(
        content=ft.Text(message),
        bgcolor=ft.Colors.ERROR if error else None,
        action="Retry" if retry else None,
        on_action=(lambda _e: retry()) if retry else None,
    )
    page.snack_bar = snack
    snack.open = True
    page.update()
    return snack
