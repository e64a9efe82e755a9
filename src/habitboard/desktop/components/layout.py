"""Layout components for the desktop app."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import flet as ft

from ..navigation import LOGIN_ROUTE

if TYPE_CHECKING:
    from ..context import AppContext


def build_app_bar(ctx: AppContext, title: str, page: ft.Page) -> ft.AppBar:
    """Build the app bar with refresh and sign-out actions."""

    def _logout(_e):
        ctx.sign_out()
        page.go(LOGIN_ROUTE)

    def _refresh(_e):
        # Drop cached reads and rebuild the current view from the store
        ctx.cache.clear()
        page.go(getattr(page, "route", None) or "/habits")
        page.update()

    actions: List[ft.Control] = [
        ft.IconButton(icon=ft.Icons.REFRESH, tooltip="Refresh", on_click=_refresh),
    ]
    if ctx.current_user:
        actions.extend(
            [
                ft.Chip(
                    label=ft.Text(ctx.current_user.email),
                    leading=ft.Icon(ft.Icons.PERSON),
                ),
                ft.IconButton(icon=ft.Icons.LOGOUT, tooltip="Sign out", on_click=_logout),
            ]
        )

    return ft.AppBar(
        leading=ft.Icon(ft.Icons.CHECK_CIRCLE_OUTLINE),
        title=ft.Text(title, size=20, weight=ft.FontWeight.BOLD),
        center_title=False,
        bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
        actions=actions,
    )


def empty_state(title: str, message: str, icon: str = ft.Icons.CHECK_CIRCLE_OUTLINE) -> ft.Container:
    return ft.Container(
        content=ft.Column(
            controls=[
                ft.Icon(icon, size=64, color=ft.Colors.ON_SURFACE_VARIANT),
                ft.Text(title, size=20, weight=ft.FontWeight.BOLD),
                ft.Text(message, color=ft.Colors.ON_SURFACE_VARIANT),
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        ),
        padding=24,
    )
