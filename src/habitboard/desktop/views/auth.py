"""Authentication view for user sign-in."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from ...logging_config import get_logger
from ...services.auth import LocalAuth
from ..navigation import HOME_ROUTE, LOGIN_ROUTE

if TYPE_CHECKING:  # pragma: no cover
    from ..context import AppContext

logger = get_logger(__name__)


def build_auth_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build login view with email and password fields."""

    if ctx.current_user is not None:
        page.go(HOME_ROUTE)
        return ft.View(
            route=LOGIN_ROUTE,
            controls=[ft.Container(content=ft.Text("Redirecting..."), padding=20)],
            padding=0,
        )

    email_field = ft.TextField(label="Email", autofocus=True, width=300)
    password_field = ft.TextField(
        label="Password",
        password=True,
        can_reveal_password=True,
        width=300,
    )
    error_text = ft.Text("", color=ft.Colors.ERROR, visible=False)

    def _show_error(message: str) -> None:
        error_text.value = message
        error_text.visible = True
        page.update()

    def do_login(_e) -> None:
        error_text.visible = False
        email = (email_field.value or "").strip()
        password = password_field.value or ""
        if not email or not password:
            _show_error("Email and password are required")
            return

        session = ctx.auth.sign_in(email, password)
        if session is None:
            _show_error("Invalid email or password")
            return
        ctx.sign_in(session)
        page.go(HOME_ROUTE)

    def use_local_profile(_e) -> None:
        ctx.sign_in(ctx.auth.sign_in_local())  # type: ignore[attr-defined]
        page.go(HOME_ROUTE)

    password_field.on_submit = do_login

    controls: list[ft.Control] = [
        ft.Text("HabitBoard", size=28, weight=ft.FontWeight.BOLD),
        ft.Text("Sign in to track your habits", color=ft.Colors.ON_SURFACE_VARIANT),
        email_field,
        password_field,
        error_text,
        ft.FilledButton("Sign in", on_click=do_login, width=300),
    ]
    if isinstance(ctx.auth, LocalAuth):
        controls.append(ft.TextButton("Continue offline", on_click=use_local_profile))

    return ft.View(
        route=LOGIN_ROUTE,
        controls=[
            ft.Container(
                content=ft.Column(
                    controls=controls,
                    horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                    spacing=12,
                ),
                alignment=ft.alignment.center,
                expand=True,
            )
        ],
        padding=0,
    )
