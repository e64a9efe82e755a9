"""Main Flet desktop application entry point."""

from __future__ import annotations

import flet as ft

from ..devtools import dev_log
from ..logging_config import session_log_path, setup_logging
from .context import create_app_context
from .navigation import HOME_ROUTE, LOGIN_ROUTE, Router
from .views.auth import build_auth_view
from .views.habits import build_habits_view


def main(page: ft.Page) -> None:
    """Main entry point for the Flet desktop app."""

    ctx = create_app_context()

    logger = setup_logging(ctx.config)
    logger.info("HabitBoard desktop application starting", extra={"backend": ctx.config.BACKEND})

    def on_page_close(_):
        slp = session_log_path()
        logger.info("Application closing", extra={"session_log": str(slp) if slp else None})

    page.on_close = on_page_close

    ctx.page = page
    page.title = "HabitBoard (DEV)" if ctx.dev_mode else "HabitBoard"
    if ctx.dev_mode:
        dev_log(ctx.config, "Dev mode enabled", context={"data_dir": ctx.config.DATA_DIR})
    page.theme_mode = ft.ThemeMode.LIGHT
    page.padding = 0
    page.window_width = 960
    page.window_height = 900
    page.window_min_width = 480
    page.window_min_height = 600

    router = Router(page, ctx)
    for route, builder in {
        LOGIN_ROUTE: build_auth_view,
        HOME_ROUTE: build_habits_view,
        "/": build_habits_view,
    }.items():
        router.register(route, builder)

    page.on_route_change = router.route_change
    page.on_view_pop = router.view_pop

    def _on_error(e: ft.ControlEvent):  # pragma: no cover (UI callback)
        logger.error("Flet page error", extra={"data": getattr(e, "data", None)})

    page.on_error = _on_error

    page.go(HOME_ROUTE if ctx.current_user is not None else LOGIN_ROUTE)


def run() -> None:
    """Console-script entry point."""
    ft.app(target=main)


if __name__ == "__main__":
    run()
