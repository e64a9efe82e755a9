"""Navigation and routing for the Flet desktop app."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict

import flet as ft

from ..devtools import dev_log
from ..logging_config import get_logger

if TYPE_CHECKING:
    from .context import AppContext

logger = get_logger(__name__)

LOGIN_ROUTE = "/login"
HOME_ROUTE = "/habits"

# View builder type
ViewBuilder = Callable[["AppContext", ft.Page], ft.View]


class Router:
    """Handles routing and navigation for the Flet app."""

    def __init__(self, page: ft.Page, context: AppContext):
        self.page = page
        self.context = context
        self.routes: Dict[str, ViewBuilder] = {}

    def register(self, route: str, builder: ViewBuilder) -> None:
        logger.debug(f"Registering route: {route}")
        self.routes[route] = builder

    def resolve(self, route: str | None) -> str:
        """Map a requested route to the one that will actually be shown."""
        route = route or "/"
        if route != LOGIN_ROUTE and self.context.current_user is None:
            return LOGIN_ROUTE
        if route not in self.routes:
            logger.warning(f"Route not registered: {route}, defaulting to {HOME_ROUTE}")
            return HOME_ROUTE
        return route

    def route_change(self, e: ft.RouteChangeEvent) -> None:
        """Handle route change events."""
        requested = e.route or "/"
        route = self.resolve(requested)
        logger.info(
            f"Route change requested: {requested}",
            extra={"user_id": self.context.current_user.user_id if self.context.current_user else None},
        )
        if route != requested and route == LOGIN_ROUTE:
            logger.warning("Route blocked - user not signed in")
            self.page.go(LOGIN_ROUTE)
            return

        builder = self.routes.get(route)
        if builder is None:
            logger.error(f"No builder found for route: {route}")
            return

        try:
            view = builder(self.context, self.page)
            if self.page.views:
                self.page.views[-1] = view
            else:
                self.page.views.append(view)
            self.page.update()
            logger.info(f"Loaded view for route: {route}")
        except Exception as ex:
            logger.error(f"Failed to build view for route {route}: {ex}", exc_info=True)
            dev_log(self.context.config, "Route load failed", exc=ex, context={"route": route})
            self.show_error(f"Error loading view: {ex}")

    def view_pop(self, e: ft.ViewPopEvent) -> None:
        """Handle back button navigation."""
        if len(self.page.views) > 1:
            self.page.views.pop()
        top_view = self.page.views[-1]
        self.page.go(top_view.route)

    def show_error(self, message: str) -> None:
        dialog = ft.AlertDialog(
            title=ft.Text("Error"),
            content=ft.Text(message),
            actions=[ft.TextButton("OK", on_click=lambda _: self.close_dialog(dialog))],
        )
        self.page.dialog = dialog
        dialog.open = True
        self.page.update()

    def close_dialog(self, dialog: ft.AlertDialog) -> None:
        dialog.open = False
        self.page.update()
