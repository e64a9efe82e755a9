"""Month calendar with multi-date selection."""

from __future__ import annotations

import calendar
from datetime import date
from typing import Callable, Iterable, Optional

import flet as ft

from ...services import days

CELL_SIZE = 34


def _shift_month(first: date, offset: int) -> date:
    index = first.year * 12 + (first.month - 1) + offset
    return date(index // 12, index % 12 + 1, 1)


class MultiDateCalendar:
    """Controlled multi-select calendar.

    Clicking a day reports the proposed selection to ``on_change``: a selected day
    is removed, an unselected day is appended to the end. The owner decides what
    is actually shown by calling :meth:`set_value`.
    """

    def __init__(
        self,
        value: Iterable[date] = (),
        on_change: Optional[Callable[[list[date]], None]] = None,
        *,
        month: date | None = None,
        first_weekday: int = calendar.SUNDAY,
        today: date | None = None,
    ):
        self.value: list[date] = list(value)
        self.on_change = on_change
        self.today = today or days.today()
        self.month = (month or self.today).replace(day=1)
        self._calendar = calendar.Calendar(firstweekday=first_weekday)
        self._title = ft.Text("", weight=ft.FontWeight.BOLD)
        self._weeks = ft.Column(spacing=2)
        weekday_names = [calendar.day_abbr[(first_weekday + i) % 7][:2] for i in range(7)]
        self.control = ft.Column(
            controls=[
                ft.Row(
                    controls=[
                        ft.IconButton(
                            icon=ft.Icons.CHEVRON_LEFT,
                            tooltip="Previous month",
                            on_click=lambda _e: self.show_month(-1),
                        ),
                        self._title,
                        ft.IconButton(
                            icon=ft.Icons.CHEVRON_RIGHT,
                            tooltip="Next month",
                            on_click=lambda _e: self.show_month(1),
                        ),
                    ],
                    alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                    width=CELL_SIZE * 7 + 12,
                ),
                ft.Row(
                    controls=[
                        ft.Container(
                            content=ft.Text(name, size=11, color=ft.Colors.ON_SURFACE_VARIANT),
                            width=CELL_SIZE,
                            alignment=ft.alignment.center,
                        )
                        for name in weekday_names
                    ],
                    spacing=2,
                ),
                self._weeks,
            ],
            spacing=4,
        )
        self._render()

    def is_selected(self, day: date) -> bool:
        return days.format_day(day) in days.day_keys(self.value)

    def proposed_selection(self, day: date) -> list[date]:
        """Selection that results from clicking ``day``."""
        key = days.format_day(day)
        if self.is_selected(day):
            return [d for d in self.value if days.format_day(d) != key]
        return [*self.value, day]

    def click(self, day: date) -> None:
        proposed = self.proposed_selection(day)
        if self.on_change is not None:
            self.on_change(proposed)
        else:
            self.set_value(proposed)

    def set_value(self, value: Iterable[date]) -> None:
        self.value = list(value)
        self._render()

    def show_month(self, offset: int) -> None:
        self.month = _shift_month(self.month, offset)
        self._render()

    def _day_cell(self, day: date) -> ft.Control:
        in_month = day.month == self.month.month
        selected = self.is_selected(day)
        is_today = day == self.today
        if selected:
            text_color = ft.Colors.ON_PRIMARY
        elif in_month:
            text_color = ft.Colors.ON_SURFACE
        else:
            text_color = ft.Colors.OUTLINE
        return ft.Container(
            content=ft.Text(str(day.day), size=12, color=text_color),
            width=CELL_SIZE,
            height=CELL_SIZE,
            alignment=ft.alignment.center,
            border_radius=CELL_SIZE // 2,
            bgcolor=ft.Colors.PRIMARY if selected else None,
            border=ft.border.all(1, ft.Colors.PRIMARY) if is_today and not selected else None,
            tooltip=days.format_day(day),
            on_click=lambda _e, d=day: self.click(d),
        )

    def _render(self) -> None:
        self._title.value = self.month.strftime("%B %Y")
        self._weeks.controls = [
            ft.Row(controls=[self._day_cell(day) for day in week], spacing=2)
            for week in self._calendar.monthdatescalendar(self.month.year, self.month.month)
        ]
        if getattr(self.control, "page", None):
            self.control.update()
