"""Reusable UI components for the desktop app."""

from .calendar import MultiDateCalendar
from .feedback import show_snack
from .habit_card import HabitCard
from .layout import build_app_bar, empty_state

__all__ = ["HabitCard", "MultiDateCalendar", "build_app_bar", "empty_state", "show_snack"]
