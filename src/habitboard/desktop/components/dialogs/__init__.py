"""Dialog components."""

from .habit_dialog import show_habit_dialog, submit_habit

__all__ = ["show_habit_dialog", "submit_habit"]
