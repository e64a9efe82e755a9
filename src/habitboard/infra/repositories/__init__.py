"""Habit store implementations."""

from .habit import SQLModelHabitStore
from .supabase import SupabaseHabitStore

__all__ = ["SQLModelHabitStore", "SupabaseHabitStore"]
