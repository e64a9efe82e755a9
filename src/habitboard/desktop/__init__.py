"""Flet desktop shell for HabitBoard."""
