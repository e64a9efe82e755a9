"""Service layer for HabitBoard."""
