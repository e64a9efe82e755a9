"""Domain contracts for HabitBoard."""
