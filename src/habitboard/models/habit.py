"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .user import User


class Habit(SQLModel, table=True):
    """A user-defined habit tracked for daily completion."""

    __tablename__: ClassVar[str] = "habits"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="user.id", nullable=False, index=True, max_length=36)
    title: str = Field(nullable=False, max_length=100)

    completions: list["HabitCompletion"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship(
            "HabitCompletion", back_populates="habit", cascade="all, delete-orphan"
        ),
    )

    user: "User" = Relationship(sa_relationship=relationship("User", back_populates="habits"))


class HabitCompletion(SQLModel, table=True):
    """Marks a habit done on one calendar day.

    The composite key keeps at most one row per (habit, day).
    """

    __tablename__: ClassVar[str] = "habit_completions"

    habit_id: int = Field(foreign_key="habits.id", primary_key=True)
    completed_at: date = Field(primary_key=True, index=True)
    user_id: str = Field(foreign_key="user.id", nullable=False, index=True, max_length=36)

    habit: "Habit" = Relationship(
        back_populates="completions",
        sa_relationship=relationship("Habit", back_populates="completions"),
    )
