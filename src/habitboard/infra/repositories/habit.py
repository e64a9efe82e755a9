"""SQLModel implementation of the habit store."""

from __future__ import annotations

from datetime import date
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ...errors import FetchError, MutationError
from ...logging_config import get_logger
from ...models.habit import Habit, HabitCompletion

logger = get_logger(__name__)


class SQLModelHabitStore:
    """SQLite-backed habit store used offline and in tests."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def list_habits(self, user_id: str) -> list[Habit]:
        try:
            with self.session_factory() as session:
                statement = (
                    select(Habit).where(Habit.user_id == user_id).order_by(Habit.id)  # type: ignore[arg-type]
                )
                rows = list(session.exec(statement).all())
                session.expunge_all()
                return rows
        except SQLAlchemyError as exc:
            raise FetchError(str(exc), resource="habits") from exc

    def create_habit(self, title: str, user_id: str) -> Habit:
        try:
            with self.session_factory() as session:
                habit = Habit(title=title, user_id=user_id)
                session.add(habit)
                session.commit()
                session.refresh(habit)
                session.expunge(habit)
                return habit
        except SQLAlchemyError as exc:
            raise MutationError("create habit", str(exc)) from exc

    def delete_habit(self, habit_id: int, user_id: str) -> None:
        try:
            with self.session_factory() as session:
                habit = session.exec(
                    select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
                ).first()
                if habit is None:
                    logger.info("Habit already gone", extra={"habit_id": habit_id})
                    return
                session.delete(habit)
                session.commit()
        except SQLAlchemyError as exc:
            raise MutationError("delete habit", str(exc)) from exc

    def list_completions(self, habit_id: int, user_id: str) -> list[HabitCompletion]:
        try:
            with self.session_factory() as session:
                statement = (
                    select(HabitCompletion)
                    .where(HabitCompletion.user_id == user_id)
                    .where(HabitCompletion.habit_id == habit_id)
                    .order_by(HabitCompletion.completed_at)  # type: ignore[arg-type]
                )
                rows = list(session.exec(statement).all())
                session.expunge_all()
                return rows
        except SQLAlchemyError as exc:
            raise FetchError(str(exc), resource="habit_completions") from exc

    def insert_completion(self, habit_id: int, user_id: str, day: date) -> HabitCompletion:
        try:
            with self.session_factory() as session:
                row = HabitCompletion(habit_id=habit_id, user_id=user_id, completed_at=day)
                session.add(row)
                session.commit()
                session.refresh(row)
                session.expunge(row)
                return row
        except SQLAlchemyError as exc:
            raise MutationError("insert completion", str(exc)) from exc

    def delete_completion(self, habit_id: int, user_id: str, day: date) -> list[HabitCompletion]:
        try:
            with self.session_factory() as session:
                rows = list(
                    session.exec(
                        select(HabitCompletion)
                        .where(HabitCompletion.user_id == user_id)
                        .where(HabitCompletion.habit_id == habit_id)
                        .where(HabitCompletion.completed_at == day)
                    ).all()
                )
                removed = [
                    HabitCompletion(
                        habit_id=row.habit_id, user_id=row.user_id, completed_at=row.completed_at
                    )
                    for row in rows
                ]
                for row in rows:
                    session.delete(row)
                session.commit()
                return removed
        except SQLAlchemyError as exc:
            raise MutationError("delete completion", str(exc)) from exc
