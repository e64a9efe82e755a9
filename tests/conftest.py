"""Pytest configuration and shared fixtures for HabitBoard tests.

Provides an isolated SQLite database per test, user and habit factories, a
recording in-memory store with failure injection, and a minimal stand-in for
``flet.Page`` so view builders can run headless.
"""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path

import flet as ft
import pytest
from sqlmodel import Session, SQLModel, create_engine

from habitboard.errors import FetchError, MutationError
from habitboard.models import Habit, HabitCompletion, User

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Session for arranging test data directly."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Factory matching the Callable[[], Session] the stores expect."""

    def factory():
        return Session(db_engine, expire_on_commit=False)

    return factory


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    """Keep config reads away from the developer's .env and data directory."""
    monkeypatch.setenv("HABITBOARD_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("HABITBOARD_BACKEND", "local")
    monkeypatch.delenv("HABITBOARD_DATABASE_URL", raising=False)
    monkeypatch.delenv("HABITBOARD_CACHE_TTL", raising=False)
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)


# =============================================================================
# Test Data Factories
# =============================================================================


def _make_user(db_session, email: str) -> User:
    user = User(email=email, password_hash="dummy-hash")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def user(db_session) -> User:
    return _make_user(db_session, "tester@example.com")


@pytest.fixture
def other_user(db_session) -> User:
    return _make_user(db_session, "someone-else@example.com")


@pytest.fixture
def habit_factory(db_session, user):
    """Factory for creating persisted habits."""

    def _create_habit(title: str = "Test Habit", owner: User | None = None) -> Habit:
        owner = owner or user
        habit = Habit(user_id=owner.id, title=title)
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        return habit

    return _create_habit


@pytest.fixture
def completion_factory(db_session):
    """Factory for marking habits complete on given days."""

    def _complete(habit: Habit, *days: date) -> list[HabitCompletion]:
        rows = [
            HabitCompletion(habit_id=habit.id, user_id=habit.user_id, completed_at=day)
            for day in days
        ]
        db_session.add_all(rows)
        db_session.commit()
        return rows

    return _complete


# =============================================================================
# In-memory store
# =============================================================================


class FakeHabitStore:
    """Recording in-memory implementation of the HabitStore protocol.

    ``calls`` lists every store call as ``(method, *args)``. Set ``fail_on`` to a
    method name to make that method raise the matching store error.
    """

    def __init__(self):
        self.habits: dict[int, Habit] = {}
        self.completions: set[tuple[int, str, date]] = set()
        self.calls: list[tuple] = []
        self.fail_on: set[str] = set()
        self._next_id = 1

    def _check(self, method: str, *args) -> None:
        self.calls.append((method, *args))
        if method in self.fail_on:
            if method.startswith("list_"):
                raise FetchError("backend unavailable", resource=method)
            raise MutationError(method.replace("_", " "), "backend unavailable")

    def calls_to(self, method: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == method]

    def add_habit(self, title: str, user_id: str) -> Habit:
        habit = Habit(id=self._next_id, user_id=user_id, title=title)
        self.habits[habit.id] = habit
        self._next_id += 1
        return habit

    def list_habits(self, user_id):
        self._check("list_habits", user_id)
        return [h for h in self.habits.values() if h.user_id == user_id]

    def create_habit(self, title, user_id):
        self._check("create_habit", title, user_id)
        return self.add_habit(title, user_id)

    def delete_habit(self, habit_id, user_id):
        self._check("delete_habit", habit_id, user_id)
        habit = self.habits.get(habit_id)
        if habit is not None and habit.user_id == user_id:
            del self.habits[habit_id]
            self.completions = {c for c in self.completions if c[0] != habit_id}

    def list_completions(self, habit_id, user_id):
        self._check("list_completions", habit_id, user_id)
        return [
            HabitCompletion(habit_id=h, user_id=u, completed_at=d)
            for (h, u, d) in sorted(self.completions)
            if h == habit_id and u == user_id
        ]

    def insert_completion(self, habit_id, user_id, day):
        self._check("insert_completion", habit_id, user_id, day)
        key = (habit_id, user_id, day)
        if key in self.completions:
            raise MutationError("insert completion", "duplicate key")
        self.completions.add(key)
        return HabitCompletion(habit_id=habit_id, user_id=user_id, completed_at=day)

    def delete_completion(self, habit_id, user_id, day):
        self._check("delete_completion", habit_id, user_id, day)
        key = (habit_id, user_id, day)
        if key not in self.completions:
            return []
        self.completions.discard(key)
        return [HabitCompletion(habit_id=habit_id, user_id=user_id, completed_at=day)]


@pytest.fixture
def fake_store() -> FakeHabitStore:
    return FakeHabitStore()


# =============================================================================
# UI helpers
# =============================================================================


class DummyPage:
    """Minimal stand-in for flet.Page used in view builders and router tests."""

    def __init__(self):
        self.views: list[ft.View] = []
        self.route: str = ""
        self.snack_bar = None
        self.dialog = None
        self.overlay: list[ft.Control] = []
        self.updates = 0

    def go(self, route: str):
        self.route = route

    def update(self):
        self.updates += 1

    padding = 0
    theme_mode = ft.ThemeMode.LIGHT


@pytest.fixture
def page() -> DummyPage:
    return DummyPage()
