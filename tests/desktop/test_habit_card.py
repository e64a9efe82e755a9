"""Habit card behavior against the in-memory store."""

from __future__ import annotations

from datetime import date

import flet as ft
import pytest

from habitboard.desktop.components.habit_card import HabitCard
from habitboard.services.cache import QueryCache
from habitboard.services.habits import HabitService

USER = "user-1"
JAN_1 = date(2024, 1, 1)
FEB_10 = date(2024, 2, 10)


@pytest.fixture
def service(fake_store):
    return HabitService(fake_store, QueryCache(ttl=300), USER)


@pytest.fixture
def habit(fake_store):
    return fake_store.add_habit("Read", USER)


def test_button_reflects_today(page, service, fake_store, habit):
    fake_store.completions.add((habit.id, USER, FEB_10))

    card = HabitCard(page, service, habit, today=FEB_10)

    assert card.completed_today
    assert card.complete_button.text == "Completed"
    assert card.complete_button.bgcolor == ft.Colors.GREEN


def test_toggle_today_marks_and_unmarks(page, service, fake_store, habit):
    card = HabitCard(page, service, habit, today=FEB_10)
    assert card.complete_button.text == "Complete"

    card.toggle_today()
    assert (habit.id, USER, FEB_10) in fake_store.completions
    assert card.complete_button.text == "Completed"
    assert card.calendar.value == [FEB_10]

    card.toggle_today()
    assert fake_store.completions == set()
    assert card.complete_button.text == "Complete"
    assert card.complete_button.bgcolor == ft.Colors.BLUE


def test_calendar_click_inserts_completion(page, service, fake_store, habit):
    card = HabitCard(page, service, habit, today=FEB_10)

    card.calendar.click(JAN_1)

    assert fake_store.calls_to("insert_completion") == [("insert_completion", habit.id, USER, JAN_1)]
    assert card.calendar.value == [JAN_1]
    assert "Current streak: 0" in card.streak_text.value


def test_calendar_deselect_deletes_completion(page, service, fake_store, habit):
    fake_store.completions.update({(habit.id, USER, JAN_1), (habit.id, USER, FEB_10)})
    card = HabitCard(page, service, habit, today=FEB_10)

    card.calendar.click(JAN_1)

    assert fake_store.calls_to("delete_completion") == [("delete_completion", habit.id, USER, JAN_1)]
    assert card.calendar.value == [FEB_10]


def test_failed_toggle_reverts_and_offers_retry(page, service, fake_store, habit):
    card = HabitCard(page, service, habit, today=FEB_10)
    fake_store.fail_on.add("insert_completion")

    card.toggle_today()

    assert card.complete_button.text == "Complete"
    assert card.calendar.value == []
    assert page.snack_bar.action == "Retry"
    assert "backend unavailable" in page.snack_bar.content.value

    fake_store.fail_on.clear()
    page.snack_bar.on_action(None)

    assert card.complete_button.text == "Completed"
    assert (habit.id, USER, FEB_10) in fake_store.completions


def test_fetch_failure_renders_inline(page, service, fake_store, habit):
    fake_store.fail_on.add("list_completions")

    card = HabitCard(page, service, habit, today=FEB_10)

    assert card.error is not None
    assert card.complete_button.disabled
    assert "backend unavailable" in card.body.controls[0].value

    fake_store.fail_on.clear()
    card.load()
    assert card.error is None
    assert card.body.controls == [card.calendar.control]


def test_delete_notifies_owner(page, service, fake_store, habit):
    deleted = []
    card = HabitCard(page, service, habit, on_deleted=deleted.append, today=FEB_10)

    card.delete()

    assert deleted == [habit.id]
    assert habit.id not in fake_store.habits
    assert "deleted" in page.snack_bar.content.value


def test_failed_delete_keeps_card(page, service, fake_store, habit):
    deleted = []
    card = HabitCard(page, service, habit, on_deleted=deleted.append, today=FEB_10)
    fake_store.fail_on.add("delete_habit")

    card.delete()

    assert deleted == []
    assert page.snack_bar.action == "Retry"
