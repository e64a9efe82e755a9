"""Tests for create-habit form validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from habitboard.forms import TITLE_MAX_LENGTH, HabitForm, parse_habit_form


def test_title_is_stripped():
    form = HabitForm(title="  Read 20 pages  ")
    assert form.title == "Read 20 pages"


@pytest.mark.parametrize("title", ["", "   "])
def test_blank_title_rejected(title):
    with pytest.raises(ValidationError):
        HabitForm(title=title)


def test_missing_title_rejected():
    with pytest.raises(ValidationError):
        HabitForm.model_validate({})


def test_parse_reports_field_errors():
    form, errors = parse_habit_form({"title": " "})

    assert form is None
    assert errors["title"] == ["Please provide a habit title."]


def test_parse_rejects_overlong_title():
    form, errors = parse_habit_form({"title": "x" * (TITLE_MAX_LENGTH + 1)})

    assert form is None
    assert "title" in errors


def test_parse_accepts_valid_title():
    form, errors = parse_habit_form({"title": "Meditate"})

    assert errors == {}
    assert form == HabitForm(title="Meditate")
