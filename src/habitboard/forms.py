"""Form definitions for dashboard input."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

TITLE_MAX_LENGTH = 100


class HabitForm(BaseModel):
    """Values submitted from the create-habit dialog."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    title: str = Field(..., description="Short label for the habit", max_length=TITLE_MAX_LENGTH)

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        """Reject blank titles."""

        if not value:
            raise ValueError("Please provide a habit title.")
        return value


def validation_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Return a field -> messages mapping for template or dialog rendering."""

    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        location = error.get("loc") or ("__all__",)
        field = str(location[0])
        message = error.get("msg", "Invalid value")
        # pydantic prefixes messages raised from validators
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.setdefault(field, []).append(message)
    return errors


def parse_habit_form(values: Mapping[str, Any]) -> tuple[HabitForm | None, dict[str, list[str]]]:
    """Validate raw dialog values, returning the form or the field errors."""

    try:
        return HabitForm.model_validate(dict(values)), {}
    except ValidationError as exc:
        return None, validation_errors(exc)


__all__ = ["HabitForm", "TITLE_MAX_LENGTH", "parse_habit_form", "validation_errors"]
