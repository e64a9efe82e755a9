"""Calendar-day helpers shared by stores, reconciliation and views."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

DAY_FORMAT = "%Y-%m-%d"


def format_day(value: date | datetime) -> str:
    """Return the ``YYYY-MM-DD`` key the completion table stores."""

    return to_local_day(value).strftime(DAY_FORMAT)


def to_local_day(value: date | datetime) -> date:
    """Collapse a date or datetime to a calendar day in the local time zone."""

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def parse_day(value: str | date | datetime) -> date:
    """Parse a stored completion value into a local calendar day.

    Plain ``YYYY-MM-DD`` strings map straight to that day. Timestamps carrying an
    offset are converted to local time first, so a time-of-day component never
    shifts the comparison to a different day than the user sees.
    """

    if isinstance(value, (date, datetime)):
        return to_local_day(value)
    text = value.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_local_day(datetime.fromisoformat(text))


def today() -> date:
    return date.today()


def day_keys(days: Iterable[date]) -> set[str]:
    """Return the formatted keys for a collection of days."""

    return {format_day(day) for day in days}


__all__ = ["DAY_FORMAT", "day_keys", "format_day", "parse_day", "to_local_day", "today"]
