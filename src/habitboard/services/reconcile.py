"""Turn calendar selection changes into completion inserts and deletes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Sequence

from .days import day_keys, format_day, to_local_day


@dataclass(frozen=True)
class SelectionPlan:
    """Mutations implied by one selection change, plus the resulting selection."""

    inserts: tuple[date, ...] = ()
    deletes: tuple[date, ...] = ()
    selection: tuple[date, ...] = field(default_factory=tuple)

    @property
    def is_noop(self) -> bool:
        return not self.inserts and not self.deletes


def plan_selection_change(
    old: Sequence[date | datetime],
    new: Sequence[date | datetime],
    completed: Iterable[date],
) -> SelectionPlan:
    """Compare the previous and current calendar selection.

    A shrinking selection deletes every day that disappeared, in ascending order.
    Otherwise the last day of ``new`` (the one the calendar appended) is inserted
    unless the completion set already holds that day.
    """

    old_days = [to_local_day(value) for value in old]
    new_days = [to_local_day(value) for value in new]

    if len(new_days) < len(old_days):
        remaining = day_keys(new_days)
        removed = sorted({day for day in old_days if format_day(day) not in remaining})
        gone = day_keys(removed)
        selection = tuple(day for day in old_days if format_day(day) not in gone)
        return SelectionPlan(deletes=tuple(removed), selection=selection)

    if not new_days:
        return SelectionPlan(selection=tuple(old_days))

    added = new_days[-1]
    if format_day(added) in day_keys(completed):
        return SelectionPlan(selection=tuple(old_days))
    selection = tuple(old_days)
    if format_day(added) not in day_keys(old_days):
        selection += (added,)
    return SelectionPlan(inserts=(added,), selection=selection)


def plan_toggle(day: date, completed: Iterable[date]) -> SelectionPlan:
    """Flip one day: delete it when completed, insert it otherwise."""

    days = sorted(set(completed))
    if format_day(day) in day_keys(days):
        return SelectionPlan(
            deletes=(day,), selection=tuple(d for d in days if format_day(d) != format_day(day))
        )
    return SelectionPlan(inserts=(day,), selection=tuple(days) + (day,))


def is_completed_on(completed: Iterable[date | datetime], day: date) -> bool:
    """True when some completion falls on ``day`` in the local time zone."""

    target = format_day(day)
    return any(format_day(value) == target for value in completed)


__all__ = ["SelectionPlan", "is_completed_on", "plan_selection_change", "plan_toggle"]
