"""Tests for habit streak calculations.

Covers consecutive days, gaps, streaks that ended before today and empty
completion sets.
"""

from __future__ import annotations

from datetime import date, timedelta

from habitboard.services.habits import compute_streaks

TODAY = date(2024, 6, 15)


def _days_back(*offsets: int) -> list[date]:
    return [TODAY - timedelta(days=offset) for offset in offsets]


class TestCurrentStreak:
    """Tests for the consecutive run ending today."""

    def test_no_completions_returns_zero(self):
        assert compute_streaks([], today=TODAY) == (0, 0)

    def test_single_completion_today_returns_one(self):
        current, longest = compute_streaks([TODAY], today=TODAY)

        assert current == 1
        assert longest == 1

    def test_consecutive_days_ending_today(self):
        current, _ = compute_streaks(_days_back(*range(7)), today=TODAY)

        assert current == 7

    def test_gap_breaks_current_streak(self):
        current, longest = compute_streaks(_days_back(0, 1, 3, 4, 5), today=TODAY)

        assert current == 2
        assert longest == 3

    def test_streak_not_including_today_is_zero(self):
        """Yesterday's run does not count as current until today is completed."""
        current, longest = compute_streaks(_days_back(1, 2, 3), today=TODAY)

        assert current == 0
        assert longest == 3


class TestLongestStreak:
    def test_longest_run_in_the_past(self):
        history = _days_back(0) + _days_back(*range(10, 20))

        assert compute_streaks(history, today=TODAY) == (1, 10)

    def test_duplicate_days_count_once(self):
        history = _days_back(0, 0, 1, 1)

        assert compute_streaks(history, today=TODAY) == (2, 2)

    def test_unordered_input(self):
        history = [TODAY, TODAY - timedelta(days=2), TODAY - timedelta(days=1)]

        assert compute_streaks(history, today=TODAY) == (3, 3)

    def test_run_across_month_boundary(self):
        history = [date(2024, 1, 30), date(2024, 1, 31), date(2024, 2, 1)]

        assert compute_streaks(history, today=date(2024, 2, 1)) == (3, 3)
