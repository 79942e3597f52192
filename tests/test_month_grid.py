"""
Unit tests for the month grid builder.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from fakes import make_event
from studystem.core import GRID_CELLS, WEEKDAY_HEADERS, build_month_grid, shift_month


def _march(day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(2024, 3, day, hour, minute, tzinfo=timezone.utc)


class TestGridShape:
    """Test cases for grid layout."""

    def test_leap_february_2024(self):
        """February 2024 starts on Thursday: Sun-Wed lead in, 29 days, March fills the rest."""
        grid = build_month_grid([], date(2024, 2, 1))

        leading = grid.cells[:4]
        in_month = [cell for cell in grid.cells if cell.in_month]
        trailing = grid.cells[4 + 29 :]

        assert len(grid.cells) == 42
        assert [cell.number for cell in leading] == [28, 29, 30, 31]
        assert all(cell.day.month == 1 for cell in leading)
        assert not any(cell.in_month for cell in leading)
        assert len(in_month) == 29
        assert in_month[0].day == date(2024, 2, 1)
        assert in_month[-1].day == date(2024, 2, 29)
        assert [cell.number for cell in trailing] == list(range(1, 10))
        assert all(cell.day.month == 3 for cell in trailing)

    @pytest.mark.parametrize("year", [2023, 2024, 2025])
    def test_every_month_has_42_cells(self, year):
        """Every month renders six full weeks under fixed headers."""
        for month in range(1, 13):
            grid = build_month_grid([], date(year, month, 15))
            first_weekday = (date(year, month, 1).weekday() + 1) % 7

            assert len(grid.cells) == GRID_CELLS
            assert len(grid.weeks) == 6
            assert all(len(week) == 7 for week in grid.weeks)
            assert grid.headers == ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
            assert grid.cells[first_weekday].day == date(year, month, 1)

    def test_month_starting_on_sunday(self):
        """February 2015 fills exactly four weeks; the rest comes from March."""
        grid = build_month_grid([], date(2015, 2, 1))

        assert grid.cells[0].day == date(2015, 2, 1)
        assert sum(1 for cell in grid.cells if not cell.in_month) == 14
        assert grid.cells[-1].day == date(2015, 3, 14)

    def test_year_boundary(self):
        """December pads from November and January of the next year."""
        grid = build_month_grid([], date(2024, 12, 1))

        assert grid.cells[0].day == date(2024, 12, 1)
        assert grid.cells[-1].day.year == 2025
        assert grid.title == "December 2024"

    def test_weekday_headers_constant(self):
        """Headers never depend on the month."""
        assert WEEKDAY_HEADERS == ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


class TestGridEvents:
    """Test cases for bucketing events into days."""

    def test_event_placed_on_its_day_with_time_label(self):
        """A 14:00 session lands on March 10 labelled by its start time."""
        event = make_event("e1", _march(10, 14), minutes=90)
        grid = build_month_grid([event], date(2024, 3, 1))

        cell = grid.cell_for(date(2024, 3, 10))

        assert event.ends_at == _march(10, 15, 30)
        assert [item.event.id for item in cell.events] == ["e1"]
        assert cell.events[0].label == "14:00"

    def test_events_sorted_by_start_within_day(self):
        """Same-day events are ordered by start, then id."""
        events = [
            make_event("late", _march(10, 16)),
            make_event("b", _march(10, 9)),
            make_event("a", _march(10, 9)),
            make_event("early", _march(10, 8)),
        ]
        grid = build_month_grid(events, date(2024, 3, 1))

        ids = [item.event.id for item in grid.cell_for(date(2024, 3, 10)).events]

        assert ids == ["early", "a", "b", "late"]

    def test_adjacent_month_events_are_hidden(self):
        """Padding days never carry events, even in the same week."""
        events = [
            make_event("feb", datetime(2024, 2, 29, 10, tzinfo=timezone.utc)),
            make_event("apr", datetime(2024, 4, 1, 10, tzinfo=timezone.utc)),
        ]
        grid = build_month_grid(events, date(2024, 3, 1))

        assert all(not cell.events for cell in grid.cells)

    def test_empty_event_set(self):
        """Without events the grid is still complete."""
        grid = build_month_grid([], date(2024, 3, 1))

        assert len(grid.cells) == 42
        assert all(cell.events == () for cell in grid.cells)

    def test_today_marked(self):
        """Only the caller's current date is flagged."""
        grid = build_month_grid([], date(2024, 3, 1), today=date(2024, 3, 5))

        flagged = [cell.day for cell in grid.cells if cell.is_today]

        assert flagged == [date(2024, 3, 5)]

    def test_local_timezone_shifts_day(self):
        """Events are bucketed by their local calendar date."""
        plus_two = timezone(timedelta(hours=2))
        event = make_event("late-night", _march(10, 23, 30))
        grid = build_month_grid([event], date(2024, 3, 1), tz=plus_two)

        assert not grid.cell_for(date(2024, 3, 10)).events
        moved = grid.cell_for(date(2024, 3, 11)).events
        assert [item.event.id for item in moved] == ["late-night"]
        assert moved[0].label == "01:30"

    def test_builder_is_pure(self):
        """Repeated builds give equal grids and leave the input alone."""
        events = [make_event("e2", _march(3, 10)), make_event("e1", _march(3, 9))]
        snapshot = list(events)

        first = build_month_grid(events, date(2024, 3, 1))
        second = build_month_grid(events, date(2024, 3, 1))

        assert first == second
        assert events == snapshot


class TestShiftMonth:
    """Test cases for whole-month navigation."""

    def test_forward_across_year(self):
        assert shift_month(date(2024, 12, 15), 1) == date(2025, 1, 1)

    def test_backward_across_year(self):
        assert shift_month(date(2024, 1, 31), -1) == date(2023, 12, 1)

    def test_independent_of_month_length(self):
        """Moving from January 31 lands on February, not March."""
        assert shift_month(date(2024, 1, 31), 1) == date(2024, 2, 1)

    def test_zero_offset_normalizes(self):
        assert shift_month(date(2024, 7, 19), 0) == date(2024, 7, 1)
