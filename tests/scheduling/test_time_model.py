import pytest
from datetime import date

from shiftdesk.services.scheduling.types import WeekStart
from shiftdesk.services.scheduling.time_model import (
    overlaps,
    date_in_range,
    week_start,
    week_dates,
    date_range,
    format_hour,
)


class TestOverlaps:
    def test_no_overlap(self):
        assert overlaps(8, 10, 12, 14) is False

    def test_touching_boundaries_do_not_overlap(self):
        assert overlaps(9, 12, 12, 17) is False
        assert overlaps(12, 17, 9, 12) is False

    def test_partial_overlap(self):
        assert overlaps(9, 17, 16, 20) is True

    def test_contained(self):
        assert overlaps(9, 17, 10, 11) is True

    def test_fractional_hours(self):
        assert overlaps(9.5, 12.25, 12, 13) is True
        assert overlaps(9.5, 12.0, 12, 13) is False

    def test_zero_length_range_never_overlaps(self):
        assert overlaps(10, 10, 9, 11) is False


class TestDateInRange:
    def test_inclusive_bounds(self):
        assert date_in_range(date(2024, 7, 1), date(2024, 7, 1), date(2024, 7, 3)) is True
        assert date_in_range(date(2024, 7, 3), date(2024, 7, 1), date(2024, 7, 3)) is True

    def test_outside(self):
        assert date_in_range(date(2024, 7, 4), date(2024, 7, 1), date(2024, 7, 3)) is False
        assert date_in_range(date(2024, 6, 30), date(2024, 7, 1), date(2024, 7, 3)) is False

    def test_accepts_iso_strings(self):
        assert date_in_range("2024-07-02", "2024-07-01", "2024-07-03") is True


class TestWeekDates:
    def test_sunday_start(self):
        # 2024-06-12 is a Wednesday
        days = week_dates(date(2024, 6, 12), WeekStart.SUNDAY)
        assert days[0] == date(2024, 6, 9)
        assert days[-1] == date(2024, 6, 15)
        assert len(days) == 7

    def test_monday_start(self):
        days = week_dates(date(2024, 6, 12), WeekStart.MONDAY)
        assert days[0] == date(2024, 6, 10)
        assert days[-1] == date(2024, 6, 16)

    def test_anchor_on_week_start(self):
        assert week_start(date(2024, 6, 9), WeekStart.SUNDAY) == date(2024, 6, 9)
        assert week_start(date(2024, 6, 9), WeekStart.MONDAY) == date(2024, 6, 3)

    def test_dates_are_consecutive(self):
        days = week_dates(date(2024, 12, 31), WeekStart.MONDAY)
        assert [(b - a).days for a, b in zip(days, days[1:])] == [1] * 6


class TestDateRange:
    def test_inclusive(self):
        assert list(date_range(date(2024, 7, 1), date(2024, 7, 3))) == [
            date(2024, 7, 1), date(2024, 7, 2), date(2024, 7, 3),
        ]

    def test_empty_when_reversed(self):
        assert list(date_range(date(2024, 7, 3), date(2024, 7, 1))) == []


class TestFormatHour:
    @pytest.mark.parametrize("hour, expected", [
        (9, "9am"),
        (9.5, "9:30am"),
        (12, "12pm"),
        (13.25, "1:15pm"),
        (0, "12am"),
        (24, "12am"),
    ])
    def test_format(self, hour, expected):
        assert format_hour(hour) == expected
