"""
Date and hour arithmetic for schedules.
Hours are decimal (9.5 = 9:30am) and ranges are half-open [start, end).
"""

from datetime import date, timedelta
from typing import Iterator, Union

from .types import WeekStart

DateLike = Union[date, str]


def _as_date(value: DateLike) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def overlaps(a_start: float, a_end: float, b_start: float, b_end: float) -> bool:
    """Check if two half-open hour ranges intersect. Touching ranges do not."""
    return a_start < b_end and b_start < a_end


def date_in_range(day: DateLike, start: DateLike, end: DateLike) -> bool:
    """Inclusive civil-date containment."""
    return _as_date(start) <= _as_date(day) <= _as_date(end)


def week_start(anchor: DateLike, week_start_day: WeekStart = WeekStart.SUNDAY) -> date:
    anchor = _as_date(anchor)
    # date.weekday(): Monday == 0
    first = 0 if WeekStart(week_start_day) == WeekStart.MONDAY else 6
    offset = (anchor.weekday() - first) % 7
    return anchor - timedelta(days=offset)


def week_dates(anchor: DateLike, week_start_day: WeekStart = WeekStart.SUNDAY) -> list[date]:
    """The 7 dates of the calendar week containing anchor."""
    start = week_start(anchor, week_start_day)
    return [start + timedelta(days=i) for i in range(7)]


def date_range(start: DateLike, end: DateLike) -> Iterator[date]:
    current = _as_date(start)
    last = _as_date(end)
    while current <= last:
        yield current
        current += timedelta(days=1)


def format_hour(hour: float) -> str:
    """9.5 -> '9:30am', 13 -> '1pm'."""
    h = int(hour)
    m = int(round((hour - h) * 60))
    if m == 60:
        h, m = h + 1, 0
    period = "pm" if 12 <= h < 24 else "am"
    display = h % 12 or 12
    if m == 0:
        return f"{display}{period}"
    return f"{display}:{m:02d}{period}"
