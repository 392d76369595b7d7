"""
Availability checking utilities.
Determines if an employee can work a given date / hour range.

Everything here is a pure function over already-loaded windows and shifts;
the database side lives in data_loader.
"""

from datetime import date
from typing import Optional, Union

from .errors import BlockedPeriodConflict, OverlapConflict, TimeOffConflict
from .time_model import date_in_range, overlaps
from .types import BlockedWindow, ShiftSlot, TimeOffWindow

HourRange = tuple[float, float]


def find_time_off(
    employee_id: int,
    day: date,
    time_off: list[TimeOffWindow],
) -> Optional[TimeOffWindow]:
    """First approved time-off window of the employee containing day."""
    for window in time_off:
        if window.employee_id != employee_id or window.status != "APPROVED":
            continue
        if date_in_range(day, window.start_date, window.end_date):
            return window
    return None


def find_blocked_period(
    employee_id: int,
    day: date,
    blocked: list[BlockedWindow],
    hour_range: Optional[HourRange] = None,
) -> Optional[BlockedWindow]:
    """
    First blocked period covering the employee on day.

    Org-wide periods (employee_id None) cover everyone. A day-wide period
    matches any hour range; an hour-bounded one only matches an overlapping
    hour range, or any query without one.
    """
    for window in blocked:
        if window.employee_id is not None and window.employee_id != employee_id:
            continue
        if not date_in_range(day, window.start_date, window.end_date):
            continue
        if hour_range is None or window.is_day_wide:
            return window
        if overlaps(hour_range[0], hour_range[1], window.start_hour, window.end_hour):
            return window
    return None


def find_unavailability(
    employee_id: int,
    day: date,
    time_off: list[TimeOffWindow],
    blocked: list[BlockedWindow],
    hour_range: Optional[HourRange] = None,
) -> Optional[Union[TimeOffWindow, BlockedWindow]]:
    window = find_time_off(employee_id, day, time_off)
    if window is not None:
        return window
    return find_blocked_period(employee_id, day, blocked, hour_range)


def is_unavailable(
    employee_id: int,
    day: date,
    time_off: list[TimeOffWindow],
    blocked: list[BlockedWindow],
    hour_range: Optional[HourRange] = None,
) -> bool:
    return find_unavailability(employee_id, day, time_off, blocked, hour_range) is not None


def find_overlapping_shift(
    employee_id: int,
    day: date,
    start_hour: float,
    end_hour: float,
    shifts: list[ShiftSlot],
    exclude_shift_id: Optional[int] = None,
) -> Optional[ShiftSlot]:
    """First non-blocked shift of the employee on day overlapping [start, end)."""
    for existing in shifts:
        if existing.is_blocked:
            continue
        if exclude_shift_id is not None and existing.id == exclude_shift_id:
            continue
        if existing.employee_id != employee_id or existing.date != day:
            continue
        if overlaps(start_hour, end_hour, existing.start_hour, existing.end_hour):
            return existing
    return None


def check_can_work(
    candidate: ShiftSlot,
    time_off: list[TimeOffWindow],
    blocked: list[BlockedWindow],
    existing_shifts: list[ShiftSlot],
    exclude_shift_id: Optional[int] = None,
) -> None:
    """
    Raise the first conflict preventing candidate from being stored.

    Unavailability is checked at day granularity (no hour range), matching
    how shift creation has always behaved. Blocked marker shifts are exempt.
    """
    if candidate.is_blocked:
        return

    window = find_unavailability(candidate.employee_id, candidate.date, time_off, blocked)
    if isinstance(window, TimeOffWindow):
        raise TimeOffConflict(
            "Employee has approved time off on this date",
            context={"time_off": window.describe()},
        )
    if isinstance(window, BlockedWindow):
        raise BlockedPeriodConflict(
            "Employee is blocked out on this date",
            context={"blocked_period": window.describe()},
        )

    clash = find_overlapping_shift(
        candidate.employee_id,
        candidate.date,
        candidate.start_hour,
        candidate.end_hour,
        existing_shifts,
        exclude_shift_id,
    )
    if clash is not None:
        raise OverlapConflict(
            "Shift overlaps with existing shift",
            context={"conflicting_shift": clash.describe()},
        )
