"""
Report of shifts sitting inside an unavailability window.

Approving time off never touches shifts already on the schedule; those
shifts are reported here so the UI can flag them.
"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from .availability import find_blocked_period, find_time_off
from .data_loader import end_read, load_blocked_windows, load_shift_slots, load_time_off_windows
from .types import ScheduleConflict


def find_schedule_conflicts(
    db: Session,
    organization_id: int,
    start: date,
    end: date,
    employee_ids: Optional[list[int]] = None,
) -> list[ScheduleConflict]:
    shifts = [
        s for s in load_shift_slots(db, organization_id, start, end, employee_ids)
        if not s.is_blocked
    ]
    if not shifts:
        end_read(db)
        return []

    involved = sorted({s.employee_id for s in shifts})
    time_off = load_time_off_windows(db, involved, start, end)
    blocked = load_blocked_windows(db, organization_id, involved, start, end)
    end_read(db)

    conflicts = []
    for shift in shifts:
        window = find_time_off(shift.employee_id, shift.date, time_off)
        if window is not None:
            conflicts.append(ScheduleConflict(shift=shift, kind="time_off", window=window.describe()))
            continue
        period = find_blocked_period(
            shift.employee_id,
            shift.date,
            blocked,
            hour_range=(shift.start_hour, shift.end_hour),
        )
        if period is not None:
            conflicts.append(ScheduleConflict(shift=shift, kind="blocked", window=period.describe()))
    return conflicts
