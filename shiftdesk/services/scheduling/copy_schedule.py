"""
Copy a week of shifts forward.

Each source shift is replayed onto the same weekday of every target week.
Entries that would land on an unavailable day, duplicate an existing shift or
overlap one are skipped and reported; everything else is inserted in a single
transaction.
"""

import logging
from datetime import date, timedelta

from sqlalchemy.orm import Session

from shiftdesk.core.config import settings
from shiftdesk.db.models.employees import Employees
from shiftdesk.db.models.organizations import Organizations
from shiftdesk.db.models.shifts import Shifts

from .availability import find_overlapping_shift, find_unavailability
from .data_loader import (
    load_blocked_windows,
    load_shift_slots,
    load_time_off_windows,
    lock_employee,
)
from .errors import NotFoundError, ValidationError
from .time_model import week_start
from .types import CopySkip, CopySummary, ShiftSlot, WeekStart


logger = logging.getLogger(__name__)


def _is_duplicate(slot: ShiftSlot, existing: list[ShiftSlot]) -> bool:
    return any(
        e.employee_id == slot.employee_id
        and e.date == slot.date
        and e.start_hour == slot.start_hour
        and e.end_hour == slot.end_hour
        and (e.job or "") == (slot.job or "")
        for e in existing
    )


def copy_week(
    db: Session,
    organization_id: int,
    source_week_start: date,
    target_week_starts: list[date],
    allow_override_blocked: bool = False,
) -> CopySummary:
    if not target_week_starts:
        raise ValidationError("At least one target week is required")
    if len(target_week_starts) > settings.COPY_MAX_WEEKS_AHEAD:
        raise ValidationError(
            f"Cannot copy into more than {settings.COPY_MAX_WEEKS_AHEAD} weeks at once",
            context={"weeks": len(target_week_starts)},
        )

    summary = CopySummary()
    try:
        organization = db.get(Organizations, organization_id)
        if organization is None:
            raise NotFoundError("Organization not found", context={"organization_id": organization_id})
        first_day = WeekStart(organization.week_start_day.value)

        source_start = week_start(source_week_start, first_day)
        source_end = source_start + timedelta(days=6)
        targets = sorted({week_start(t, first_day) for t in target_week_starts})
        if source_start in targets:
            raise ValidationError("Target week must differ from the source week")

        source = [
            s for s in load_shift_slots(db, organization_id, source_start, source_end)
            if not s.is_blocked
        ]
        if not source:
            db.commit()
            return summary

        employee_ids = sorted({s.employee_id for s in source})
        for employee_id in employee_ids:
            lock_employee(db, organization_id, employee_id, require_active=False)
        active = {
            e.id for e in db.query(Employees).filter(
                Employees.id.in_(employee_ids),
                Employees.is_active == True,
            )
        }

        range_start = targets[0]
        range_end = targets[-1] + timedelta(days=6)
        existing = load_shift_slots(db, organization_id, range_start, range_end, employee_ids)
        time_off = load_time_off_windows(db, employee_ids, range_start, range_end)
        blocked = load_blocked_windows(db, organization_id, employee_ids, range_start, range_end)

        for target in targets:
            for src in source:
                slot = ShiftSlot(
                    id=None,
                    employee_id=src.employee_id,
                    date=target + (src.date - source_start),
                    start_hour=src.start_hour,
                    end_hour=src.end_hour,
                    job=src.job,
                    pay_rate=src.pay_rate,
                )

                reason = None
                if slot.employee_id not in active:
                    reason = "inactive"
                elif not allow_override_blocked and find_unavailability(
                    slot.employee_id, slot.date, time_off, blocked
                ):
                    reason = "blocked"
                elif _is_duplicate(slot, existing):
                    reason = "duplicate"
                elif find_overlapping_shift(
                    slot.employee_id, slot.date, slot.start_hour, slot.end_hour, existing
                ):
                    reason = "overlap"

                if reason:
                    summary.skipped.append(CopySkip(
                        employee_id=slot.employee_id,
                        date=slot.date,
                        start_hour=slot.start_hour,
                        end_hour=slot.end_hour,
                        job=slot.job,
                        reason=reason,
                    ))
                    continue

                db.add(Shifts(
                    organization_id=organization_id,
                    employee_id=slot.employee_id,
                    shift_date=slot.date,
                    start_hour=slot.start_hour,
                    end_hour=slot.end_hour,
                    job=slot.job,
                    pay_rate=slot.pay_rate,
                    is_blocked=False,
                ))
                # later copies in this run must see this one
                existing.append(slot)
                summary.created_count += 1

        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        f"Copied week {source_start} into {len(targets)} week(s): "
        f"{summary.created_count} created, {len(summary.skipped)} skipped"
    )
    return summary
