"""
Shift store: the only writer of shift rows.

Every mutation validates a candidate first and touches the row only after all
checks pass, inside one transaction. Any error rolls the transaction back, so
a rejected call leaves the store exactly as it was.
"""

import logging
from datetime import date
from typing import Any, Optional

from sqlalchemy import select, update, and_
from sqlalchemy.orm import Session

from shiftdesk.core.config import settings
from shiftdesk.db.models.drop_shift_requests import DropRequestStatus, DropShiftRequests
from shiftdesk.db.models.shifts import Shifts

from .availability import check_can_work
from .data_loader import (
    end_read,
    load_blocked_windows,
    load_shift_slots,
    load_time_off_windows,
    lock_employee,
)
from .errors import NotFoundError, ValidationError
from .events import ScheduleEvent, publish
from .types import ShiftSlot


logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "employee_id",
    "shift_date",
    "start_hour",
    "end_hour",
    "job",
    "pay_rate",
    "notes",
)


def validate_hours(start_hour: float, end_hour: float) -> None:
    if start_hour is None or end_hour is None:
        raise ValidationError("start_hour and end_hour are required")
    if start_hour >= end_hour:
        raise ValidationError(
            "Shift must end after it starts",
            context={"start_hour": start_hour, "end_hour": end_hour},
        )
    if start_hour < 0 or end_hour > 24:
        raise ValidationError(
            "Shift hours must fall within 0-24",
            context={"start_hour": start_hour, "end_hour": end_hour},
        )


def validate_job(job: Optional[str]) -> None:
    if not job or not str(job).strip():
        raise ValidationError("Job is required for this shift")
    if job not in settings.ALLOWED_JOBS:
        raise ValidationError("Unknown job", context={"job": job})


def validate_candidate(
    db: Session,
    organization_id: int,
    candidate: ShiftSlot,
    exclude_shift_id: Optional[int] = None,
) -> None:
    """Run every placement rule against the current state of the store."""
    validate_hours(candidate.start_hour, candidate.end_hour)
    if not candidate.is_blocked:
        validate_job(candidate.job)

    lock_employee(db, organization_id, candidate.employee_id, require_active=not candidate.is_blocked)
    if candidate.is_blocked:
        return
    day = candidate.date
    time_off = load_time_off_windows(db, [candidate.employee_id], day, day)
    blocked = load_blocked_windows(db, organization_id, [candidate.employee_id], day, day)
    existing = load_shift_slots(db, organization_id, day, day, [candidate.employee_id])
    check_can_work(candidate, time_off, blocked, existing, exclude_shift_id)


def get_shift(db: Session, organization_id: int, shift_id: int) -> Shifts:
    shift = db.execute(
        select(Shifts).where(
            Shifts.id == shift_id,
            Shifts.organization_id == organization_id,
        )
    ).scalar_one_or_none()
    if shift is None:
        raise NotFoundError("Shift not found", context={"shift_id": shift_id})
    return shift


def list_shifts(
    db: Session,
    organization_id: int,
    start: date,
    end: date,
    employee_id: Optional[int] = None,
) -> list[Shifts]:
    stmt = select(Shifts).where(
        and_(
            Shifts.organization_id == organization_id,
            Shifts.shift_date >= start,
            Shifts.shift_date <= end,
        )
    )
    if employee_id is not None:
        stmt = stmt.where(Shifts.employee_id == employee_id)
    rows = list(db.execute(stmt.order_by(Shifts.shift_date, Shifts.start_hour)).scalars().all())
    end_read(db)
    return rows


def add_shift(db: Session, organization_id: int, data: dict[str, Any]) -> Shifts:
    candidate = ShiftSlot(
        id=None,
        employee_id=data.get("employee_id"),
        date=data.get("shift_date"),
        start_hour=data.get("start_hour"),
        end_hour=data.get("end_hour"),
        is_blocked=bool(data.get("is_blocked", False)),
        job=data.get("job"),
    )
    if candidate.employee_id is None or candidate.date is None:
        raise ValidationError("employee_id and shift_date are required")

    try:
        validate_candidate(db, organization_id, candidate)
        shift = Shifts(
            organization_id=organization_id,
            employee_id=candidate.employee_id,
            shift_date=candidate.date,
            start_hour=candidate.start_hour,
            end_hour=candidate.end_hour,
            job=candidate.job,
            pay_rate=data.get("pay_rate"),
            is_blocked=candidate.is_blocked,
            notes=data.get("notes"),
        )
        db.add(shift)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        f"Added shift {shift.id} for employee {shift.employee_id} on "
        f"{shift.shift_date} [{shift.start_hour}, {shift.end_hour})"
    )
    return shift


def _withdraw_open_offers(db: Session, shift_id: int) -> list[int]:
    """Cancel open drop requests on a shift whose owner is changing."""
    request_ids = list(db.execute(
        select(DropShiftRequests.id).where(
            DropShiftRequests.shift_id == shift_id,
            DropShiftRequests.status == DropRequestStatus.OPEN,
        )
    ).scalars().all())
    if request_ids:
        db.execute(
            update(DropShiftRequests)
            .where(DropShiftRequests.id.in_(request_ids))
            .values(status=DropRequestStatus.CANCELLED)
            .execution_options(synchronize_session=False)
        )
    return request_ids


def update_shift(
    db: Session,
    organization_id: int,
    shift_id: int,
    updates: dict[str, Any],
) -> Shifts:
    """
    Merge updates into the shift and commit only if the merged shift passes
    the same rules as add_shift (ignoring itself for overlaps).
    """
    unknown = set(updates) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError("Fields cannot be updated", context={"fields": sorted(unknown)})

    try:
        shift = get_shift(db, organization_id, shift_id)
        if shift.is_blocked:
            raise ValidationError("Blocked entries cannot be edited here", context={"shift_id": shift_id})

        merged = {field: getattr(shift, field) for field in EDITABLE_FIELDS}
        merged.update(updates)
        candidate = ShiftSlot(
            id=shift.id,
            employee_id=merged["employee_id"],
            date=merged["shift_date"],
            start_hour=merged["start_hour"],
            end_hour=merged["end_hour"],
            job=merged["job"],
        )
        validate_candidate(db, organization_id, candidate, exclude_shift_id=shift.id)

        withdrawn = []
        if candidate.employee_id != shift.employee_id:
            withdrawn = _withdraw_open_offers(db, shift.id)
        for field, value in updates.items():
            setattr(shift, field, value)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Updated shift {shift_id}: {sorted(updates)}")
    for request_id in withdrawn:
        publish(ScheduleEvent.DROP_REQUEST_CANCELLED, {
            "drop_request_id": request_id,
            "shift_id": shift_id,
            "message": "Drop request withdrawn, shift reassigned",
        })
    return shift


def delete_shift(db: Session, organization_id: int, shift_id: int) -> None:
    """Remove a shift. Freeing a slot can never create a conflict."""
    try:
        shift = get_shift(db, organization_id, shift_id)
        db.delete(shift)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Deleted shift {shift_id}")
