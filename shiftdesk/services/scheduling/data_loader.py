"""
Data loader for scheduling service.
Fetches availability data and shifts from the database and converts to internal types.
"""

from datetime import date
from typing import Optional

from sqlalchemy import select, and_, or_
from sqlalchemy.orm import Session

from shiftdesk.db.models.employees import Employees
from shiftdesk.db.models.time_off_requests import TimeOffRequests, TimeOffStatus
from shiftdesk.db.models.blocked_periods import BlockedPeriods
from shiftdesk.db.models.shifts import Shifts

from .errors import NotFoundError, ValidationError
from .types import (
    BlockedWindow,
    EmployeeRates,
    ShiftSlot,
    TimeOffWindow,
)


def to_shift_slot(row: Shifts) -> ShiftSlot:
    return ShiftSlot(
        id=row.id,
        employee_id=row.employee_id,
        date=row.shift_date,
        start_hour=row.start_hour,
        end_hour=row.end_hour,
        is_blocked=row.is_blocked,
        job=row.job,
        pay_rate=row.pay_rate,
    )


def to_blocked_window(row: BlockedPeriods) -> BlockedWindow:
    return BlockedWindow(
        id=row.id,
        employee_id=row.employee_id,
        start_date=row.start_date,
        end_date=row.end_date,
        start_hour=row.start_hour,
        end_hour=row.end_hour,
    )


def load_time_off_windows(
    db: Session,
    employee_ids: list[int],
    start: date,
    end: date,
) -> list[TimeOffWindow]:
    """Load approved time off requests that touch [start, end]."""

    if not employee_ids:
        return []

    stmt = select(TimeOffRequests).where(
        and_(
            TimeOffRequests.employee_id.in_(employee_ids),
            TimeOffRequests.status == TimeOffStatus.APPROVED,
            TimeOffRequests.start_date <= end,
            TimeOffRequests.end_date >= start,
        )
    )
    rows = db.execute(stmt).scalars().all()

    return [
        TimeOffWindow(
            id=r.id,
            employee_id=r.employee_id,
            start_date=r.start_date,
            end_date=r.end_date,
            status=r.status.value,
        )
        for r in rows
    ]


def load_blocked_windows(
    db: Session,
    organization_id: int,
    employee_ids: Optional[list[int]],
    start: date,
    end: date,
) -> list[BlockedWindow]:
    """Load blocked periods touching [start, end], org-wide ones included."""

    stmt = select(BlockedPeriods).where(
        and_(
            BlockedPeriods.organization_id == organization_id,
            BlockedPeriods.start_date <= end,
            BlockedPeriods.end_date >= start,
        )
    )
    if employee_ids is not None:
        stmt = stmt.where(
            or_(
                BlockedPeriods.employee_id.in_(employee_ids),
                BlockedPeriods.employee_id.is_(None),
            )
        )
    rows = db.execute(stmt).scalars().all()
    return [to_blocked_window(r) for r in rows]


def load_shift_slots(
    db: Session,
    organization_id: int,
    start: date,
    end: date,
    employee_ids: Optional[list[int]] = None,
) -> list[ShiftSlot]:
    """Load shifts (blocked markers included) dated within [start, end]."""

    stmt = select(Shifts).where(
        and_(
            Shifts.organization_id == organization_id,
            Shifts.shift_date >= start,
            Shifts.shift_date <= end,
        )
    )
    if employee_ids is not None:
        stmt = stmt.where(Shifts.employee_id.in_(employee_ids))
    rows = db.execute(stmt.order_by(Shifts.shift_date, Shifts.start_hour)).scalars().all()
    return [to_shift_slot(r) for r in rows]


def load_employee_rates(db: Session, organization_id: int) -> dict[int, EmployeeRates]:
    stmt = select(Employees).where(Employees.organization_id == organization_id)
    rows = db.execute(stmt).scalars().all()
    return {
        e.id: EmployeeRates(
            id=e.id,
            name=e.name,
            hourly_pay=e.hourly_pay,
            job_pay=dict(e.job_pay or {}),
        )
        for e in rows
    }


def lock_employee(
    db: Session,
    organization_id: int,
    employee_id: int,
    require_active: bool = True,
) -> Employees:
    """
    Load an employee row with a write lock so concurrent writers for the same
    employee validate against the same snapshot.
    """
    stmt = (
        select(Employees)
        .where(
            Employees.id == employee_id,
            Employees.organization_id == organization_id,
        )
        .with_for_update()
    )
    employee = db.execute(stmt).scalar_one_or_none()
    if employee is None:
        raise NotFoundError("Employee not found", context={"employee_id": employee_id})
    if require_active and not employee.is_active:
        raise ValidationError("Employee is not active", context={"employee_id": employee_id})
    return employee


def end_read(db: Session) -> None:
    """
    Close the transaction a read-only query opened. On SQLite every
    transaction starts with BEGIN IMMEDIATE, so an idle one would keep other
    writers waiting on the lock.
    """
    if db.in_transaction():
        db.commit()
