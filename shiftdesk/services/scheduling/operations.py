"""
Inbound operations.

Thin wrappers over the scheduling services that never raise for
business-rule violations. Each returns an OperationResult: either a value or
the SchedulingError that stopped it, plus any warnings worth showing the
caller. Database failures come back as a retryable StorageError.

Example:
    from shiftdesk.services.scheduling import operations

    result = operations.add_shift(db, organization_id=1, data={
        "employee_id": 7,
        "shift_date": date(2024, 6, 10),
        "start_hour": 9,
        "end_hour": 17,
        "job": "Server",
    })
    if not result.success:
        print(result.error.code, result.error.context)
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from functools import wraps
from typing import Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shiftdesk.db.models.time_off_requests import TimeOffStatus

from . import (
    blocked_periods,
    conflicts,
    copy_schedule,
    labor,
    shift_exchange,
    shift_store,
    time_off,
)
from .availability import find_blocked_period
from .data_loader import end_read, load_shift_slots, to_blocked_window
from .errors import SchedulingError, StorageError
from .time_model import format_hour


logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    """Outcome of an inbound operation."""
    success: bool
    value: Any = None
    error: Optional[SchedulingError] = None
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls, value: Any = None, warnings: Optional[list[str]] = None) -> "OperationResult":
        return cls(success=True, value=value, warnings=warnings or [])

    @classmethod
    def fail(cls, error: SchedulingError) -> "OperationResult":
        return cls(success=False, error=error)


def _operation(func: Callable[..., Any]) -> Callable[..., OperationResult]:
    @wraps(func)
    def wrapper(db: Session, *args, **kwargs) -> OperationResult:
        try:
            outcome = func(db, *args, **kwargs)
        except SchedulingError as e:
            end_read(db)
            logger.info(f"{func.__name__} rejected: {e.code} {e.message} {e.context}")
            return OperationResult.fail(e)
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception(f"{func.__name__} failed in storage")
            return OperationResult.fail(
                StorageError("Storage failure, please retry", context={"detail": str(e.__class__.__name__)})
            )
        # warnings and lookups may have reopened a transaction after the commit
        end_read(db)
        if isinstance(outcome, OperationResult):
            return outcome
        return OperationResult.ok(outcome)

    return wrapper


# --- Shifts ---

@_operation
def add_shift(db: Session, organization_id: int, data: dict[str, Any]):
    return shift_store.add_shift(db, organization_id, data)


@_operation
def update_shift(db: Session, organization_id: int, shift_id: int, updates: dict[str, Any]):
    return shift_store.update_shift(db, organization_id, shift_id, updates)


@_operation
def delete_shift(db: Session, organization_id: int, shift_id: int):
    shift_store.delete_shift(db, organization_id, shift_id)


# --- Time off ---

@_operation
def submit_time_off(db: Session, organization_id: int, data: dict[str, Any]):
    return time_off.submit_time_off(db, organization_id, data)


@_operation
def review_time_off(
    db: Session,
    organization_id: int,
    request_id: int,
    decision: TimeOffStatus,
    reviewer_id: int,
    manager_note: Optional[str] = None,
):
    request = time_off.review_time_off(db, organization_id, request_id, decision, reviewer_id, manager_note)
    warnings = []
    if request.status == TimeOffStatus.APPROVED:
        # approval never moves shifts; tell the reviewer which ones now clash
        clashes = conflicts.find_schedule_conflicts(
            db, organization_id, request.start_date, request.end_date, [request.employee_id]
        )
        for clash in clashes:
            if clash.kind != "time_off":
                continue
            shift = clash.shift
            warnings.append(
                f"Employee {shift.employee_id} is scheduled on {shift.date} "
                f"({format_hour(shift.start_hour)} - {format_hour(shift.end_hour)}) "
                f"during approved time off"
            )
    return OperationResult.ok(request, warnings)


@_operation
def cancel_time_off(db: Session, organization_id: int, request_id: int):
    return time_off.cancel_time_off(db, organization_id, request_id)


# --- Blocked periods ---

@_operation
def add_blocked_period(db: Session, organization_id: int, data: dict[str, Any]):
    period = blocked_periods.add_blocked_period(db, organization_id, data)
    window = to_blocked_window(period)
    employee_ids = [period.employee_id] if period.employee_id is not None else None
    warnings = []
    for shift in load_shift_slots(db, organization_id, period.start_date, period.end_date, employee_ids):
        if shift.is_blocked:
            continue
        # shifts already inside other windows still clash with this one
        hours = (shift.start_hour, shift.end_hour)
        if find_blocked_period(shift.employee_id, shift.date, [window], hour_range=hours) is not None:
            warnings.append(f"Employee {shift.employee_id} already has a shift on {shift.date}")
    return OperationResult.ok(period, warnings)


@_operation
def delete_blocked_period(db: Session, organization_id: int, period_id: int):
    blocked_periods.delete_blocked_period(db, organization_id, period_id)


# --- Shift exchange ---

@_operation
def offer_shift(db: Session, organization_id: int, shift_id: int, from_employee_id: int):
    return shift_exchange.offer_shift(db, organization_id, shift_id, from_employee_id)


@_operation
def accept_drop_request(db: Session, organization_id: int, request_id: int, claiming_employee_id: int):
    return shift_exchange.accept_drop_request(db, organization_id, request_id, claiming_employee_id)


@_operation
def cancel_drop_request(db: Session, organization_id: int, request_id: int):
    return shift_exchange.cancel_drop_request(db, organization_id, request_id)


# --- Schedule-wide ---

@_operation
def copy_week(
    db: Session,
    organization_id: int,
    source_week_start: date,
    target_week_starts: list[date],
    allow_override_blocked: bool = False,
):
    summary = copy_schedule.copy_week(
        db, organization_id, source_week_start, target_week_starts, allow_override_blocked
    )
    warnings = []
    if summary.skipped:
        warnings.append(
            f"Skipped {len(summary.skipped)} shift(s): "
            f"{summary.skipped_blocked_count} blocked, "
            f"{summary.skipped_duplicate_count} duplicate, "
            f"{summary.skipped_overlap_count} overlapping"
        )
    return OperationResult.ok(summary, warnings)


@_operation
def weekly_labor_summary(db: Session, organization_id: int, anchor: date):
    return labor.weekly_labor_summary(db, organization_id, anchor)


@_operation
def find_schedule_conflicts(
    db: Session,
    organization_id: int,
    start: date,
    end: Optional[date] = None,
    employee_ids: Optional[list[int]] = None,
):
    end = end or start + timedelta(days=6)
    return conflicts.find_schedule_conflicts(db, organization_id, start, end, employee_ids)
