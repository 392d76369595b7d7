"""
Time-off request workflow.

PENDING -> APPROVED | DENIED   (review, managers)
PENDING -> CANCELLED           (withdrawal)

All three targets are terminal. A transition is a guarded UPDATE on the
status column, so two reviewers racing on one request cannot both win.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from shiftdesk.db.models.time_off_requests import TimeOffRequests, TimeOffStatus

from .data_loader import end_read, lock_employee
from .errors import AlreadyReviewedError, InvalidTransitionError, NotFoundError, ValidationError
from .events import ScheduleEvent, publish


logger = logging.getLogger(__name__)

REVIEW_DECISIONS = (TimeOffStatus.APPROVED, TimeOffStatus.DENIED)


def get_time_off_request(db: Session, organization_id: int, request_id: int) -> TimeOffRequests:
    request = db.execute(
        select(TimeOffRequests).where(
            TimeOffRequests.id == request_id,
            TimeOffRequests.organization_id == organization_id,
        )
    ).scalar_one_or_none()
    if request is None:
        raise NotFoundError("Time off request not found", context={"time_off_request_id": request_id})
    return request


def list_time_off_requests(
    db: Session,
    organization_id: int,
    employee_id: Optional[int] = None,
    status: Optional[TimeOffStatus] = None,
) -> list[TimeOffRequests]:
    stmt = select(TimeOffRequests).where(TimeOffRequests.organization_id == organization_id)
    if employee_id is not None:
        stmt = stmt.where(TimeOffRequests.employee_id == employee_id)
    if status is not None:
        stmt = stmt.where(TimeOffRequests.status == status)
    rows = list(db.execute(stmt.order_by(TimeOffRequests.start_date)).scalars().all())
    end_read(db)
    return rows


def submit_time_off(db: Session, organization_id: int, data: dict[str, Any]) -> TimeOffRequests:
    """
    Create a PENDING request. Existing shifts in the window are not checked
    here; they surface as conflicts once the request is approved.
    """
    start_date = data.get("start_date")
    end_date = data.get("end_date")
    reason = (data.get("reason") or "").strip()
    employee_id = data.get("employee_id")

    if start_date is None or end_date is None:
        raise ValidationError("start_date and end_date are required")
    if start_date > end_date:
        raise ValidationError(
            "start_date must be on or before end_date",
            context={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
        )
    if not reason:
        raise ValidationError("Reason is required for this request")

    try:
        lock_employee(db, organization_id, employee_id)
        request = TimeOffRequests(
            organization_id=organization_id,
            employee_id=employee_id,
            requester_id=data.get("requester_id") or employee_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=TimeOffStatus.PENDING,
        )
        db.add(request)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Time off request {request.id} submitted for employee {employee_id}")
    publish(ScheduleEvent.TIME_OFF_SUBMITTED, {
        "time_off_request_id": request.id,
        "employee_id": employee_id,
        "message": f"Time off requested {start_date} to {end_date}",
    })
    return request


def _transition(
    db: Session,
    organization_id: int,
    request_id: int,
    values: dict[str, Any],
    on_conflict: type[InvalidTransitionError],
    message: str,
) -> TimeOffRequests:
    """Move a PENDING request to a terminal state, or raise with the stored request."""
    try:
        request = get_time_off_request(db, organization_id, request_id)
        result = db.execute(
            update(TimeOffRequests)
            .where(
                TimeOffRequests.id == request_id,
                TimeOffRequests.status == TimeOffStatus.PENDING,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        db.refresh(request)
        if result.rowcount != 1:
            # detach so the caller keeps the stored state after rollback
            db.expunge(request)
            raise on_conflict(
                message,
                context={"time_off_request_id": request_id, "status": request.status.value},
                current=request,
            )
        db.commit()
    except Exception:
        db.rollback()
        raise
    return request


def review_time_off(
    db: Session,
    organization_id: int,
    request_id: int,
    decision: TimeOffStatus,
    reviewer_id: int,
    manager_note: Optional[str] = None,
) -> TimeOffRequests:
    if decision not in REVIEW_DECISIONS:
        raise ValidationError(
            "Decision must be APPROVED or DENIED",
            context={"decision": str(getattr(decision, "value", decision))},
        )
    decision = TimeOffStatus(decision)

    now = datetime.now(timezone.utc)
    request = _transition(
        db,
        organization_id,
        request_id,
        values={
            "status": decision,
            "reviewed_by": reviewer_id,
            "reviewed_at": now,
            "manager_note": manager_note,
            "updated_at": now,
        },
        on_conflict=AlreadyReviewedError,
        message="Request has already been reviewed",
    )

    logger.info(f"Time off request {request_id} {decision.value.lower()} by {reviewer_id}")
    publish(ScheduleEvent.TIME_OFF_REVIEWED, {
        "time_off_request_id": request_id,
        "employee_id": request.employee_id,
        "status": decision.value,
        "message": f"Time off {request.start_date} to {request.end_date} {decision.value.lower()}",
    })
    return request


def cancel_time_off(db: Session, organization_id: int, request_id: int) -> TimeOffRequests:
    request = _transition(
        db,
        organization_id,
        request_id,
        values={
            "status": TimeOffStatus.CANCELLED,
            "updated_at": datetime.now(timezone.utc),
        },
        on_conflict=InvalidTransitionError,
        message="Only pending requests can be cancelled",
    )

    logger.info(f"Time off request {request_id} cancelled")
    publish(ScheduleEvent.TIME_OFF_CANCELLED, {
        "time_off_request_id": request_id,
        "employee_id": request.employee_id,
        "message": "Time off request withdrawn",
    })
    return request
