"""
Shift exchange (drop / claim) workflow.

OPEN -> ACCEPTED   (another employee claims the shift)
OPEN -> CANCELLED  (offer withdrawn)

accept_drop_request claims the request with a conditional UPDATE on its
status and reassigns the shift in the same transaction. Of any number of
concurrent claimants exactly one sees its UPDATE hit a row; everyone else
gets InvalidTransitionError. A failed check after the claim rolls both the
status change and the reassignment back.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shiftdesk.db.models.drop_shift_requests import DropShiftRequests, DropRequestStatus
from shiftdesk.db.models.shifts import Shifts

from .availability import check_can_work
from .data_loader import (
    end_read,
    load_blocked_windows,
    load_shift_slots,
    load_time_off_windows,
    lock_employee,
    to_shift_slot,
)
from .errors import (
    DuplicateOfferError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from .events import ScheduleEvent, publish
from .time_model import format_hour


logger = logging.getLogger(__name__)


def get_drop_request(db: Session, organization_id: int, request_id: int) -> DropShiftRequests:
    request = db.execute(
        select(DropShiftRequests).where(
            DropShiftRequests.id == request_id,
            DropShiftRequests.organization_id == organization_id,
        )
    ).scalar_one_or_none()
    if request is None:
        raise NotFoundError("Drop request not found", context={"drop_request_id": request_id})
    return request


def list_drop_requests(
    db: Session,
    organization_id: int,
    status: Optional[DropRequestStatus] = None,
) -> list[DropShiftRequests]:
    stmt = select(DropShiftRequests).where(DropShiftRequests.organization_id == organization_id)
    if status is not None:
        stmt = stmt.where(DropShiftRequests.status == status)
    rows = list(db.execute(stmt.order_by(DropShiftRequests.created_at)).scalars().all())
    end_read(db)
    return rows


def _describe_shift(shift: Shifts) -> str:
    return f"{shift.shift_date} ({format_hour(shift.start_hour)} - {format_hour(shift.end_hour)})"


def offer_shift(
    db: Session,
    organization_id: int,
    shift_id: int,
    from_employee_id: int,
) -> DropShiftRequests:
    try:
        shift = db.execute(
            select(Shifts).where(
                Shifts.id == shift_id,
                Shifts.organization_id == organization_id,
            )
        ).scalar_one_or_none()
        if shift is None:
            raise NotFoundError("Shift not found", context={"shift_id": shift_id})
        if shift.employee_id != from_employee_id:
            raise ValidationError(
                "You can only drop your own shifts",
                context={"shift_id": shift_id, "employee_id": from_employee_id},
            )
        if shift.is_blocked:
            raise ValidationError("Blocked entries cannot be offered", context={"shift_id": shift_id})

        existing = db.execute(
            select(DropShiftRequests).where(
                DropShiftRequests.shift_id == shift_id,
                DropShiftRequests.status == DropRequestStatus.OPEN,
            )
        ).scalar_one_or_none()
        if existing is not None:
            raise DuplicateOfferError(
                "Shift already has an open drop request",
                context={"shift_id": shift_id, "drop_request_id": existing.id},
            )

        request = DropShiftRequests(
            organization_id=organization_id,
            shift_id=shift_id,
            from_employee_id=from_employee_id,
            status=DropRequestStatus.OPEN,
        )
        db.add(request)
        db.commit()
    except IntegrityError:
        # lost a race against another offer for the same shift
        db.rollback()
        raise DuplicateOfferError(
            "Shift already has an open drop request",
            context={"shift_id": shift_id},
        )
    except Exception:
        db.rollback()
        raise

    logger.info(f"Shift {shift_id} offered by employee {from_employee_id} (request {request.id})")
    publish(ScheduleEvent.SHIFT_OFFERED, {
        "drop_request_id": request.id,
        "shift_id": shift_id,
        "employee_id": from_employee_id,
        "message": f"Employee {from_employee_id} is looking to drop their shift on {_describe_shift(shift)}",
    })
    return request


def _claim_status(
    db: Session,
    request: DropShiftRequests,
    values: dict,
    message: str,
) -> None:
    """Compare-and-swap the request out of OPEN or raise with its stored state."""
    result = db.execute(
        update(DropShiftRequests)
        .where(
            DropShiftRequests.id == request.id,
            DropShiftRequests.status == DropRequestStatus.OPEN,
        )
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    db.refresh(request)
    if result.rowcount != 1:
        db.expunge(request)
        raise InvalidTransitionError(
            message,
            context={"drop_request_id": request.id, "status": request.status.value},
            current=request,
        )


def cancel_drop_request(db: Session, organization_id: int, request_id: int) -> DropShiftRequests:
    """Withdraw an open offer. The shift itself is untouched."""
    try:
        request = get_drop_request(db, organization_id, request_id)
        _claim_status(
            db,
            request,
            {"status": DropRequestStatus.CANCELLED},
            "Only open drop requests can be cancelled",
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Drop request {request_id} cancelled")
    publish(ScheduleEvent.DROP_REQUEST_CANCELLED, {
        "drop_request_id": request_id,
        "shift_id": request.shift_id,
        "message": "Drop request withdrawn",
    })
    return request


def accept_drop_request(
    db: Session,
    organization_id: int,
    request_id: int,
    claiming_employee_id: int,
) -> Shifts:
    """Claim an open drop request, reassigning its shift to the claimant."""
    try:
        request = get_drop_request(db, organization_id, request_id)
        if request.from_employee_id == claiming_employee_id:
            raise ValidationError(
                "You cannot claim your own shift",
                context={"drop_request_id": request_id},
            )

        _claim_status(
            db,
            request,
            {
                "status": DropRequestStatus.ACCEPTED,
                "accepted_by_employee_id": claiming_employee_id,
                "accepted_at": datetime.now(timezone.utc),
            },
            "Request no longer available",
        )

        shift = None
        if request.shift_id is not None:
            shift = db.execute(
                select(Shifts).where(
                    Shifts.id == request.shift_id,
                    Shifts.organization_id == organization_id,
                )
            ).scalar_one_or_none()
        if shift is None:
            raise NotFoundError("Shift not found", context={"drop_request_id": request_id})

        lock_employee(db, organization_id, claiming_employee_id)
        day = shift.shift_date
        candidate = to_shift_slot(shift)
        candidate.employee_id = claiming_employee_id
        check_can_work(
            candidate,
            load_time_off_windows(db, [claiming_employee_id], day, day),
            load_blocked_windows(db, organization_id, [claiming_employee_id], day, day),
            load_shift_slots(db, organization_id, day, day, [claiming_employee_id]),
            exclude_shift_id=shift.id,
        )

        previous_owner = shift.employee_id
        shift.employee_id = claiming_employee_id
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        f"Drop request {request_id} accepted: shift {shift.id} moved from "
        f"employee {previous_owner} to {claiming_employee_id}"
    )
    publish(ScheduleEvent.DROP_REQUEST_ACCEPTED, {
        "drop_request_id": request_id,
        "shift_id": shift.id,
        "from_employee_id": previous_owner,
        "employee_id": claiming_employee_id,
        "message": f"Employee {claiming_employee_id} accepted employee {previous_owner}'s shift on {_describe_shift(shift)}",
    })
    return shift
