"""
Manager-imposed unavailability. Effective as soon as it is stored; no review.
"""

import logging
from datetime import date
from typing import Any, Optional

from sqlalchemy import select, and_, or_
from sqlalchemy.orm import Session

from shiftdesk.db.models.blocked_periods import BlockedPeriods

from .data_loader import end_read, lock_employee
from .errors import NotFoundError, ValidationError


logger = logging.getLogger(__name__)


def _validate(data: dict[str, Any]) -> None:
    start_date = data.get("start_date")
    end_date = data.get("end_date")
    if start_date is None or end_date is None:
        raise ValidationError("start_date and end_date are required")
    if start_date > end_date:
        raise ValidationError(
            "start_date must be on or before end_date",
            context={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
        )
    if not (data.get("reason") or "").strip():
        raise ValidationError("Reason is required for blocked days")

    start_hour = data.get("start_hour")
    end_hour = data.get("end_hour")
    if (start_hour is None) != (end_hour is None):
        raise ValidationError("start_hour and end_hour must be given together")
    if start_hour is not None:
        if not 0 <= start_hour < end_hour <= 24:
            raise ValidationError(
                "Blocked hours must be an increasing range within 0-24",
                context={"start_hour": start_hour, "end_hour": end_hour},
            )


def add_blocked_period(db: Session, organization_id: int, data: dict[str, Any]) -> BlockedPeriods:
    """Store a blocked period; employee_id None blocks the whole organization."""
    _validate(data)
    employee_id = data.get("employee_id")
    try:
        if employee_id is not None:
            lock_employee(db, organization_id, employee_id, require_active=False)
        period = BlockedPeriods(
            organization_id=organization_id,
            employee_id=employee_id,
            start_date=data["start_date"],
            end_date=data["end_date"],
            start_hour=data.get("start_hour"),
            end_hour=data.get("end_hour"),
            reason=data["reason"].strip(),
            created_by=data.get("created_by"),
        )
        db.add(period)
        db.commit()
    except Exception:
        db.rollback()
        raise

    scope = f"employee {employee_id}" if employee_id is not None else "organization"
    logger.info(f"Blocked {scope} from {period.start_date} to {period.end_date}")
    return period


def delete_blocked_period(db: Session, organization_id: int, period_id: int) -> None:
    try:
        period = db.execute(
            select(BlockedPeriods).where(
                BlockedPeriods.id == period_id,
                BlockedPeriods.organization_id == organization_id,
            )
        ).scalar_one_or_none()
        if period is None:
            raise NotFoundError("Blocked entry not found", context={"blocked_period_id": period_id})
        db.delete(period)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Removed blocked period {period_id}")


def list_blocked_periods(
    db: Session,
    organization_id: int,
    start: date,
    end: date,
    employee_id: Optional[int] = None,
) -> list[BlockedPeriods]:
    stmt = select(BlockedPeriods).where(
        and_(
            BlockedPeriods.organization_id == organization_id,
            BlockedPeriods.start_date <= end,
            BlockedPeriods.end_date >= start,
        )
    )
    if employee_id is not None:
        stmt = stmt.where(
            or_(BlockedPeriods.employee_id == employee_id, BlockedPeriods.employee_id.is_(None))
        )
    rows = list(db.execute(stmt.order_by(BlockedPeriods.start_date)).scalars().all())
    end_read(db)
    return rows
