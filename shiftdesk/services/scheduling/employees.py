"""
Employee lifecycle. Employees are normally deactivated rather than deleted;
hard deletion is refused while any shift still references them.
"""

import logging
from typing import Any

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from shiftdesk.core.config import settings
from shiftdesk.db.models.employees import Employees, Role
from shiftdesk.db.models.organizations import Organizations
from shiftdesk.db.models.shifts import Shifts

from .data_loader import end_read
from .errors import NotFoundError, ValidationError


logger = logging.getLogger(__name__)

EMPLOYEE_FIELDS = ("name", "role", "is_active", "jobs", "hourly_pay", "job_pay")


def _validate(data: dict[str, Any]) -> None:
    if "name" in data and not (data["name"] or "").strip():
        raise ValidationError("Name is required")
    unknown_jobs = [j for j in data.get("jobs") or [] if j not in settings.ALLOWED_JOBS]
    if unknown_jobs:
        raise ValidationError("Unknown job", context={"jobs": unknown_jobs})
    for job, rate in (data.get("job_pay") or {}).items():
        if rate is not None and rate < 0:
            raise ValidationError("Pay rates cannot be negative", context={"job": job})
    if data.get("hourly_pay") is not None and data["hourly_pay"] < 0:
        raise ValidationError("Pay rates cannot be negative", context={"hourly_pay": data["hourly_pay"]})


def get_employee(db: Session, organization_id: int, employee_id: int) -> Employees:
    employee = db.execute(
        select(Employees).where(
            Employees.id == employee_id,
            Employees.organization_id == organization_id,
        )
    ).scalar_one_or_none()
    if employee is None:
        raise NotFoundError("Employee not found", context={"employee_id": employee_id})
    return employee


def list_employees(
    db: Session,
    organization_id: int,
    include_inactive: bool = False,
) -> list[Employees]:
    stmt = select(Employees).where(Employees.organization_id == organization_id)
    if not include_inactive:
        stmt = stmt.where(Employees.is_active == True)
    rows = list(db.execute(stmt.order_by(Employees.name)).scalars().all())
    end_read(db)
    return rows


def create_employee(db: Session, organization_id: int, data: dict[str, Any]) -> Employees:
    if not (data.get("name") or "").strip():
        raise ValidationError("Name is required")
    _validate(data)

    try:
        if db.get(Organizations, organization_id) is None:
            raise NotFoundError("Organization not found", context={"organization_id": organization_id})
        employee = Employees(
            organization_id=organization_id,
            name=data["name"].strip(),
            role=Role(data.get("role") or Role.EMPLOYEE),
            is_active=data.get("is_active", True),
            jobs=list(data.get("jobs") or []),
            hourly_pay=data.get("hourly_pay"),
            job_pay=dict(data.get("job_pay") or {}),
        )
        db.add(employee)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Created employee {employee.id} in organization {organization_id}")
    return employee


def update_employee(
    db: Session,
    organization_id: int,
    employee_id: int,
    updates: dict[str, Any],
) -> Employees:
    unknown = set(updates) - set(EMPLOYEE_FIELDS)
    if unknown:
        raise ValidationError("Fields cannot be updated", context={"fields": sorted(unknown)})
    _validate(updates)

    try:
        employee = get_employee(db, organization_id, employee_id)
        for field, value in updates.items():
            if field == "name":
                value = value.strip()
            setattr(employee, field, value)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Updated employee {employee_id}: {sorted(updates)}")
    return employee


def deactivate_employee(db: Session, organization_id: int, employee_id: int) -> Employees:
    """Soft removal: existing shifts stay, new placements are refused."""
    return update_employee(db, organization_id, employee_id, {"is_active": False})


def delete_employee(db: Session, organization_id: int, employee_id: int) -> None:
    try:
        employee = get_employee(db, organization_id, employee_id)
        shift_count = db.execute(
            select(func.count()).select_from(Shifts).where(Shifts.employee_id == employee_id)
        ).scalar_one()
        if shift_count:
            raise ValidationError(
                "Employee still has shifts; deactivate them instead",
                context={"employee_id": employee_id, "shift_count": shift_count},
            )
        db.delete(employee)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Deleted employee {employee_id}")
