"""
Labour hours and wage cost for a schedule week.
"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from shiftdesk.db.models.organizations import Organizations

from .data_loader import end_read, load_employee_rates, load_shift_slots
from .errors import NotFoundError
from .time_model import week_dates
from .types import EmployeeRates, LaborLine, LaborSummary, ShiftSlot, WeekStart


def resolve_pay_rate(employee: Optional[EmployeeRates], slot: ShiftSlot) -> float:
    """
    Explicit shift rate, then the employee's rate for the job, then their
    default hourly pay, then 0.
    """
    if slot.pay_rate is not None:
        return float(slot.pay_rate)
    if employee is None:
        return 0.0
    job_rate = employee.job_pay.get(slot.job) if slot.job else None
    if job_rate is not None:
        return float(job_rate)
    if employee.hourly_pay is not None:
        return float(employee.hourly_pay)
    return 0.0


def shift_cost(slot: ShiftSlot, employee: Optional[EmployeeRates]) -> float:
    if slot.is_blocked:
        return 0.0
    return slot.duration_hours * resolve_pay_rate(employee, slot)


def summarize_labor(
    days: list[date],
    shifts: list[ShiftSlot],
    employees: dict[int, EmployeeRates],
) -> LaborSummary:
    """Aggregate hours and cost per employee; blocked markers don't count."""
    lines: dict[int, LaborLine] = {}

    for slot in shifts:
        if slot.is_blocked or slot.date not in days:
            continue
        employee = employees.get(slot.employee_id)
        line = lines.get(slot.employee_id)
        if line is None:
            line = LaborLine(
                employee_id=slot.employee_id,
                name=employee.name if employee else "",
            )
            lines[slot.employee_id] = line
        line.hours += slot.duration_hours
        line.cost += shift_cost(slot, employee)
        line.shift_count += 1

    for line in lines.values():
        line.hours = round(line.hours, 2)
        line.cost = round(line.cost, 2)

    return LaborSummary(
        week_dates=days,
        lines=sorted(lines.values(), key=lambda l: (l.name, l.employee_id)),
    )


def weekly_labor_summary(db: Session, organization_id: int, anchor: date) -> LaborSummary:
    organization = db.get(Organizations, organization_id)
    if organization is None:
        raise NotFoundError("Organization not found", context={"organization_id": organization_id})

    days = week_dates(anchor, WeekStart(organization.week_start_day.value))
    shifts = load_shift_slots(db, organization_id, days[0], days[-1])
    employees = load_employee_rates(db, organization_id)
    end_read(db)
    return summarize_labor(days, shifts, employees)
