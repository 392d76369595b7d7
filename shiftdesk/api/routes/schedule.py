from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shiftdesk.api.deps import get_db, get_current_employee, require_manager, raise_for_result, raise_scheduling_error
from shiftdesk.db.models.employees import Employees
from shiftdesk.db.models.organizations import Organizations
from shiftdesk.schemas.schedule import (
    CopyWeekRequest,
    CopyWeekResponse,
    CopySkipResponse,
    LaborSummaryResponse,
    ScheduleConflictResponse,
    ShiftSlotResponse,
    WeekResponse,
)
from shiftdesk.services.scheduling import operations, NotFoundError, WeekStart
from shiftdesk.services.scheduling.data_loader import load_shift_slots
from shiftdesk.services.scheduling.time_model import week_dates

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.get("/week", response_model=WeekResponse)
def get_week(
    anchor: date,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(get_current_employee),
):
    """The organization's schedule for the week containing anchor"""
    organization = db.get(Organizations, current_employee.organization_id)
    if organization is None:
        raise_scheduling_error(NotFoundError("Organization not found"))

    days = week_dates(anchor, WeekStart(organization.week_start_day.value))
    shifts = load_shift_slots(db, organization.id, days[0], days[-1])
    return WeekResponse(
        week_dates=days,
        shifts=[ShiftSlotResponse.model_validate(s) for s in shifts],
    )


@router.get("/labor", response_model=LaborSummaryResponse)
def get_labor_summary(
    anchor: date,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(require_manager),
):
    result = operations.weekly_labor_summary(db, current_employee.organization_id, anchor)
    raise_for_result(result)
    return LaborSummaryResponse.model_validate(result.value)


@router.post("/copy", response_model=CopyWeekResponse)
def copy_week(
    payload: CopyWeekRequest,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(require_manager),
):
    result = operations.copy_week(
        db,
        current_employee.organization_id,
        payload.source_week_start,
        payload.target_week_starts,
        payload.allow_override_blocked,
    )
    raise_for_result(result)
    summary = result.value
    return CopyWeekResponse(
        created_count=summary.created_count,
        skipped_blocked_count=summary.skipped_blocked_count,
        skipped_duplicate_count=summary.skipped_duplicate_count,
        skipped_overlap_count=summary.skipped_overlap_count,
        skipped=[CopySkipResponse.model_validate(s) for s in summary.skipped],
        warnings=result.warnings,
    )


@router.get("/conflicts", response_model=List[ScheduleConflictResponse])
def get_conflicts(
    start_date: date,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(require_manager),
):
    """Shifts that now fall inside approved time off or a blocked period"""
    result = operations.find_schedule_conflicts(db, current_employee.organization_id, start_date, end_date)
    raise_for_result(result)
    return [ScheduleConflictResponse.model_validate(c) for c in result.value]
