from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shiftdesk.api.deps import get_db, get_current_employee, require_manager, raise_for_result
from shiftdesk.db.models.employees import Employees
from shiftdesk.schemas.blocked_periods import (
    BlockedPeriodCreate,
    BlockedPeriodCreateResponse,
    BlockedPeriodResponse,
)
from shiftdesk.services.scheduling import operations, blocked_periods

router = APIRouter(prefix="/blocked-periods", tags=["blocked-periods"])


@router.post("", response_model=BlockedPeriodCreateResponse, status_code=status.HTTP_201_CREATED)
def create_blocked_period(
    payload: BlockedPeriodCreate,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(require_manager),
):
    data = payload.model_dump()
    data["created_by"] = current_employee.id
    result = operations.add_blocked_period(db, current_employee.organization_id, data)
    raise_for_result(result)
    return BlockedPeriodCreateResponse(
        period=BlockedPeriodResponse.model_validate(result.value),
        warnings=result.warnings,
    )


@router.get("", response_model=List[BlockedPeriodResponse])
def list_blocked_periods(
    start_date: date,
    end_date: date,
    employee_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(get_current_employee),
):
    return blocked_periods.list_blocked_periods(
        db, current_employee.organization_id, start_date, end_date, employee_id
    )


@router.delete("/{period_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_blocked_period(
    period_id: int,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(require_manager),
):
    result = operations.delete_blocked_period(db, current_employee.organization_id, period_id)
    raise_for_result(result)
