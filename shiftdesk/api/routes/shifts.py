from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shiftdesk.api.deps import get_db, get_current_employee, require_manager, raise_for_result, raise_scheduling_error
from shiftdesk.db.models.employees import Employees
from shiftdesk.schemas.shifts import ShiftCreate, ShiftUpdate, ShiftResponse
from shiftdesk.services.scheduling import operations, shift_store, SchedulingError

router = APIRouter(prefix="/shifts", tags=["shifts"])


@router.post("", response_model=ShiftResponse, status_code=status.HTTP_201_CREATED)
def create_shift(
    payload: ShiftCreate,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(require_manager),
):
    result = operations.add_shift(db, current_employee.organization_id, payload.model_dump())
    raise_for_result(result)
    return result.value


@router.get("", response_model=List[ShiftResponse])
def list_shifts(
    start_date: date,
    end_date: date,
    employee_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(get_current_employee),
):
    """Everyone in the organization can see the schedule"""
    return shift_store.list_shifts(db, current_employee.organization_id, start_date, end_date, employee_id)


@router.get("/{shift_id}", response_model=ShiftResponse)
def get_shift(
    shift_id: int,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(get_current_employee),
):
    try:
        return shift_store.get_shift(db, current_employee.organization_id, shift_id)
    except SchedulingError as e:
        raise_scheduling_error(e)


@router.put("/{shift_id}", response_model=ShiftResponse)
def update_shift(
    shift_id: int,
    payload: ShiftUpdate,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(require_manager),
):
    update_data = payload.model_dump(exclude_unset=True)
    result = operations.update_shift(db, current_employee.organization_id, shift_id, update_data)
    raise_for_result(result)
    return result.value


@router.delete("/{shift_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_shift(
    shift_id: int,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(require_manager),
):
    result = operations.delete_shift(db, current_employee.organization_id, shift_id)
    raise_for_result(result)
