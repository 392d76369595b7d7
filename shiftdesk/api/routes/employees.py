from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shiftdesk.api.deps import get_db, get_current_employee, require_manager, raise_scheduling_error
from shiftdesk.db.models.employees import Employees
from shiftdesk.schemas.employees import EmployeeCreate, EmployeeUpdate, EmployeeResponse
from shiftdesk.services.scheduling import employees, SchedulingError

router = APIRouter(prefix="/employees", tags=["employees"])


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
def create_employee(
    payload: EmployeeCreate,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(require_manager),
):
    try:
        return employees.create_employee(db, current_employee.organization_id, payload.model_dump())
    except SchedulingError as e:
        raise_scheduling_error(e)


@router.get("", response_model=List[EmployeeResponse])
def list_employees(
    include_inactive: bool = False,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(get_current_employee),
):
    return employees.list_employees(db, current_employee.organization_id, include_inactive)


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(get_current_employee),
):
    try:
        return employees.get_employee(db, current_employee.organization_id, employee_id)
    except SchedulingError as e:
        raise_scheduling_error(e)


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(require_manager),
):
    try:
        return employees.update_employee(
            db, current_employee.organization_id, employee_id, payload.model_dump(exclude_unset=True)
        )
    except SchedulingError as e:
        raise_scheduling_error(e)


@router.post("/{employee_id}/deactivate", response_model=EmployeeResponse)
def deactivate_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(require_manager),
):
    try:
        return employees.deactivate_employee(db, current_employee.organization_id, employee_id)
    except SchedulingError as e:
        raise_scheduling_error(e)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(require_manager),
):
    try:
        employees.delete_employee(db, current_employee.organization_id, employee_id)
    except SchedulingError as e:
        raise_scheduling_error(e)
