from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from shiftdesk.api.deps import get_db, get_current_employee, require_manager, raise_for_result, raise_scheduling_error
from shiftdesk.db.models.employees import Employees
from shiftdesk.db.models.time_off_requests import TimeOffStatus
from shiftdesk.schemas.time_off_requests import (
    TimeOffRequestCreate,
    TimeOffRequestResponse,
    TimeOffReview,
    TimeOffReviewResponse,
)
from shiftdesk.services.scheduling import operations, time_off, SchedulingError

router = APIRouter(prefix="/time-off-requests", tags=["time-off-requests"])


@router.post("", response_model=TimeOffRequestResponse, status_code=status.HTTP_201_CREATED)
def create_time_off_request(
    payload: TimeOffRequestCreate,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(get_current_employee),
):
    """Employees request time off for themselves, managers can file for anyone"""
    employee_id = payload.employee_id or current_employee.id
    if employee_id != current_employee.id and not current_employee.is_manager:
        raise HTTPException(status_code=403, detail="Can only create time off requests for yourself")

    data = payload.model_dump()
    data.update(employee_id=employee_id, requester_id=current_employee.id)
    result = operations.submit_time_off(db, current_employee.organization_id, data)
    raise_for_result(result)
    return result.value


@router.get("", response_model=List[TimeOffRequestResponse])
def list_time_off_requests(
    employee_id: Optional[int] = None,
    request_status: Optional[TimeOffStatus] = None,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(get_current_employee),
):
    """Managers see all requests, employees only their own"""
    if not current_employee.is_manager:
        employee_id = current_employee.id
    return time_off.list_time_off_requests(db, current_employee.organization_id, employee_id, request_status)


@router.get("/{request_id}", response_model=TimeOffRequestResponse)
def get_time_off_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(get_current_employee),
):
    try:
        request = time_off.get_time_off_request(db, current_employee.organization_id, request_id)
    except SchedulingError as e:
        raise_scheduling_error(e)

    if request.employee_id != current_employee.id and not current_employee.is_manager:
        raise HTTPException(status_code=403, detail="No access to this request")
    return request


@router.post("/{request_id}/review", response_model=TimeOffReviewResponse)
def review_time_off_request(
    request_id: int,
    payload: TimeOffReview,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(require_manager),
):
    result = operations.review_time_off(
        db,
        current_employee.organization_id,
        request_id,
        TimeOffStatus(payload.decision),
        current_employee.id,
        payload.manager_note,
    )
    raise_for_result(result)
    return TimeOffReviewResponse(
        request=TimeOffRequestResponse.model_validate(result.value),
        warnings=result.warnings,
    )


@router.post("/{request_id}/cancel", response_model=TimeOffRequestResponse)
def cancel_time_off_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(get_current_employee),
):
    """Withdraw a pending request - own request OR manager/admin"""
    try:
        request = time_off.get_time_off_request(db, current_employee.organization_id, request_id)
    except SchedulingError as e:
        raise_scheduling_error(e)

    if request.employee_id != current_employee.id and not current_employee.is_manager:
        raise HTTPException(status_code=403, detail="No access to this request")

    result = operations.cancel_time_off(db, current_employee.organization_id, request_id)
    raise_for_result(result)
    return result.value
