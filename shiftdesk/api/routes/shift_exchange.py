from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from shiftdesk.api.deps import get_db, get_current_employee, raise_for_result, raise_scheduling_error
from shiftdesk.db.models.drop_shift_requests import DropRequestStatus
from shiftdesk.db.models.employees import Employees
from shiftdesk.schemas.drop_shift_requests import DropRequestCreate, DropRequestResponse
from shiftdesk.schemas.shifts import ShiftResponse
from shiftdesk.services.scheduling import operations, shift_exchange, SchedulingError

router = APIRouter(prefix="/shift-exchange", tags=["shift-exchange"])


@router.post("/drop-requests", response_model=DropRequestResponse, status_code=status.HTTP_201_CREATED)
def offer_shift(
    payload: DropRequestCreate,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(get_current_employee),
):
    """Put one of your own shifts up for grabs"""
    result = operations.offer_shift(db, current_employee.organization_id, payload.shift_id, current_employee.id)
    raise_for_result(result)
    return result.value


@router.get("/drop-requests", response_model=List[DropRequestResponse])
def list_drop_requests(
    request_status: Optional[DropRequestStatus] = DropRequestStatus.OPEN,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(get_current_employee),
):
    return shift_exchange.list_drop_requests(db, current_employee.organization_id, request_status)


@router.post("/drop-requests/{request_id}/accept", response_model=ShiftResponse)
def accept_drop_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(get_current_employee),
):
    """Claim an open drop request; the shift moves to the caller"""
    result = operations.accept_drop_request(db, current_employee.organization_id, request_id, current_employee.id)
    raise_for_result(result)
    return result.value


@router.post("/drop-requests/{request_id}/cancel", response_model=DropRequestResponse)
def cancel_drop_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_employee: Employees = Depends(get_current_employee),
):
    try:
        request = shift_exchange.get_drop_request(db, current_employee.organization_id, request_id)
    except SchedulingError as e:
        raise_scheduling_error(e)

    if request.from_employee_id != current_employee.id and not current_employee.is_manager:
        raise HTTPException(status_code=403, detail="Can only cancel your own drop requests")

    result = operations.cancel_drop_request(db, current_employee.organization_id, request_id)
    raise_for_result(result)
    return result.value
