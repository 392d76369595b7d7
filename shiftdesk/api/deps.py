from typing import Generator, NoReturn
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from shiftdesk.db.database import SessionLocal
from shiftdesk.core.security import decode_access_token
from shiftdesk.db.models.employees import Employees
from shiftdesk.services.scheduling import (
    OperationResult,
    SchedulingError,
    ValidationError,
    NotFoundError,
    TimeOffConflict,
    OverlapConflict,
    InvalidTransitionError,
    DuplicateOfferError,
    StorageError,
)

security = HTTPBearer()

# most specific first; subclasses inherit their parent's status
ERROR_STATUS = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (TimeOffConflict, status.HTTP_409_CONFLICT),
    (OverlapConflict, status.HTTP_409_CONFLICT),
    (InvalidTransitionError, status.HTTP_409_CONFLICT),
    (DuplicateOfferError, status.HTTP_409_CONFLICT),
    (StorageError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_employee(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> Employees:
    token_data = decode_access_token(credentials.credentials)
    if token_data is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    employee = db.query(Employees).filter(Employees.id == token_data.employee_id).first()
    if not employee:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Employee not found")

    if token_data.organization_id is not None and token_data.organization_id != employee.organization_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    if not employee.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account disabled")

    return employee


def require_manager(
    current_employee: Employees = Depends(get_current_employee),
) -> Employees:
    """Require the caller to be a MANAGER or ADMIN of their organization"""
    if not current_employee.is_manager:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Manager or admin access required")
    return current_employee


def error_status(error: SchedulingError) -> int:
    for kind, code in ERROR_STATUS:
        if isinstance(error, kind):
            return code
    return status.HTTP_400_BAD_REQUEST


def raise_for_result(result: OperationResult) -> None:
    """Turn a failed operation into the matching HTTPException."""
    if not result.success:
        raise_scheduling_error(result.error)


def raise_scheduling_error(error: SchedulingError) -> NoReturn:
    raise HTTPException(status_code=error_status(error), detail=error.to_dict())
