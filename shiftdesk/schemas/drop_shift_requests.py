from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from shiftdesk.db.models.drop_shift_requests import DropRequestStatus


class DropRequestCreate(BaseModel):
    shift_id: int


class DropRequestResponse(BaseModel):
    id: int
    shift_id: Optional[int]
    from_employee_id: int
    status: DropRequestStatus
    accepted_by_employee_id: Optional[int]
    accepted_at: Optional[datetime]
    created_at: datetime

    class Config:
        from_attributes = True
