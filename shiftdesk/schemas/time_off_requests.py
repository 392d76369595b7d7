from pydantic import BaseModel
from datetime import date, datetime
from typing import Literal, Optional
from shiftdesk.db.models.time_off_requests import TimeOffStatus


class TimeOffRequestBase(BaseModel):
    start_date: date
    end_date: date
    reason: str


class TimeOffRequestCreate(TimeOffRequestBase):
    # managers may file on behalf of someone else; defaults to the caller
    employee_id: Optional[int] = None


class TimeOffReview(BaseModel):
    decision: Literal["APPROVED", "DENIED"]
    manager_note: Optional[str] = None


class TimeOffRequestResponse(TimeOffRequestBase):
    id: int
    employee_id: int
    requester_id: int
    status: TimeOffStatus
    manager_note: Optional[str]
    reviewed_by: Optional[int]
    reviewed_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TimeOffReviewResponse(BaseModel):
    request: TimeOffRequestResponse
    warnings: list[str] = []
