from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional


class ShiftBase(BaseModel):
    employee_id: int
    shift_date: date
    start_hour: float
    end_hour: float
    job: Optional[str] = None
    pay_rate: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None


class ShiftCreate(ShiftBase):
    is_blocked: bool = False


class ShiftUpdate(BaseModel):
    employee_id: Optional[int] = None
    shift_date: Optional[date] = None
    start_hour: Optional[float] = None
    end_hour: Optional[float] = None
    job: Optional[str] = None
    pay_rate: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None


class ShiftResponse(ShiftBase):
    id: int
    organization_id: int
    is_blocked: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
