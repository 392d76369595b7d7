from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional


class BlockedPeriodBase(BaseModel):
    employee_id: Optional[int] = None  # None blocks the whole organization
    start_date: date
    end_date: date
    start_hour: Optional[float] = None
    end_hour: Optional[float] = None
    reason: str


class BlockedPeriodCreate(BlockedPeriodBase):
    pass


class BlockedPeriodResponse(BlockedPeriodBase):
    id: int
    created_by: Optional[int]
    created_at: datetime

    class Config:
        from_attributes = True


class BlockedPeriodCreateResponse(BaseModel):
    period: BlockedPeriodResponse
    warnings: list[str] = []
