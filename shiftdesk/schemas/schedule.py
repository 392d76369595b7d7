from pydantic import BaseModel, Field
from datetime import date
from typing import Optional


class ShiftSlotResponse(BaseModel):
    id: Optional[int]
    employee_id: int
    date: date
    start_hour: float
    end_hour: float
    is_blocked: bool = False
    job: Optional[str] = None
    pay_rate: Optional[float] = None

    class Config:
        from_attributes = True


class WeekResponse(BaseModel):
    week_dates: list[date]
    shifts: list[ShiftSlotResponse]


class LaborLineResponse(BaseModel):
    employee_id: int
    name: str
    hours: float
    cost: float
    shift_count: int

    class Config:
        from_attributes = True


class LaborSummaryResponse(BaseModel):
    week_dates: list[date]
    lines: list[LaborLineResponse]
    total_hours: float
    total_cost: float

    class Config:
        from_attributes = True


class CopyWeekRequest(BaseModel):
    source_week_start: date
    target_week_starts: list[date] = Field(min_length=1)
    allow_override_blocked: bool = False


class CopySkipResponse(BaseModel):
    employee_id: int
    date: date
    start_hour: float
    end_hour: float
    job: Optional[str]
    reason: str

    class Config:
        from_attributes = True


class CopyWeekResponse(BaseModel):
    created_count: int
    skipped_blocked_count: int
    skipped_duplicate_count: int
    skipped_overlap_count: int
    skipped: list[CopySkipResponse]
    warnings: list[str] = []


class ScheduleConflictResponse(BaseModel):
    shift: ShiftSlotResponse
    kind: str
    window: dict

    class Config:
        from_attributes = True
