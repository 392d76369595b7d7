from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from shiftdesk.db.models.employees import Role


class EmployeeBase(BaseModel):
    name: str
    role: Role = Role.EMPLOYEE
    jobs: list[str] = []
    hourly_pay: Optional[float] = Field(default=None, ge=0)
    job_pay: dict[str, float] = {}


class EmployeeCreate(EmployeeBase):
    pass


class EmployeeUpdate(BaseModel):
    name: Optional[str] = None
    role: Optional[Role] = None
    is_active: Optional[bool] = None
    jobs: Optional[list[str]] = None
    hourly_pay: Optional[float] = Field(default=None, ge=0)
    job_pay: Optional[dict[str, float]] = None


class EmployeeResponse(EmployeeBase):
    id: int
    organization_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
