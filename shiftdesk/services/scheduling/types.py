"""
Internal data types for scheduling logic.
decoupled from SQLAlchemy models for cleaner logic.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class WeekStart(str, Enum):
    SUNDAY = "SUNDAY"
    MONDAY = "MONDAY"


@dataclass
class ShiftSlot:
    """A shift as seen by the conflict checks."""
    id: Optional[int]
    employee_id: int
    date: date
    start_hour: float
    end_hour: float
    is_blocked: bool = False
    job: Optional[str] = None
    pay_rate: Optional[float] = None

    @property
    def duration_hours(self) -> float:
        return self.end_hour - self.start_hour

    def describe(self) -> dict:
        return {
            "shift_id": self.id,
            "employee_id": self.employee_id,
            "date": self.date.isoformat(),
            "start_hour": self.start_hour,
            "end_hour": self.end_hour,
        }


@dataclass
class TimeOffWindow:
    id: int
    employee_id: int
    start_date: date
    end_date: date
    status: str = "APPROVED"

    def describe(self) -> dict:
        return {
            "time_off_request_id": self.id,
            "employee_id": self.employee_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
        }


@dataclass
class BlockedWindow:
    id: int
    employee_id: Optional[int]  # None = whole organization
    start_date: date
    end_date: date
    start_hour: Optional[float] = None  # None means all day
    end_hour: Optional[float] = None

    @property
    def is_day_wide(self) -> bool:
        return self.start_hour is None or self.end_hour is None

    def describe(self) -> dict:
        return {
            "blocked_period_id": self.id,
            "employee_id": self.employee_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "start_hour": self.start_hour,
            "end_hour": self.end_hour,
        }


@dataclass
class EmployeeRates:
    id: int
    name: str
    hourly_pay: Optional[float] = None
    job_pay: dict[str, float] = field(default_factory=dict)


@dataclass
class LaborLine:
    employee_id: int
    name: str
    hours: float = 0.0
    cost: float = 0.0
    shift_count: int = 0


@dataclass
class LaborSummary:
    """Hours and wage cost for one schedule week."""
    week_dates: list[date]
    lines: list[LaborLine] = field(default_factory=list)

    @property
    def total_hours(self) -> float:
        return round(sum(line.hours for line in self.lines), 2)

    @property
    def total_cost(self) -> float:
        return round(sum(line.cost for line in self.lines), 2)


@dataclass
class ScheduleConflict:
    """A scheduled shift sitting inside an unavailability window."""
    shift: ShiftSlot
    kind: str  # "time_off" | "blocked"
    window: dict


@dataclass
class CopySkip:
    employee_id: int
    date: date
    start_hour: float
    end_hour: float
    job: Optional[str]
    reason: str  # "blocked" | "duplicate" | "overlap" | "inactive"


@dataclass
class CopySummary:
    created_count: int = 0
    skipped: list[CopySkip] = field(default_factory=list)

    def _count(self, reason: str) -> int:
        return sum(1 for s in self.skipped if s.reason == reason)

    @property
    def skipped_blocked_count(self) -> int:
        return self._count("blocked")

    @property
    def skipped_duplicate_count(self) -> int:
        return self._count("duplicate")

    @property
    def skipped_overlap_count(self) -> int:
        return self._count("overlap")
