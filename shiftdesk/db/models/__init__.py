from shiftdesk.db.database import Base

# Import models
from shiftdesk.db.models.organizations import Organizations, WeekStartDay
from shiftdesk.db.models.employees import Employees, Role
from shiftdesk.db.models.shifts import Shifts
from shiftdesk.db.models.time_off_requests import TimeOffRequests, TimeOffStatus
from shiftdesk.db.models.blocked_periods import BlockedPeriods
from shiftdesk.db.models.drop_shift_requests import DropShiftRequests, DropRequestStatus

__all__ = [
    "Base",
    # Models
    "Organizations",
    "Employees",
    "Shifts",
    "TimeOffRequests",
    "BlockedPeriods",
    "DropShiftRequests",
    # Enums
    "WeekStartDay",
    "Role",
    "TimeOffStatus",
    "DropRequestStatus",
]
