"""
Scheduling service package: shift placement rules, time off, blocked days,
drop / claim exchanges and schedule-wide helpers.

Usage:
    from datetime import date
    from shiftdesk.services.scheduling import operations

    # Facade - returns OperationResult, never raises for rule violations
    result = operations.add_shift(db, organization_id=1, data={...})

    # Or call a service directly and handle SchedulingError yourself
    from shiftdesk.services.scheduling import shift_store, OverlapConflict

    try:
        shift_store.add_shift(db, 1, data)
    except OverlapConflict as e:
        print(e.context["conflicting_shift"])
"""

from .types import (
    WeekStart,
    ShiftSlot,
    TimeOffWindow,
    BlockedWindow,
    EmployeeRates,
    LaborLine,
    LaborSummary,
    ScheduleConflict,
    CopySkip,
    CopySummary,
)
from .errors import (
    SchedulingError,
    ValidationError,
    NotFoundError,
    TimeOffConflict,
    BlockedPeriodConflict,
    OverlapConflict,
    InvalidTransitionError,
    AlreadyReviewedError,
    DuplicateOfferError,
    StorageError,
)
from .operations import OperationResult

__all__ = [
    # Types
    "WeekStart",
    "ShiftSlot",
    "TimeOffWindow",
    "BlockedWindow",
    "EmployeeRates",
    "LaborLine",
    "LaborSummary",
    "ScheduleConflict",
    "CopySkip",
    "CopySummary",
    "OperationResult",
    # Errors
    "SchedulingError",
    "ValidationError",
    "NotFoundError",
    "TimeOffConflict",
    "BlockedPeriodConflict",
    "OverlapConflict",
    "InvalidTransitionError",
    "AlreadyReviewedError",
    "DuplicateOfferError",
    "StorageError",
]
