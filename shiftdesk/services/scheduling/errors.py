"""
Error kinds raised by the scheduling services.

Business-rule errors are expected outcomes: the operation facade turns them
into typed results and the API layer into HTTP responses. Only StorageError
is worth retrying.
"""

from typing import Any, Optional


class SchedulingError(Exception):
    code = "scheduling_error"
    retryable = False

    def __init__(self, message: str, context: Optional[dict] = None, current: Any = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        # entity as stored when the error was raised (transition errors)
        self.current = current

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "context": self.context}


class ValidationError(SchedulingError):
    code = "validation_error"


class NotFoundError(SchedulingError):
    code = "not_found"


class TimeOffConflict(SchedulingError):
    """Employee has approved time off (or a blocked period) on the date."""
    code = "time_off_conflict"


class BlockedPeriodConflict(TimeOffConflict):
    code = "blocked_period_conflict"


class OverlapConflict(SchedulingError):
    code = "overlap_conflict"


class InvalidTransitionError(SchedulingError):
    """State machine misuse; under races it means someone else already acted."""
    code = "invalid_transition"


class AlreadyReviewedError(InvalidTransitionError):
    code = "already_reviewed"


class DuplicateOfferError(SchedulingError):
    code = "duplicate_offer"


class StorageError(SchedulingError):
    code = "storage_error"
    retryable = True
