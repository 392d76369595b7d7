"""
Schedule events for the notification / chat layer.

Events are published after the owning transaction commits. Subscribers are
informed, never consulted: a failing subscriber is logged and skipped.
"""

import logging
from enum import Enum
from typing import Callable


logger = logging.getLogger(__name__)


class ScheduleEvent(str, Enum):
    SHIFT_OFFERED = "shift_offered"
    DROP_REQUEST_ACCEPTED = "drop_request_accepted"
    DROP_REQUEST_CANCELLED = "drop_request_cancelled"
    TIME_OFF_SUBMITTED = "time_off_submitted"
    TIME_OFF_REVIEWED = "time_off_reviewed"
    TIME_OFF_CANCELLED = "time_off_cancelled"


Handler = Callable[[ScheduleEvent, dict], None]

_subscribers: list[Handler] = []


def subscribe(handler: Handler) -> None:
    if handler not in _subscribers:
        _subscribers.append(handler)


def unsubscribe(handler: Handler) -> None:
    if handler in _subscribers:
        _subscribers.remove(handler)


def publish(event: ScheduleEvent, payload: dict) -> None:
    logger.info(f"{event.value}: {payload.get('message', payload)}")
    for handler in list(_subscribers):
        try:
            handler(event, payload)
        except Exception:
            logger.exception(f"Subscriber {handler!r} failed on {event.value}")
