import pytest
from datetime import date

from shiftdesk.services.scheduling import events, operations
from shiftdesk.services.scheduling.events import ScheduleEvent


@pytest.fixture
def received():
    seen = []

    def handler(event, payload):
        seen.append((event, payload))

    events.subscribe(handler)
    yield seen
    events.unsubscribe(handler)


@pytest.fixture
def broken_subscriber():
    def handler(event, payload):
        raise RuntimeError("chat service down")

    events.subscribe(handler)
    yield handler
    events.unsubscribe(handler)


class TestScheduleEvents:
    def test_offer_and_claim_publish(self, db, org, alice, bob, make_shift, received):
        shift = make_shift(alice, date(2024, 6, 10), 9, 17)
        offered = operations.offer_shift(db, org.id, shift.id, alice.id)
        operations.accept_drop_request(db, org.id, offered.value.id, bob.id)

        kinds = [event for event, _ in received]
        assert kinds == [ScheduleEvent.SHIFT_OFFERED, ScheduleEvent.DROP_REQUEST_ACCEPTED]
        assert "9am - 5pm" in received[0][1]["message"]
        assert received[1][1]["employee_id"] == bob.id

    def test_rejected_operation_publishes_nothing(self, db, org, alice, bob, make_shift, received):
        shift = make_shift(alice, date(2024, 6, 10), 9, 17)
        operations.offer_shift(db, org.id, shift.id, bob.id)
        assert received == []

    def test_failing_subscriber_does_not_fail_operation(self, db, org, alice, broken_subscriber, received):
        result = operations.submit_time_off(db, org.id, {
            "employee_id": alice.id,
            "start_date": date(2024, 7, 1),
            "end_date": date(2024, 7, 1),
            "reason": "Dentist",
        })
        assert result.success is True
        assert [event for event, _ in received] == [ScheduleEvent.TIME_OFF_SUBMITTED]
