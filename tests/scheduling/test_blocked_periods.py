import pytest
from datetime import date

from shiftdesk.services.scheduling import blocked_periods, shift_store
from shiftdesk.services.scheduling.errors import BlockedPeriodConflict, NotFoundError, ValidationError


JUNE_10 = date(2024, 6, 10)


@pytest.fixture
def period_data(alice, manager):
    return {
        "employee_id": alice.id,
        "start_date": JUNE_10,
        "end_date": date(2024, 6, 11),
        "reason": "Training",
        "created_by": manager.id,
    }


class TestAddBlockedPeriod:
    def test_takes_effect_immediately(self, db, org, alice, period_data, shift_payload):
        blocked_periods.add_blocked_period(db, org.id, period_data)
        with pytest.raises(BlockedPeriodConflict):
            shift_store.add_shift(db, org.id, shift_payload(alice, date(2024, 6, 11), 9, 17))

    def test_only_blocks_that_employee(self, db, org, bob, period_data, shift_payload):
        blocked_periods.add_blocked_period(db, org.id, period_data)
        shift_store.add_shift(db, org.id, shift_payload(bob, JUNE_10, 9, 17))

    def test_org_wide_period(self, db, org, bob, period_data, shift_payload):
        period_data["employee_id"] = None
        period = blocked_periods.add_blocked_period(db, org.id, period_data)
        assert period.employee_id is None
        with pytest.raises(BlockedPeriodConflict):
            shift_store.add_shift(db, org.id, shift_payload(bob, JUNE_10, 9, 17))

    def test_hour_range_stored(self, db, org, period_data):
        period_data.update(start_hour=12, end_hour=16)
        period = blocked_periods.add_blocked_period(db, org.id, period_data)
        assert (period.start_hour, period.end_hour) == (12, 16)

    def test_dates_reversed(self, db, org, period_data):
        period_data["end_date"] = date(2024, 6, 1)
        with pytest.raises(ValidationError):
            blocked_periods.add_blocked_period(db, org.id, period_data)

    def test_reason_required(self, db, org, period_data):
        period_data["reason"] = " "
        with pytest.raises(ValidationError):
            blocked_periods.add_blocked_period(db, org.id, period_data)

    @pytest.mark.parametrize("hours", [{"start_hour": 12}, {"start_hour": 16, "end_hour": 12}, {"start_hour": 20, "end_hour": 25}])
    def test_bad_hour_range(self, db, org, period_data, hours):
        period_data.update(hours)
        with pytest.raises(ValidationError):
            blocked_periods.add_blocked_period(db, org.id, period_data)

    def test_unknown_employee(self, db, org, period_data):
        period_data["employee_id"] = 9999
        with pytest.raises(NotFoundError):
            blocked_periods.add_blocked_period(db, org.id, period_data)


class TestDeleteBlockedPeriod:
    def test_delete_frees_the_day(self, db, org, alice, period_data, shift_payload):
        period = blocked_periods.add_blocked_period(db, org.id, period_data)
        blocked_periods.delete_blocked_period(db, org.id, period.id)
        shift_store.add_shift(db, org.id, shift_payload(alice, JUNE_10, 9, 17))

    def test_unknown_period(self, db, org):
        with pytest.raises(NotFoundError):
            blocked_periods.delete_blocked_period(db, org.id, 555)


class TestListBlockedPeriods:
    def test_includes_org_wide_for_employee(self, db, org, alice, period_data):
        blocked_periods.add_blocked_period(db, org.id, period_data)
        blocked_periods.add_blocked_period(db, org.id, {**period_data, "employee_id": None})

        found = blocked_periods.list_blocked_periods(db, org.id, JUNE_10, JUNE_10, employee_id=alice.id)
        assert len(found) == 2
        assert blocked_periods.list_blocked_periods(db, org.id, date(2024, 7, 1), date(2024, 7, 7)) == []
