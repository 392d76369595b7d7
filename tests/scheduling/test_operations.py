import pytest
from datetime import date

from sqlalchemy.exc import OperationalError

from shiftdesk.core.config import settings
from shiftdesk.db.database import create_db_engine, create_session_factory
from shiftdesk.db.models import TimeOffStatus
from shiftdesk.services.scheduling import operations, shift_store, time_off
from shiftdesk.services.scheduling.errors import (
    AlreadyReviewedError,
    OverlapConflict,
    StorageError,
    TimeOffConflict,
)


JUNE_10 = date(2024, 6, 10)


class TestOperationResult:
    def test_success_carries_value(self, db, org, alice, shift_payload):
        result = operations.add_shift(db, org.id, shift_payload(alice, JUNE_10, 9, 17))
        assert result.success is True
        assert result.error is None
        assert result.value.employee_id == alice.id

    def test_business_rule_violation_is_returned(self, db, org, alice, shift_payload):
        operations.add_shift(db, org.id, shift_payload(alice, JUNE_10, 9, 17))
        result = operations.add_shift(db, org.id, shift_payload(alice, JUNE_10, 16, 20))

        assert result.success is False
        assert isinstance(result.error, OverlapConflict)
        assert result.error.retryable is False
        assert result.error.to_dict()["code"] == "overlap_conflict"

    def test_storage_failure_is_retryable(self, db, org, alice, shift_payload, monkeypatch):
        def broken(*args, **kwargs):
            raise OperationalError("INSERT INTO shifts", {}, Exception("database is locked"))

        monkeypatch.setattr(shift_store, "add_shift", broken)
        result = operations.add_shift(db, org.id, shift_payload(alice, JUNE_10, 9, 17))

        assert result.success is False
        assert isinstance(result.error, StorageError)
        assert result.error.retryable is True


class TestTimeOffScenario:
    def test_approved_time_off_blocks_shift(self, db, org, alice, manager, shift_payload):
        submitted = operations.submit_time_off(db, org.id, {
            "employee_id": alice.id,
            "start_date": date(2024, 7, 1),
            "end_date": date(2024, 7, 3),
            "reason": "Vacation",
        })
        reviewed = operations.review_time_off(
            db, org.id, submitted.value.id, TimeOffStatus.APPROVED, manager.id
        )
        assert reviewed.success and reviewed.warnings == []

        result = operations.add_shift(db, org.id, shift_payload(alice, date(2024, 7, 2), 9, 17))
        assert isinstance(result.error, TimeOffConflict)

    def test_approval_warns_about_existing_shifts(self, db, org, alice, manager, make_shift):
        make_shift(alice, date(2024, 7, 2), 9.5, 17)
        submitted = operations.submit_time_off(db, org.id, {
            "employee_id": alice.id,
            "start_date": date(2024, 7, 1),
            "end_date": date(2024, 7, 3),
            "reason": "Vacation",
        })

        reviewed = operations.review_time_off(
            db, org.id, submitted.value.id, TimeOffStatus.APPROVED, manager.id
        )

        assert reviewed.success is True
        assert len(reviewed.warnings) == 1
        assert "2024-07-02" in reviewed.warnings[0]
        assert "9:30am" in reviewed.warnings[0]

    def test_repeat_review_returns_unchanged_request(self, db, org, alice, manager):
        submitted = operations.submit_time_off(db, org.id, {
            "employee_id": alice.id,
            "start_date": date(2024, 7, 1),
            "end_date": date(2024, 7, 1),
            "reason": "Dentist",
        })
        operations.review_time_off(db, org.id, submitted.value.id, TimeOffStatus.DENIED, manager.id)
        again = operations.review_time_off(db, org.id, submitted.value.id, TimeOffStatus.APPROVED, manager.id)

        assert again.success is False
        assert isinstance(again.error, AlreadyReviewedError)
        assert again.error.current.status == TimeOffStatus.DENIED


class TestExchangeScenario:
    def test_successful_claim_reassigns_ownership(self, db, org, alice, bob, make_shift):
        shift = make_shift(alice, JUNE_10, 9, 17)
        offered = operations.offer_shift(db, org.id, shift.id, alice.id)
        accepted = operations.accept_drop_request(db, org.id, offered.value.id, bob.id)

        assert accepted.success is True
        assert accepted.value.employee_id == bob.id
        assert shift_store.get_shift(db, org.id, shift.id).employee_id == bob.id

        second = operations.cancel_drop_request(db, org.id, offered.value.id)
        assert second.success is False


class TestBlockedPeriodWarnings:
    def test_warns_about_existing_shifts(self, db, org, alice, manager, make_shift):
        make_shift(alice, JUNE_10, 9, 17)
        result = operations.add_blocked_period(db, org.id, {
            "employee_id": None,
            "start_date": JUNE_10,
            "end_date": JUNE_10,
            "reason": "Private event",
            "created_by": manager.id,
        })
        assert result.success is True
        assert len(result.warnings) == 1

    def test_warns_for_shift_inside_earlier_windows(self, db, org, alice, manager, make_shift):
        make_shift(alice, JUNE_10, 9, 17)
        submitted = operations.submit_time_off(db, org.id, {
            "employee_id": alice.id,
            "start_date": JUNE_10,
            "end_date": JUNE_10,
            "reason": "Appointment",
        })
        operations.review_time_off(db, org.id, submitted.value.id, TimeOffStatus.APPROVED, manager.id)
        first = operations.add_blocked_period(db, org.id, {
            "employee_id": alice.id,
            "start_date": JUNE_10,
            "end_date": JUNE_10,
            "reason": "Training",
            "created_by": manager.id,
        })
        second = operations.add_blocked_period(db, org.id, {
            "employee_id": None,
            "start_date": JUNE_10,
            "end_date": JUNE_10,
            "reason": "Private event",
            "created_by": manager.id,
        })

        assert len(first.warnings) == 1
        assert len(second.warnings) == 1

    def test_hour_bounded_period_ignores_disjoint_shift(self, db, org, alice, manager, make_shift):
        make_shift(alice, JUNE_10, 9, 12)
        result = operations.add_blocked_period(db, org.id, {
            "employee_id": alice.id,
            "start_date": JUNE_10,
            "end_date": JUNE_10,
            "start_hour": 14,
            "end_hour": 18,
            "reason": "Inventory",
            "created_by": manager.id,
        })
        assert result.success is True
        assert result.warnings == []


@pytest.fixture
def impatient_session(engine, monkeypatch):
    """A second connection that gives up quickly on a locked database."""
    monkeypatch.setattr(settings, "SQLITE_BUSY_TIMEOUT_SECONDS", 1)
    other_engine = create_db_engine(str(engine.url))
    session = create_session_factory(other_engine)()
    yield session
    session.close()
    other_engine.dispose()


class TestTransactionRelease:
    def test_review_leaves_database_writable(self, db, org, alice, bob, manager, make_shift, shift_payload, impatient_session):
        make_shift(alice, date(2024, 7, 2), 9, 17)
        submitted = operations.submit_time_off(db, org.id, {
            "employee_id": alice.id,
            "start_date": date(2024, 7, 1),
            "end_date": date(2024, 7, 3),
            "reason": "Vacation",
        })
        reviewed = operations.review_time_off(db, org.id, submitted.value.id, TimeOffStatus.APPROVED, manager.id)

        assert reviewed.warnings
        assert not db.in_transaction()
        result = operations.add_shift(impatient_session, org.id, shift_payload(bob, JUNE_10, 9, 17))
        assert result.success is True

    def test_blocked_period_leaves_database_writable(self, db, org, alice, bob, manager, make_shift, shift_payload, impatient_session):
        make_shift(alice, JUNE_10, 9, 17)
        added = operations.add_blocked_period(db, org.id, {
            "employee_id": alice.id,
            "start_date": JUNE_10,
            "end_date": JUNE_10,
            "reason": "Training",
            "created_by": manager.id,
        })

        assert added.warnings
        assert not db.in_transaction()
        result = operations.add_shift(impatient_session, org.id, shift_payload(bob, JUNE_10, 9, 17))
        assert result.success is True

    def test_rejection_leaves_database_writable(self, db, org, alice, shift_payload, impatient_session):
        missing = operations.weekly_labor_summary(db, 999, JUNE_10)

        assert missing.success is False
        assert not db.in_transaction()
        result = operations.add_shift(impatient_session, org.id, shift_payload(alice, JUNE_10, 9, 17))
        assert result.success is True

    def test_read_helpers_end_their_transaction(self, db, org, alice, make_shift):
        make_shift(alice, JUNE_10, 9, 17)

        assert len(shift_store.list_shifts(db, org.id, JUNE_10, JUNE_10)) == 1
        assert not db.in_transaction()
        assert time_off.list_time_off_requests(db, org.id) == []
        assert not db.in_transaction()
        assert operations.weekly_labor_summary(db, org.id, JUNE_10).success
        assert not db.in_transaction()
        assert operations.find_schedule_conflicts(db, org.id, JUNE_10).value == []
        assert not db.in_transaction()


class TestScheduleWide:
    def test_copy_week_reports_skips(self, db, org, alice, make_shift):
        make_shift(alice, date(2024, 6, 9), 9, 17)
        make_shift(alice, date(2024, 6, 16), 9, 17)
        result = operations.copy_week(db, org.id, date(2024, 6, 9), [date(2024, 6, 16)])
        assert result.success is True
        assert result.value.skipped_duplicate_count == 1
        assert result.warnings

    def test_labor_summary(self, db, org, alice, make_shift):
        make_shift(alice, JUNE_10, 9, 17)
        result = operations.weekly_labor_summary(db, org.id, JUNE_10)
        assert result.value.total_cost == 120

    def test_conflicts_default_to_one_week(self, db, org):
        result = operations.find_schedule_conflicts(db, org.id, JUNE_10)
        assert result.success is True
        assert result.value == []

    def test_unknown_organization(self, db):
        result = operations.weekly_labor_summary(db, 999, JUNE_10)
        assert result.success is False
        assert result.error.code == "not_found"
