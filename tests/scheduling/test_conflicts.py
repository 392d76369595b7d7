from datetime import date

from shiftdesk.db.models import BlockedPeriods, TimeOffRequests, TimeOffStatus
from shiftdesk.services.scheduling.conflicts import find_schedule_conflicts


JULY_1 = date(2024, 7, 1)
JULY_7 = date(2024, 7, 7)


def approve_time_off(db, org, employee, start, end):
    db.add(TimeOffRequests(
        organization_id=org.id, employee_id=employee.id, requester_id=employee.id,
        start_date=start, end_date=end, reason="Away", status=TimeOffStatus.APPROVED,
    ))
    db.commit()


class TestFindScheduleConflicts:
    def test_empty_schedule(self, db, org):
        assert find_schedule_conflicts(db, org.id, JULY_1, JULY_7) == []

    def test_shift_inside_approved_time_off(self, db, org, alice, bob, make_shift):
        shift = make_shift(alice, date(2024, 7, 2), 9, 17)
        make_shift(bob, date(2024, 7, 2), 9, 17)
        approve_time_off(db, org, alice, JULY_1, date(2024, 7, 3))

        found = find_schedule_conflicts(db, org.id, JULY_1, JULY_7)

        assert len(found) == 1
        assert found[0].kind == "time_off"
        assert found[0].shift.id == shift.id

    def test_blocked_period_respects_hours(self, db, org, alice, make_shift):
        make_shift(alice, date(2024, 7, 2), 9, 12)
        make_shift(alice, date(2024, 7, 2), 13, 17)
        db.add(BlockedPeriods(
            organization_id=org.id, employee_id=alice.id,
            start_date=date(2024, 7, 2), end_date=date(2024, 7, 2),
            start_hour=14, end_hour=16, reason="Meeting",
        ))
        db.commit()

        found = find_schedule_conflicts(db, org.id, JULY_1, JULY_7)

        assert [(c.kind, c.shift.start_hour) for c in found] == [("blocked", 13)]

    def test_blocked_markers_ignored(self, db, org, alice, make_shift):
        make_shift(alice, date(2024, 7, 2), 0, 24, job=None, is_blocked=True)
        approve_time_off(db, org, alice, JULY_1, JULY_7)
        assert find_schedule_conflicts(db, org.id, JULY_1, JULY_7) == []

    def test_filter_by_employee(self, db, org, alice, bob, make_shift):
        make_shift(bob, date(2024, 7, 2), 9, 17)
        approve_time_off(db, org, bob, JULY_1, JULY_7)
        assert find_schedule_conflicts(db, org.id, JULY_1, JULY_7, [alice.id]) == []
        assert len(find_schedule_conflicts(db, org.id, JULY_1, JULY_7, [bob.id])) == 1
