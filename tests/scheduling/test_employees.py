import pytest
from datetime import date

from shiftdesk.db.models import Employees, Role
from shiftdesk.services.scheduling import employees, shift_store
from shiftdesk.services.scheduling.errors import NotFoundError, ValidationError


class TestCreateEmployee:
    def test_defaults(self, db, org):
        employee = employees.create_employee(db, org.id, {"name": "  Dana "})
        assert employee.name == "Dana"
        assert employee.role == Role.EMPLOYEE
        assert employee.is_active is True
        assert employee.jobs == []

    def test_pay_and_jobs(self, db, org):
        employee = employees.create_employee(db, org.id, {
            "name": "Eli",
            "jobs": ["Cook", "Dishwasher"],
            "hourly_pay": 18.5,
            "job_pay": {"Cook": 21.0},
        })
        assert employee.job_pay == {"Cook": 21.0}

    def test_name_required(self, db, org):
        with pytest.raises(ValidationError):
            employees.create_employee(db, org.id, {"name": ""})

    def test_unknown_job(self, db, org):
        with pytest.raises(ValidationError):
            employees.create_employee(db, org.id, {"name": "Eli", "jobs": ["Juggler"]})

    def test_negative_pay(self, db, org):
        with pytest.raises(ValidationError):
            employees.create_employee(db, org.id, {"name": "Eli", "hourly_pay": -1})

    def test_unknown_organization(self, db):
        with pytest.raises(NotFoundError):
            employees.create_employee(db, 404, {"name": "Eli"})


class TestUpdateEmployee:
    def test_update_fields(self, db, org, alice):
        updated = employees.update_employee(db, org.id, alice.id, {"role": Role.MANAGER, "hourly_pay": 20.0})
        assert updated.is_manager is True
        assert updated.hourly_pay == 20.0

    def test_unknown_field(self, db, org, alice):
        with pytest.raises(ValidationError):
            employees.update_employee(db, org.id, alice.id, {"organization_id": 2})

    def test_deactivate_blocks_new_shifts(self, db, org, alice, shift_payload):
        employees.deactivate_employee(db, org.id, alice.id)
        assert [e.id for e in employees.list_employees(db, org.id)] == []
        assert len(employees.list_employees(db, org.id, include_inactive=True)) == 1
        with pytest.raises(ValidationError):
            shift_store.add_shift(db, org.id, shift_payload(alice, date(2024, 6, 10), 9, 17))


class TestDeleteEmployee:
    def test_delete_without_shifts(self, db, org, alice):
        employees.delete_employee(db, org.id, alice.id)
        assert db.get(Employees, alice.id) is None

    def test_refused_while_shifts_exist(self, db, org, alice, make_shift):
        make_shift(alice, date(2024, 6, 10), 9, 17)
        with pytest.raises(ValidationError) as exc:
            employees.delete_employee(db, org.id, alice.id)
        assert exc.value.context["shift_count"] == 1
        db.expire_all()
        assert db.get(Employees, alice.id) is not None

    def test_unknown(self, db, org):
        with pytest.raises(NotFoundError):
            employees.delete_employee(db, org.id, 777)
