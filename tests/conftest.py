import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite:///./shiftdesk-test.db")

import pytest
from datetime import date

from shiftdesk.db.database import create_db_engine, create_session_factory, create_tables
from shiftdesk.db.models import Employees, Organizations, Role, Shifts, WeekStartDay


@pytest.fixture
def engine(tmp_path):
    # file-backed so several sessions (threads) can share it
    engine = create_db_engine(f"sqlite:///{tmp_path / 'shiftdesk.db'}")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def org(db) -> Organizations:
    organization = Organizations(name="Test Bistro", week_start_day=WeekStartDay.SUNDAY)
    db.add(organization)
    db.commit()
    return organization


@pytest.fixture
def make_employee(db, org):
    def _make(name: str, role: Role = Role.EMPLOYEE, **kwargs) -> Employees:
        employee = Employees(
            organization_id=org.id,
            name=name,
            role=role,
            jobs=kwargs.pop("jobs", ["Server"]),
            **kwargs,
        )
        db.add(employee)
        db.commit()
        return employee

    return _make


@pytest.fixture
def manager(make_employee) -> Employees:
    return make_employee("Morgan", role=Role.MANAGER, jobs=["Manager"], hourly_pay=25.0)


@pytest.fixture
def alice(make_employee) -> Employees:
    return make_employee("Alice", hourly_pay=15.0)


@pytest.fixture
def bob(make_employee) -> Employees:
    return make_employee("Bob", hourly_pay=16.0)


@pytest.fixture
def make_shift(db, org):
    """Insert a shift row directly, bypassing placement rules."""
    def _make(employee: Employees, day: date, start: float, end: float, job: str = "Server", **kwargs) -> Shifts:
        shift = Shifts(
            organization_id=org.id,
            employee_id=employee.id,
            shift_date=day,
            start_hour=start,
            end_hour=end,
            job=job,
            **kwargs,
        )
        db.add(shift)
        db.commit()
        return shift

    return _make


def shift_data(employee: Employees, day: date, start: float, end: float, job: str = "Server", **kwargs) -> dict:
    return {
        "employee_id": employee.id,
        "shift_date": day,
        "start_hour": start,
        "end_hour": end,
        "job": job,
        **kwargs,
    }


@pytest.fixture
def shift_payload():
    return shift_data
