"""
Seed script for a local ShiftDesk database.

Creates the tables if needed, then one restaurant with a manager and a few
staff, a week of shifts, one approved time off request and one blocked day.
Prints a bearer token per employee for trying the API.

Run with: python -m scripts.seed_demo
"""

import sys
from datetime import date, timedelta

from sqlalchemy import delete

from shiftdesk.core.security import create_access_token
from shiftdesk.db.database import SessionLocal, create_tables
from shiftdesk.db.models import (
    BlockedPeriods,
    DropShiftRequests,
    Employees,
    Organizations,
    Role,
    Shifts,
    TimeOffRequests,
    TimeOffStatus,
    WeekStartDay,
)
from shiftdesk.services.scheduling.time_model import week_start


def clear_tables(db):
    """Delete all rows, children first."""
    print("Clearing tables...")
    for model in (DropShiftRequests, BlockedPeriods, TimeOffRequests, Shifts, Employees, Organizations):
        db.execute(delete(model))
    db.commit()
    print("All tables cleared.")


def seed_organization(db) -> Organizations:
    print("Seeding organization...")
    org = Organizations(name="Demo Bistro", week_start_day=WeekStartDay.SUNDAY)
    db.add(org)
    db.commit()
    print(f"Seeded organization {org.id}.")
    return org


def seed_employees(db, org: Organizations) -> list[Employees]:
    print("Seeding employees...")
    employees = [
        Employees(organization_id=org.id, name="Morgan", role=Role.MANAGER,
                  jobs=["Manager"], hourly_pay=28.0),
        Employees(organization_id=org.id, name="Alex", role=Role.EMPLOYEE,
                  jobs=["Server", "Host"], hourly_pay=15.0, job_pay={"Server": 12.5}),
        Employees(organization_id=org.id, name="Sam", role=Role.EMPLOYEE,
                  jobs=["Cook"], hourly_pay=19.0),
        Employees(organization_id=org.id, name="Riley", role=Role.EMPLOYEE,
                  jobs=["Bartender", "Server"], hourly_pay=16.0),
    ]
    db.add_all(employees)
    db.commit()
    print(f"Seeded {len(employees)} employees.")
    return employees


def seed_shifts(db, org: Organizations, employees: list[Employees], first_day: date):
    print("Seeding shifts...")
    manager, alex, sam, riley = employees
    shifts = []
    for offset in range(1, 6):
        day = first_day + timedelta(days=offset)
        shifts += [
            Shifts(organization_id=org.id, employee_id=manager.id, shift_date=day,
                   start_hour=10, end_hour=18, job="Manager"),
            Shifts(organization_id=org.id, employee_id=alex.id, shift_date=day,
                   start_hour=11, end_hour=15, job="Server"),
            Shifts(organization_id=org.id, employee_id=sam.id, shift_date=day,
                   start_hour=9.5, end_hour=17.5, job="Cook"),
            Shifts(organization_id=org.id, employee_id=riley.id, shift_date=day,
                   start_hour=17, end_hour=23, job="Bartender"),
        ]
    db.add_all(shifts)
    db.commit()
    print(f"Seeded {len(shifts)} shifts.")


def seed_unavailability(db, org: Organizations, employees: list[Employees], first_day: date):
    print("Seeding time off and blocked days...")
    manager, alex, _, riley = employees
    next_week = first_day + timedelta(days=7)
    db.add(TimeOffRequests(
        organization_id=org.id,
        employee_id=alex.id,
        requester_id=alex.id,
        start_date=next_week + timedelta(days=2),
        end_date=next_week + timedelta(days=3),
        reason="Family visit",
        status=TimeOffStatus.APPROVED,
        reviewed_by=manager.id,
    ))
    db.add(BlockedPeriods(
        organization_id=org.id,
        employee_id=riley.id,
        start_date=next_week + timedelta(days=5),
        end_date=next_week + timedelta(days=5),
        reason="Training day",
        created_by=manager.id,
    ))
    db.commit()
    print("Seeded 1 time off request and 1 blocked period.")


def main():
    """Main seed function."""
    print("\n" + "="*50)
    print("ShiftDesk Database Seeder")
    print("="*50 + "\n")

    response = input("This will DELETE ALL EXISTING DATA. Continue? (yes/no): ")
    if response.lower() != "yes":
        print("Aborted.")
        sys.exit(0)

    create_tables()
    db = SessionLocal()

    try:
        clear_tables(db)
        org = seed_organization(db)
        employees = seed_employees(db, org)
        first_day = week_start(date.today())
        seed_shifts(db, org, employees, first_day)
        seed_unavailability(db, org, employees, first_day)

        print("\n" + "="*50)
        print("Seeding complete!")
        print("="*50)
        print("\nBearer tokens (valid for 1 day):")
        for employee in employees:
            token = create_access_token(
                {"sub": employee.id, "org": org.id},
                expires_delta=timedelta(days=1),
            )
            print(f"  {employee.name} ({employee.role.value}): {token}")
        print("="*50 + "\n")

    except Exception as e:
        db.rollback()
        print(f"\nError during seeding: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
