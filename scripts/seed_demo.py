"""
Seed the demo organisation: two managers, three employees, their leave
balances for the current year and a few sample leaves. Existing employees are
left unchanged. Run from the project root with .env loaded.

Usage:
  python scripts/seed_demo.py
"""
import logging
import sys
from datetime import date, datetime, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from leave_app.core.logging import setup_logging
from leave_app.db.session import SessionLocal, create_tables
from leave_app.models.employee import Employee
from leave_app.models.leave import Leave, LeaveStatus, LeaveType
from leave_app.schemas.employee import EmployeeCreate
from leave_app.services.balance_service import get_or_create_balance
from leave_app.services.employee_service import create_employee
from leave_app.services.holiday_service import get_holiday_calendar
from leave_app.services.leave_rules import calculate_working_hours, is_working_day

# Managers first so manager_id references resolve
DEMO_EMPLOYEES = [
    EmployeeCreate(employee_id="K000001", name="Velthoven Jeroen-van", is_manager=True),
    EmployeeCreate(employee_id="K000002", name="Eszter Nasz", is_manager=True),
    EmployeeCreate(employee_id="K012345", name="Mohammad Farhadi", manager_id="K000001"),
    EmployeeCreate(employee_id="K012346", name="Bertold Oravecz", manager_id="K000001", contract_hours=32),
    EmployeeCreate(employee_id="K012347", name="Carol Davis", manager_id="K000002"),
]

logger = logging.getLogger("leave_app.seed_demo")


def _next_working_day(db, after: date) -> date:
    calendar = get_holiday_calendar(db)
    day = after + timedelta(days=1)
    while not is_working_day(day) or calendar.is_holiday(day):
        day += timedelta(days=1)
    return day


def seed_leaves(db) -> None:
    """One approved and one pending full-day leave for K012345 if it has none"""
    if db.query(Leave).filter(Leave.employee_id == "K012345").first():
        logger.info("K012345 already has leaves, skipping sample leaves")
        return

    calendar = get_holiday_calendar(db)
    first = _next_working_day(db, date.today() + timedelta(days=20))
    second = _next_working_day(db, first + timedelta(days=7))
    samples = [
        ("Family visit", first, LeaveStatus.APPROVED),
        ("Dentist", second, LeaveStatus.REQUESTED),
    ]
    for label, day, leave_status in samples:
        start = datetime.combine(day, datetime.min.time()).replace(hour=9)
        end = start.replace(hour=17)
        db.add(Leave(
            leave_label=label,
            employee_id="K012345",
            start_of_leave=start,
            end_of_leave=end,
            approver_id="K000001",
            status=leave_status,
            leave_type=LeaveType.REGULAR,
            total_hours=calculate_working_hours(start, end, calendar),
        ))
    db.commit()
    logger.info("Sample leaves created for K012345")


def main():
    setup_logging()
    create_tables()

    db = SessionLocal()
    try:
        for data in DEMO_EMPLOYEES:
            employee = db.query(Employee).filter(Employee.id == data.employee_id).first()
            if employee:
                logger.info("Employee %s exists, skipping", data.employee_id)
                continue
            employee = create_employee(db, data)
            balance = get_or_create_balance(db, employee, date.today().year)
            print(f"{employee.id} {employee.name}: {employee.contract_hours} h/week, "
                  f"{balance.total_days} days / {balance.total_hours:g} hours leave")
        seed_leaves(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
