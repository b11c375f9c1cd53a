"""
Leave balance service - regular leave balances and special leave usage
"""
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from leave_app.models.employee import Employee
from leave_app.models.leave import (
    Leave,
    LeaveBalance,
    LeaveStatus,
    LeaveType,
    SpecialLeaveType,
    SpecialLeaveUsage,
)
from leave_app.services.leave_rules import (
    calculate_pro_rata_leave,
    get_special_leave_limit,
    hours_to_days,
)

logger = logging.getLogger(__name__)


def _year_bounds(year: int):
    return datetime(year, 1, 1), datetime(year + 1, 1, 1)


def get_employee_or_404(db: Session, employee_id: str) -> Employee:
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found"
        )
    return employee


def get_or_create_balance(db: Session, employee: Employee, year: int) -> LeaveBalance:
    """
    Get the regular leave balance row for (employee, year), seeding it from the
    pro-rata entitlement of the employee's contract when missing.

    The new row is flushed, not committed; the caller owns the transaction.
    """
    balance = db.query(LeaveBalance).filter(
        LeaveBalance.employee_id == employee.id,
        LeaveBalance.year == year
    ).first()
    if balance:
        return balance

    entitlement = calculate_pro_rata_leave(employee.contract_hours)
    balance = LeaveBalance(
        employee_id=employee.id,
        year=year,
        total_days=entitlement.days,
        total_hours=entitlement.hours,
        used_days=0,
        used_hours=0,
    )
    db.add(balance)
    db.flush()
    logger.info(
        "Seeded leave balance for %s/%s: %s days, %s hours (contract %s h)",
        employee.id, year, entitlement.days, entitlement.hours, employee.contract_hours
    )
    return balance


def sum_leave_hours(
    db: Session,
    employee_id: str,
    year: int,
    statuses: Iterable[LeaveStatus],
    leave_type: LeaveType = LeaveType.REGULAR,
    special_leave_type: Optional[SpecialLeaveType] = None,
) -> float:
    """Total hours of an employee's leaves starting in the year, limited to the given statuses"""
    year_start, next_year_start = _year_bounds(year)
    query = db.query(func.coalesce(func.sum(Leave.total_hours), 0.0)).filter(
        Leave.employee_id == employee_id,
        Leave.leave_type == leave_type,
        Leave.status.in_(list(statuses)),
        Leave.start_of_leave >= year_start,
        Leave.start_of_leave < next_year_start,
    )
    if special_leave_type is not None:
        query = query.filter(Leave.special_leave_type == special_leave_type)
    return float(query.scalar() or 0.0)


def get_employee_balance(db: Session, employee_id: str, year: int) -> LeaveBalance:
    """
    Regular leave balance for a year.

    Creates the year's row on first access, then refreshes the used figures
    from the approved regular leaves starting in that year.

    Raises:
        HTTPException: 404 if the employee does not exist
    """
    employee = get_employee_or_404(db, employee_id)
    balance = get_or_create_balance(db, employee, year)

    used_hours = sum_leave_hours(db, employee_id, year, [LeaveStatus.APPROVED])
    balance.used_hours = used_hours
    balance.used_days = hours_to_days(used_hours)

    db.commit()
    db.refresh(balance)
    return balance


def get_or_create_special_usage(
    db: Session,
    employee_id: str,
    year: int,
    special_leave_type: SpecialLeaveType,
) -> SpecialLeaveUsage:
    usage = db.query(SpecialLeaveUsage).filter(
        SpecialLeaveUsage.employee_id == employee_id,
        SpecialLeaveUsage.year == year,
        SpecialLeaveUsage.special_leave_type == special_leave_type,
    ).first()
    if usage is None:
        usage = SpecialLeaveUsage(
            employee_id=employee_id,
            year=year,
            special_leave_type=special_leave_type,
            used_days=0,
            used_hours=0,
        )
        db.add(usage)
        db.flush()
    return usage


def adjust_special_usage(db: Session, leave: Leave, direction: int) -> SpecialLeaveUsage:
    """
    Add (direction=1) or give back (direction=-1) a special leave's hours on
    its usage row. Used hours never drop below zero.
    """
    usage = get_or_create_special_usage(
        db, leave.employee_id, leave.start_of_leave.year, leave.special_leave_type
    )
    usage.used_hours = max(0.0, (usage.used_hours or 0.0) + direction * leave.total_hours)
    usage.used_days = hours_to_days(usage.used_hours)
    logger.info(
        "Special leave usage %s/%s/%s now %s hours",
        usage.employee_id, usage.year, usage.special_leave_type.value, usage.used_hours
    )
    return usage


def get_special_leave_usage(db: Session, employee_id: str, year: int) -> List[Dict]:
    """
    Usage of every special leave type for a year, including types never used.

    Raises:
        HTTPException: 404 if the employee does not exist
    """
    employee = get_employee_or_404(db, employee_id)
    rows = {
        usage.special_leave_type: usage
        for usage in db.query(SpecialLeaveUsage).filter(
            SpecialLeaveUsage.employee_id == employee_id,
            SpecialLeaveUsage.year == year,
        ).all()
    }

    result = []
    for special_leave_type in SpecialLeaveType:
        limit = get_special_leave_limit(special_leave_type, employee.contract_hours)
        usage = rows.get(special_leave_type)
        used_days = usage.used_days if usage else 0
        used_hours = usage.used_hours if usage else 0.0
        result.append({
            "employee_id": employee_id,
            "year": year,
            "special_leave_type": special_leave_type,
            "used_days": used_days,
            "used_hours": used_hours,
            "max_days": limit.max_days,
            "max_hours": limit.max_hours,
            "remaining_days": limit.max_days - used_days,
            "remaining_hours": limit.max_hours - used_hours,
        })
    return result
