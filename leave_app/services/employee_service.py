"""
Employee service - business logic for employee management
"""
import logging
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from fastapi import HTTPException, status
from leave_app.models.employee import Employee
from leave_app.schemas.employee import EmployeeCreate
from leave_app.services.audit_service import log_audit
from leave_app.services.balance_service import get_or_create_balance

logger = logging.getLogger(__name__)


def create_employee(
    db: Session,
    employee_data: EmployeeCreate,
    actor_id: Optional[str] = None
) -> Employee:
    """
    Create a new employee and seed the current year's leave balance

    Args:
        db: Database session
        employee_data: Employee creation data
        actor_id: Employee ID of the user creating the employee (None for seeding scripts)

    Returns:
        Created Employee instance

    Raises:
        HTTPException: 400 on a malformed employee code, 404 on an unknown
            manager, 409 on a duplicate employee code
    """
    if not employee_data.has_valid_employee_id():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="EmployeeId must be in format K012345"
        )

    existing = db.query(Employee).filter(Employee.id == employee_data.employee_id).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Employee ID already exists"
        )

    if employee_data.manager_id:
        manager = db.query(Employee).filter(Employee.id == employee_data.manager_id).first()
        if not manager:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Manager {employee_data.manager_id} not found"
            )

    employee = Employee(
        id=employee_data.employee_id,
        name=employee_data.name,
        manager_id=employee_data.manager_id,
        contract_hours=employee_data.contract_hours,
        is_manager=employee_data.is_manager,
    )
    db.add(employee)
    db.flush()

    get_or_create_balance(db, employee, date.today().year)

    log_audit(
        db=db,
        actor_id=actor_id,
        action="EMPLOYEE_CREATE",
        entity_type="employee",
        entity_id=employee.id,
        meta={
            "manager_id": employee.manager_id,
            "contract_hours": employee.contract_hours,
            "is_manager": employee.is_manager,
        }
    )
    db.commit()
    db.refresh(employee)
    logger.info("Employee created: %s (%s)", employee.id, employee.name)

    return employee


def list_employees(db: Session) -> List[Employee]:
    """All employees ordered by name, with manager and direct reports loaded"""
    return (
        db.query(Employee)
        .options(joinedload(Employee.manager), joinedload(Employee.subordinates))
        .order_by(Employee.name)
        .all()
    )


def get_employee(db: Session, employee_id: str) -> Employee:
    """
    Get one employee

    Raises:
        HTTPException: 404 if not found
    """
    employee = (
        db.query(Employee)
        .options(joinedload(Employee.manager), joinedload(Employee.subordinates))
        .filter(Employee.id == employee_id)
        .first()
    )
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found"
        )
    return employee


def list_subordinates(db: Session, manager_id: str) -> List[Employee]:
    """Direct reports of a manager, ordered by name"""
    return (
        db.query(Employee)
        .filter(Employee.manager_id == manager_id)
        .order_by(Employee.name)
        .all()
    )
