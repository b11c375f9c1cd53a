"""
Employee endpoints
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from leave_app.core.deps import get_db
from leave_app.schemas.employee import EmployeeCreate, EmployeeOut, SubordinateOut
from leave_app.schemas.leave import LeaveOut
from leave_app.services.employee_service import (
    create_employee,
    list_employees,
    get_employee,
    list_subordinates,
)
from leave_app.services.leave_service import list_employee_leaves

router = APIRouter()


@router.get("", response_model=List[EmployeeOut])
async def list_employees_endpoint(db: Session = Depends(get_db)):
    """List all employees ordered by name, with manager and direct reports"""
    return list_employees(db)


@router.post("", response_model=EmployeeOut, status_code=201)
async def create_employee_endpoint(
    employee_data: EmployeeCreate,
    db: Session = Depends(get_db),
):
    """
    Create an employee

    The employee code must look like K012345. The current year's leave
    balance is seeded from the contract hours.
    """
    return create_employee(db, employee_data)


@router.get("/{employee_id}", response_model=EmployeeOut)
async def get_employee_endpoint(employee_id: str, db: Session = Depends(get_db)):
    """Get an employee by code"""
    return get_employee(db, employee_id)


@router.get("/{employee_id}/subordinates", response_model=List[SubordinateOut])
async def list_subordinates_endpoint(employee_id: str, db: Session = Depends(get_db)):
    """Direct reports of an employee"""
    return list_subordinates(db, employee_id)


@router.get("/{employee_id}/leaves", response_model=List[LeaveOut])
async def list_employee_leaves_endpoint(employee_id: str, db: Session = Depends(get_db)):
    """An employee's leaves, latest first"""
    return list_employee_leaves(db, employee_id)
