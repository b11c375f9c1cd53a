"""
Leave balance endpoints
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from leave_app.core.deps import get_db
from leave_app.schemas.balance import LeaveBalanceOut, SpecialLeaveUsageOut
from leave_app.services.balance_service import get_employee_balance, get_special_leave_usage

router = APIRouter()


@router.get("/{employee_id}/balance", response_model=LeaveBalanceOut)
async def get_balance_endpoint(
    employee_id: str,
    year: Optional[int] = Query(None, ge=1900, le=9999, description="Calendar year, defaults to the current year"),
    db: Session = Depends(get_db),
):
    """
    Regular leave balance for a year

    The year's balance is created from the pro-rata entitlement on first access.
    """
    return get_employee_balance(db, employee_id, year or date.today().year)


@router.get("/{employee_id}/special-leave-usage", response_model=List[SpecialLeaveUsageOut])
async def get_special_leave_usage_endpoint(
    employee_id: str,
    year: Optional[int] = Query(None, ge=1900, le=9999, description="Calendar year, defaults to the current year"),
    db: Session = Depends(get_db),
):
    """Usage of every special leave type, unused types included"""
    return get_special_leave_usage(db, employee_id, year or date.today().year)
