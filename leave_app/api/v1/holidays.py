"""
Holiday calendar endpoints (changes are manager-only)
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, HTTPException, status
from sqlalchemy.orm import Session
from leave_app.core.deps import get_db, require_manager
from leave_app.schemas.holiday import HolidayCreate, HolidayUpdate, HolidayOut
from leave_app.services.holiday_service import (
    create_holiday,
    list_holidays,
    get_holiday,
    update_holiday
)
from leave_app.services.user_directory import DirectoryUser

router = APIRouter()


@router.post("", response_model=HolidayOut, status_code=201)
async def create_holiday_endpoint(
    holiday_data: HolidayCreate,
    db: Session = Depends(get_db),
    current_user: DirectoryUser = Depends(require_manager)
):
    """Add a one-off public holiday (manager-only)"""
    return create_holiday(
        db=db,
        year=holiday_data.year,
        holiday_date=holiday_data.date,
        name=holiday_data.name,
        active=holiday_data.active,
        actor_id=current_user.employee_id
    )


@router.get("", response_model=List[HolidayOut])
async def list_holidays_endpoint(
    year: Optional[int] = Query(None, description="Filter by year"),
    active_only: bool = Query(False, alias="activeOnly", description="Return only active holidays"),
    db: Session = Depends(get_db),
):
    """List one-off holidays"""
    return list_holidays(db, year=year, active_only=active_only)


@router.get("/{holiday_id}", response_model=HolidayOut)
async def get_holiday_endpoint(holiday_id: int, db: Session = Depends(get_db)):
    """Get a holiday by ID"""
    holiday = get_holiday(db, holiday_id)
    if not holiday:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Holiday with id {holiday_id} not found"
        )
    return holiday


@router.patch("/{holiday_id}", response_model=HolidayOut)
async def update_holiday_endpoint(
    holiday_id: int,
    holiday_data: HolidayUpdate,
    db: Session = Depends(get_db),
    current_user: DirectoryUser = Depends(require_manager)
):
    """Rename or (de)activate a holiday (manager-only)"""
    return update_holiday(
        db=db,
        holiday_id=holiday_id,
        name=holiday_data.name,
        active=holiday_data.active,
        actor_id=current_user.employee_id
    )
