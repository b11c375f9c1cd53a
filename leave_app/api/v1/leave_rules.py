"""
Leave rule preview endpoints (nothing is persisted)
"""
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from leave_app.core.deps import get_db
from leave_app.schemas.leave import LeaveCheck, LeaveCheckOut, WorkingHoursOut, check_leave_span
from leave_app.services.holiday_service import get_holiday_calendar
from leave_app.services.leave_rules import calculate_working_hours, validate_leave_request
from leave_app.utils.datetime_utils import to_local_naive

router = APIRouter()


@router.get("/working-hours", response_model=WorkingHoursOut)
async def working_hours_endpoint(
    start: datetime = Query(..., description="Start (local time unless an offset is given)"),
    end: datetime = Query(..., description="End (local time unless an offset is given)"),
    db: Session = Depends(get_db),
):
    """Working hours a leave over [start, end] would be billed for"""
    try:
        start = to_local_naive(start)
        end = to_local_naive(end)
        check_leave_span(start, end)
    except (ValueError, OverflowError) as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    total_hours = calculate_working_hours(start, end, get_holiday_calendar(db))
    return WorkingHoursOut(start=start, end=end, total_hours=total_hours)


@router.post("/validate", response_model=LeaveCheckOut)
async def validate_endpoint(
    leave_data: LeaveCheck,
    db: Session = Depends(get_db),
):
    """Dry-run of the leave rules: every error and warning, plus billed hours"""
    calendar = get_holiday_calendar(db)
    result = validate_leave_request(leave_data, calendar=calendar)
    total_hours = calculate_working_hours(leave_data.start_of_leave, leave_data.end_of_leave, calendar)
    return LeaveCheckOut(
        is_valid=result.is_valid,
        errors=result.errors,
        warnings=result.warnings,
        total_hours=total_hours,
    )
