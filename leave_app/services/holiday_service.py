"""
Holiday calendar service - one-off public holidays and the calendar used by leave rules
"""
import logging
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from leave_app.core.config import settings
from leave_app.models.holiday import Holiday
from leave_app.services.audit_service import log_audit
from leave_app.services.leave_rules import HolidayCalendar

logger = logging.getLogger(__name__)


def create_holiday(
    db: Session,
    year: int,
    holiday_date: date,
    name: str,
    active: bool = True,
    actor_id: Optional[str] = None
) -> Holiday:
    """
    Create a new holiday

    Args:
        db: Database session
        year: Calendar year
        holiday_date: Holiday date
        name: Holiday name
        active: Whether holiday is active
        actor_id: Employee ID of the user creating the holiday

    Returns:
        Created Holiday instance

    Raises:
        HTTPException: If the date is outside the year (400) or already a holiday (409)
    """
    if holiday_date.year != year:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Date {holiday_date} does not fall within year {year}"
        )

    existing = db.query(Holiday).filter(
        Holiday.year == year,
        Holiday.date == holiday_date
    ).first()

    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Holiday already exists for date {holiday_date} in year {year}"
        )

    holiday = Holiday(
        year=year,
        date=holiday_date,
        name=name,
        active=active,
    )

    db.add(holiday)
    db.flush()

    log_audit(
        db=db,
        actor_id=actor_id,
        action="HOLIDAY_CREATE",
        entity_type="holidays",
        entity_id=holiday.id,
        meta={"year": year, "date": holiday_date, "name": name}
    )
    db.commit()
    db.refresh(holiday)
    logger.info("Holiday created: %s %s (%s)", holiday.date, holiday.name, holiday.id)

    return holiday


def list_holidays(
    db: Session,
    year: Optional[int] = None,
    active_only: bool = False
) -> List[Holiday]:
    """List holidays ordered by date, optionally filtered by year and active flag"""
    query = db.query(Holiday)

    if year:
        query = query.filter(Holiday.year == year)

    if active_only:
        query = query.filter(Holiday.active.is_(True))

    return query.order_by(Holiday.date).all()


def get_holiday(db: Session, holiday_id: int) -> Optional[Holiday]:
    """Get a holiday by ID"""
    return db.query(Holiday).filter(Holiday.id == holiday_id).first()


def update_holiday(
    db: Session,
    holiday_id: int,
    name: Optional[str] = None,
    active: Optional[bool] = None,
    actor_id: Optional[str] = None
) -> Holiday:
    """
    Update a holiday's name or active flag

    Raises:
        HTTPException: If holiday not found
    """
    holiday = get_holiday(db, holiday_id)
    if not holiday:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Holiday with id {holiday_id} not found"
        )

    if name is not None:
        holiday.name = name
    if active is not None:
        holiday.active = active

    log_audit(
        db=db,
        actor_id=actor_id,
        action="HOLIDAY_UPDATE",
        entity_type="holidays",
        entity_id=holiday.id,
        meta={"name": name, "active": active}
    )
    db.commit()
    db.refresh(holiday)

    return holiday


def get_holiday_calendar(db: Session) -> HolidayCalendar:
    """
    Holiday table for the leave rules: recurring holidays from settings plus
    every active one-off holiday stored in the database.
    """
    active_dates = [
        holiday_date
        for (holiday_date,) in db.query(Holiday.date).filter(Holiday.active.is_(True)).all()
    ]
    return HolidayCalendar(recurring=settings.get_public_holidays()).with_dates(active_dates)
