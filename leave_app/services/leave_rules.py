"""
Leave business rules - working time arithmetic and leave policy

Every function here is pure: no database access, no I/O, no raising on a
broken rule. Callers get plain values or structured results and decide what
to do with them.
"""
import math
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, Field

from leave_app.models.leave import LeaveType, SpecialLeaveType
from leave_app.utils.datetime_utils import now_local

WORKDAY_START_HOUR = 9
WORKDAY_END_HOUR = 17
HOURS_PER_DAY = 8

# 25 days * 8 hours for a 40-hour contract
FULL_TIME_CONTRACT_HOURS = 40
FULL_TIME_LEAVE_HOURS = 200

SPECIAL_LEAVE_NOTICE_DAYS = 14

# New Year, King's Day, Liberation Day, Christmas, Boxing Day
DEFAULT_PUBLIC_HOLIDAYS: FrozenSet[Tuple[int, int]] = frozenset({
    (1, 1),
    (4, 27),
    (5, 5),
    (12, 25),
    (12, 26),
})


class HolidayCalendar:
    """
    Public holiday table: (month, day) pairs recurring every year plus extra
    dates for specific years.
    """

    def __init__(
        self,
        recurring: Iterable[Tuple[int, int]] = DEFAULT_PUBLIC_HOLIDAYS,
        by_year: Optional[Mapping[int, Iterable[date]]] = None,
    ):
        self.recurring = frozenset(recurring)
        self.by_year: Dict[int, FrozenSet[date]] = {
            year: frozenset(dates) for year, dates in (by_year or {}).items()
        }

    def is_holiday(self, day: Union[date, datetime]) -> bool:
        if isinstance(day, datetime):
            day = day.date()
        if (day.month, day.day) in self.recurring:
            return True
        return day in self.by_year.get(day.year, frozenset())

    def with_dates(self, dates: Iterable[date]) -> "HolidayCalendar":
        """Copy of this calendar with extra one-off holidays added"""
        by_year = {year: set(days) for year, days in self.by_year.items()}
        for day in dates:
            by_year.setdefault(day.year, set()).add(day)
        return HolidayCalendar(self.recurring, by_year)

    def __repr__(self) -> str:
        return f"HolidayCalendar(recurring={sorted(self.recurring)}, years={sorted(self.by_year)})"


DEFAULT_CALENDAR = HolidayCalendar()


class LeaveRequestInput(BaseModel):
    """The fields of a leave request the rules look at"""
    start_of_leave: datetime
    end_of_leave: datetime
    leave_type: LeaveType = LeaveType.REGULAR
    special_leave_type: Optional[SpecialLeaveType] = None


class ValidationResult(BaseModel):
    """Errors block the request; warnings are informational"""
    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class SpecialLeaveLimit(BaseModel):
    max_days: int
    max_hours: float


class ProRataEntitlement(BaseModel):
    days: int
    hours: int


def _round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _format_day(moment: datetime) -> str:
    # e.g. "Sat Oct 24 2026"
    return moment.strftime("%a %b %d %Y")


def is_working_day(day: Union[date, datetime]) -> bool:
    """Monday to Friday"""
    return day.weekday() < 5


def is_working_hours(moment: datetime) -> bool:
    """
    Clock hour within [9, 17], inclusive on both ends.

    Only the hour is compared, so 17:00 and 17:45 both count as within hours.
    """
    return WORKDAY_START_HOUR <= moment.hour <= WORKDAY_END_HOUR


def is_public_holiday(day: Union[date, datetime], calendar: Optional[HolidayCalendar] = None) -> bool:
    """Calendar-day match against the holiday table; time of day is ignored"""
    return (calendar or DEFAULT_CALENDAR).is_holiday(day)


def calculate_working_hours(
    start: datetime,
    end: datetime,
    calendar: Optional[HolidayCalendar] = None,
) -> float:
    """
    Hours of [start, end] that fall inside the 09:00-17:00 window of working days.

    Only the first day honours the exact start time; every following day
    starts counting at 09:00.
    """
    calendar = calendar or DEFAULT_CALENDAR
    total_hours = 0.0
    current = start

    while current <= end:
        if is_working_day(current) and not calendar.is_holiday(current):
            day_start = current.replace(hour=WORKDAY_START_HOUR, minute=0, second=0, microsecond=0)
            day_end = current.replace(hour=WORKDAY_END_HOUR, minute=0, second=0, microsecond=0)

            effective_start = max(current, day_start)
            effective_end = min(end, day_end)

            if effective_start < effective_end:
                total_hours += (effective_end - effective_start).total_seconds() / 3600

        # end day reached; stepping further could overflow date.max
        if current.date() >= end.date():
            break
        current = (current + timedelta(days=1)).replace(
            hour=WORKDAY_START_HOUR, minute=0, second=0, microsecond=0
        )

    return total_hours


def get_special_leave_limit(
    special_leave_type: Optional[SpecialLeaveType],
    contract_hours: float,
) -> SpecialLeaveLimit:
    """Yearly cap for a special leave type"""
    if special_leave_type in (SpecialLeaveType.MOVING, SpecialLeaveType.WEDDING):
        return SpecialLeaveLimit(max_days=1, max_hours=8)
    if special_leave_type == SpecialLeaveType.CHILD_BIRTH:
        return SpecialLeaveLimit(max_days=5, max_hours=40)
    if special_leave_type == SpecialLeaveType.PARENTAL_CARE:
        max_hours = contract_hours * 10
        return SpecialLeaveLimit(max_days=math.floor(max_hours / HOURS_PER_DAY), max_hours=max_hours)
    return SpecialLeaveLimit(max_days=0, max_hours=0)


def validate_leave_request(
    request: LeaveRequestInput,
    now: Optional[datetime] = None,
    calendar: Optional[HolidayCalendar] = None,
) -> ValidationResult:
    """
    Check a leave request against every rule and collect all violations.

    Rules are never short-circuited: a request with a past start date and a
    missing special leave type reports both.

    Args:
        request: Anything with start_of_leave, end_of_leave, leave_type and
            special_leave_type attributes (naive local datetimes)
        now: Reference moment, defaults to the current local time
        calendar: Holiday table, defaults to the built-in recurring holidays

    Returns:
        ValidationResult with is_valid, errors and warnings
    """
    now = now or now_local()
    calendar = calendar or DEFAULT_CALENDAR
    errors: List[str] = []
    warnings: List[str] = []

    start = request.start_of_leave
    end = request.end_of_leave

    if end <= start:
        errors.append("End date must be after start date")

    if start < now:
        errors.append("Cannot schedule leave in the past")

    current = start
    while current <= end:
        if not is_working_day(current):
            warnings.append(f"Leave includes weekend day: {_format_day(current)}")
        if calendar.is_holiday(current):
            warnings.append(f"Leave includes public holiday: {_format_day(current)}")
        if current.date() >= end.date():
            break
        current += timedelta(days=1)

    if not is_working_hours(start):
        errors.append("Start time must be within working hours (9:00-17:00)")

    if not is_working_hours(end):
        errors.append("End time must be within working hours (9:00-17:00)")

    if request.leave_type == LeaveType.SPECIAL:
        if not request.special_leave_type:
            errors.append("Special leave type is required for special leaves")
        elif start < now + timedelta(days=SPECIAL_LEAVE_NOTICE_DAYS):
            errors.append("Special leaves must be requested at least 2 weeks in advance")

    return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)


def calculate_pro_rata_leave(contract_hours: float) -> ProRataEntitlement:
    """Annual regular leave for a contract, scaled from 200 hours at 40 hours a week"""
    hours = _round_half_up(FULL_TIME_LEAVE_HOURS * contract_hours / FULL_TIME_CONTRACT_HOURS)
    days = _round_half_up(hours / HOURS_PER_DAY)
    return ProRataEntitlement(days=days, hours=hours)


def hours_to_days(hours: float) -> int:
    """Whole days for a number of leave hours, rounding half up"""
    return _round_half_up(hours / HOURS_PER_DAY)
