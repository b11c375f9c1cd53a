"""
Date helpers for tests: leave requests must land on future working days
"""
from datetime import date, datetime, timedelta
from leave_app.services.leave_rules import DEFAULT_CALENDAR, is_working_day


def next_workday(days_ahead: int = 21) -> date:
    """First Monday-Friday, non-holiday date at least days_ahead from today"""
    day = date.today() + timedelta(days=days_ahead)
    while not is_working_day(day) or DEFAULT_CALENDAR.is_holiday(day):
        day += timedelta(days=1)
    return day


def next_monday(days_ahead: int = 21) -> date:
    """First Monday at least days_ahead from today; no public holiday until the Monday after"""
    day = date.today() + timedelta(days=days_ahead)
    while True:
        day += timedelta(days=(7 - day.weekday()) % 7)
        week = [day + timedelta(days=offset) for offset in range(8)]
        if not any(DEFAULT_CALENDAR.is_holiday(d) for d in week):
            return day
        day += timedelta(days=1)


def at(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute)


def iso(day: date, hour: int, minute: int = 0) -> str:
    return at(day, hour, minute).isoformat()
