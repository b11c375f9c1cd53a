"""
Timezone helpers.
- Audit timestamps (created_at/updated_at) are stored in UTC.
- Leave start/end are naive wall-clock times in the calendar zone (settings.CALENDAR_TZ),
  since working hours and public holidays are local notions.
"""
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

UTC = timezone.utc


def calendar_zone() -> ZoneInfo:
    """Zone used to interpret leave timestamps"""
    from leave_app.core.config import settings
    return ZoneInfo(settings.CALENDAR_TZ)


def now_utc() -> datetime:
    """Current time in UTC (timezone-aware)"""
    return datetime.now(UTC)


def now_local() -> datetime:
    """Current wall-clock time in the calendar zone, naive"""
    return datetime.now(calendar_zone()).replace(tzinfo=None)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """If dt is naive, treat as UTC and return timezone-aware UTC. If already aware, convert to UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_local_naive(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a leave timestamp to naive local wall-clock time.

    Aware datetimes (e.g. "2026-07-01T08:00:00Z") are converted to the calendar
    zone first; naive datetimes are taken as already local.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(calendar_zone()).replace(tzinfo=None)


def iso_local(dt: Optional[datetime]) -> Optional[str]:
    """Serialize an audit timestamp as ISO-8601 with the calendar zone offset"""
    if dt is None:
        return None
    return ensure_utc(dt).astimezone(calendar_zone()).isoformat()
