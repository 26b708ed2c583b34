"""
Local time helpers.

All timestamps are normalised to naive datetimes in the configured
application zone before any arithmetic happens. Backends disagree on
"now" (UTC vs. local) and on fractional-day math, so neither is ever
delegated to the database.
"""
import re
from datetime import date, datetime, time, timedelta
from typing import Optional, Union
from zoneinfo import ZoneInfo

from app.core.config import settings

_SHORT_OFFSET = re.compile(r'([+-]\d{2})$')


def local_zone(tz_name: Optional[str] = None) -> ZoneInfo:
    return ZoneInfo(tz_name or settings.TIMEZONE)


def parse_timestamp(value: str) -> datetime:
    """Parse ISO-like timestamps as returned by SQLite, PostgreSQL and MSSQL drivers"""
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    # PostgreSQL renders '+00' instead of '+00:00'
    if _SHORT_OFFSET.search(v):
        v = v + ":00"
    return datetime.fromisoformat(v)


def to_local(value: Union[datetime, str], tz_name: Optional[str] = None) -> datetime:
    """
    Convert a timestamp into a naive application-local datetime.

    Naive values are taken to already be local. Aware values are
    converted into the application zone and stripped of tzinfo.
    """
    if isinstance(value, str):
        value = parse_timestamp(value)
    if value.tzinfo is None:
        return value
    return value.astimezone(local_zone(tz_name)).replace(tzinfo=None)


def now_local(tz_name: Optional[str] = None) -> datetime:
    return datetime.now(local_zone(tz_name)).replace(tzinfo=None)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def day_window(date_from: Optional[date], date_to: Optional[date]):
    """Half-open [start, end) datetime window covering whole calendar days"""
    start = start_of_day(date_from) if date_from else None
    end = start_of_day(date_to + timedelta(days=1)) if date_to else None
    return start, end


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600.0
