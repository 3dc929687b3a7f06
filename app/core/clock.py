"""Time helpers.

Storage holds UTC. Calendar notions ("today", "this month", the order
number date prefix) are taken in the restaurant's business time zone.
"""
from datetime import date, datetime, time, timedelta, timezone
from functools import lru_cache
from typing import Callable, Tuple
from zoneinfo import ZoneInfo

from app.core.config import settings


Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@lru_cache
def business_tz() -> ZoneInfo:
    return ZoneInfo(settings.BUSINESS_TIMEZONE)


def to_utc(value: datetime, tz: ZoneInfo) -> datetime:
    """Naive datetimes are read as business-local time."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz)
    return value.astimezone(timezone.utc)


def local_date(now: datetime, tz: ZoneInfo) -> date:
    return to_utc(now, tz).astimezone(tz).date()


def day_bounds(day: date, tz: ZoneInfo) -> Tuple[datetime, datetime]:
    """[start of day, start of next day) in UTC."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def month_start(now: datetime, tz: ZoneInfo) -> datetime:
    today = local_date(now, tz)
    return datetime.combine(today.replace(day=1), time.min, tzinfo=tz).astimezone(timezone.utc)
