"""Local calendar-day helpers.

Timestamps are stored as naive UTC. Daily views (goal metrics, habit
check-ins, mindfulness) are keyed by the user's local calendar day, which is
derived from ``settings.day_utc_offset_minutes``.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple

from app.config import settings


def _offset() -> timedelta:
    return timedelta(minutes=settings.day_utc_offset_minutes)


def utc_now() -> datetime:
    return datetime.utcnow()


def to_local(utc_dt: datetime) -> datetime:
    return utc_dt + _offset()


def local_today(now: Optional[datetime] = None) -> date:
    return to_local(now or utc_now()).date()


def local_date_of(utc_dt: datetime) -> date:
    """Local calendar day a naive-UTC timestamp falls on"""
    return to_local(utc_dt).date()


def day_bounds_utc(day: date) -> Tuple[datetime, datetime]:
    """[start, end) of a local day expressed in naive UTC"""
    start = datetime.combine(day, datetime.min.time()) - _offset()
    return start, start + timedelta(days=1)


def week_bounds(day: date) -> Tuple[date, date]:
    """Sunday..Saturday of the week containing ``day``"""
    # weekday(): Monday=0 .. Sunday=6
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Aware datetimes are converted to UTC and stripped; naive ones are kept"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
