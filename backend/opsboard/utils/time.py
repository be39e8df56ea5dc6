"""Time Utilities - UTC timestamps and calendar-day helpers"""
import re
from datetime import date, datetime, timezone, timedelta
from typing import Optional
from dateutil import parser as date_parser

HHMM_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
YMD_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def utc_now() -> datetime:
    """Get current UTC datetime"""
    return datetime.now(timezone.utc)


def today_ymd(now: Optional[datetime] = None) -> str:
    """Current calendar day as YYYY-MM-DD (UTC)"""
    return (now or utc_now()).strftime("%Y-%m-%d")


def parse_ymd(ymd: str) -> date:
    """Parse a YYYY-MM-DD string into a date"""
    return date_parser.isoparse(ymd).date()


def add_days(ymd: str, days: int) -> str:
    """Shift a YYYY-MM-DD day by a number of days"""
    return (parse_ymd(ymd) + timedelta(days=days)).isoformat()


def weekday_of(ymd: str) -> int:
    """Weekday of a YYYY-MM-DD day (0=Monday ... 6=Sunday)"""
    return parse_ymd(ymd).weekday()


def is_hhmm(value: object) -> bool:
    """Check for an HH:MM clock string"""
    return isinstance(value, str) and bool(HHMM_RE.match(value))


def is_ymd(value: object) -> bool:
    """Check for a YYYY-MM-DD string naming a real calendar day"""
    if not isinstance(value, str) or not YMD_RE.match(value):
        return False
    try:
        parse_ymd(value)
    except ValueError:
        return False
    return True


def hhmm_to_minutes(hhmm: str) -> int:
    """Minutes since midnight for an HH:MM string (0 when malformed)"""
    if not is_hhmm(hhmm):
        return 0
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)
