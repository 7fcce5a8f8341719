from datetime import date, datetime, timedelta
from typing import Optional

import pytz
from dateutil import parser as date_parser

DEFAULT_TZ = pytz.timezone("UTC")
DATE_KEY_FORMAT = "%Y-%m-%d"


def now_in(tz_name: Optional[str] = None) -> datetime:
    tz = pytz.timezone(tz_name) if tz_name else DEFAULT_TZ
    return datetime.now(tz)


def today_str(tz_name: Optional[str] = None) -> str:
    return now_in(tz_name).strftime(DATE_KEY_FORMAT)


def parse_date(date_str: str, fmt: str = DATE_KEY_FORMAT) -> datetime:
    return datetime.strptime(date_str, fmt)


def format_date(dt: date, fmt: str = DATE_KEY_FORMAT) -> str:
    return dt.strftime(fmt)


def format_long_date(date_key: str) -> str:
    """'2025-01-01' -> 'Wednesday, January 1'"""
    dt = parse_date(date_key)
    return f"{dt:%A}, {dt:%B} {dt.day}"


def shift_date(date_key: str, days: int) -> str:
    """Move a date key by a number of days."""
    return format_date(parse_date(date_key) + timedelta(days=days))


def normalize_date(value: str) -> str:
    """
    Reduce a date-like string to its calendar date.

    Time of day and UTC offset are dropped, so "2025-01-01T00:00:00Z",
    "2025/01/01" and "Jan 1, 2025" all become "2025-01-01". Strings that
    don't parse keep their first ten characters.
    """
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00')).date().isoformat()
    except ValueError:
        pass
    try:
        return date_parser.parse(text).date().isoformat()
    except (ValueError, OverflowError):
        return text[:10]
