from typing import Optional

from utils.datetime_utils import parse_date, shift_date, today_str
from utils.validators import is_valid_date

from ..config import DashboardSettings
from .series import month_of


def default_date(settings: DashboardSettings) -> str:
    return settings.DEFAULT_DATE or today_str(settings.TIMEZONE)


def resolve_date(value: Optional[str], settings: DashboardSettings) -> str:
    """The requested date if it is a real calendar date, otherwise the default."""
    if value and is_valid_date(value):
        try:
            parse_date(value)
        except ValueError:
            return default_date(settings)
        return value
    return default_date(settings)


def resolve_month(value: Optional[str], selected_date: str) -> str:
    """
    Month selector for one chart.

    Missing selectors follow the selected date; anything else is passed
    through untouched so a malformed one ends up as an empty chart.
    """
    if value is None or value == "":
        return month_of(selected_date)
    return value


def neighbours(date_key: str):
    """(previous day, next day); the date itself at the ends of the calendar"""
    try:
        previous = shift_date(date_key, -1)
    except (OverflowError, ValueError):
        previous = date_key
    try:
        following = shift_date(date_key, 1)
    except (OverflowError, ValueError):
        following = date_key
    return previous, following

