"""
Month series builder.

Turns a sparse {date_key: hours} map into one point per calendar day of the
selected month, with missing days set to zero.
"""

import calendar
from typing import List, Mapping, Optional, Tuple

from shared.models import SeriesPoint


def parse_month(selector: Optional[str]) -> Optional[Tuple[int, int]]:
    """'2025-01' -> (2025, 1); None when the selector is unusable."""
    if not selector:
        return None

    parts = selector.strip().split('-')
    if len(parts) != 2:
        return None

    try:
        year, month = int(parts[0]), int(parts[1])
    except ValueError:
        return None

    if not 1 <= year <= 9999 or not 1 <= month <= 12:
        return None
    return year, month


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_of(date_key: str) -> str:
    return date_key[:7]


def build_month_series(hours: Mapping[str, float], selector: Optional[str]) -> List[SeriesPoint]:
    parsed = parse_month(selector)
    if parsed is None:
        return []

    year, month = parsed
    points = []
    for day in range(1, days_in_month(year, month) + 1):
        date_key = f"{year:04d}-{month:02d}-{day:02d}"
        points.append(SeriesPoint(day=day, value=hours.get(date_key) or 0, date=date_key))
    return points
