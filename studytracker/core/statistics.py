import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from shared.models import SeriesPoint, SeriesStats

MIN_CHART_CEILING = 4
CHART_HEADROOM = 1.2


def chart_ceiling(peak: float) -> int:
    """Upper bound of the y axis: 20% headroom, never below 4."""
    return max(math.ceil((peak or 1) * CHART_HEADROOM), MIN_CHART_CEILING)


def _one_decimal(value: float) -> float:
    # ties go up, judged on the exact binary value
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def summarize(points: Sequence[SeriesPoint]) -> SeriesStats:
    """
    Total and average of a month series.

    The average only counts days with a value above zero, so days without
    records do not pull it down. With no such days it is 0.
    """
    total = sum(p.value for p in points)
    days_with_data = len([p for p in points if p.value > 0])
    peak = max((p.value for p in points), default=0.0)

    average = _one_decimal(total / days_with_data) if days_with_data else 0.0

    return SeriesStats(
        total=total,
        average=average,
        days_with_data=days_with_data,
        peak=peak,
        ceiling=chart_ceiling(peak),
    )
