#!/usr/bin/env python3
"""
Charts API for the Study Tracker dashboard
Dense monthly series for the charted metrics.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from shared.models import ChartResponse
from ..config import DashboardSettings, METRICS
from ..core.data_manager import TrackerData
from ..core.navigation import default_date, resolve_month
from ..core.series import build_month_series
from ..core.statistics import summarize
from ..dependencies import get_metric, get_app_settings, get_tracker_data

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/charts", tags=["charts"])


def build_chart(data: TrackerData, metric: str, month: str) -> ChartResponse:
    """Series and statistics for one metric and month"""
    points = build_month_series(data.hours(metric), month)
    if not points:
        logger.debug(f"Month selector {month!r} produced an empty {metric} series")

    meta = METRICS[metric]
    return ChartResponse(
        metric=metric,
        title=meta["title"],
        unit=meta["unit"],
        color=meta["color"],
        month=month,
        points=points,
        stats=summarize(points),
    )


@router.get("/{metric}", response_model=ChartResponse)
async def get_chart(
    metric: str = Depends(get_metric),
    month: Optional[str] = Query(None, description="YYYY-MM; defaults to the current month"),
    data: TrackerData = Depends(get_tracker_data),
    settings: DashboardSettings = Depends(get_app_settings)
):
    """
    Day-by-day values of a metric for one month
    """
    return build_chart(data, metric, resolve_month(month, default_date(settings)))
