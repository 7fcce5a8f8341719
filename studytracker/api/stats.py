from fastapi import APIRouter, Depends, Query
from typing import Optional

from shared.models import OverviewResponse, StatsResponse
from ..config import DashboardSettings, METRICS
from ..core.data_manager import TrackerData
from ..core.navigation import default_date, resolve_date, resolve_month
from ..core.series import build_month_series, month_of
from ..core.statistics import summarize
from ..dependencies import get_metric, get_app_settings, get_tracker_data

router = APIRouter(prefix="/api/stats", tags=["statistics"])


def _metric_stats(data: TrackerData, metric: str, month: str) -> StatsResponse:
    points = build_month_series(data.hours(metric), month)
    return StatsResponse(metric=metric, month=month, stats=summarize(points))


@router.get("/overview", response_model=OverviewResponse)
async def get_overview_stats(
    date: Optional[str] = Query(None, description="YYYY-MM-DD; its month is summarized"),
    data: TrackerData = Depends(get_tracker_data),
    settings: DashboardSettings = Depends(get_app_settings)
):
    """
    Statistics of every metric for the month of the selected date
    """
    selected = resolve_date(date, settings)
    month = month_of(selected)

    return OverviewResponse(
        date=selected,
        month=month,
        metrics={metric: _metric_stats(data, metric, month) for metric in METRICS}
    )


@router.get("/{metric}", response_model=StatsResponse)
async def get_metric_stats(
    metric: str = Depends(get_metric),
    month: Optional[str] = Query(None, description="YYYY-MM; defaults to the current month"),
    data: TrackerData = Depends(get_tracker_data),
    settings: DashboardSettings = Depends(get_app_settings)
):
    """
    Total, average over recorded days, peak and chart ceiling for one month
    """
    return _metric_stats(data, metric, resolve_month(month, default_date(settings)))
