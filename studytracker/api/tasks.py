from fastapi import APIRouter, Depends

from shared.models import DailyView
from ..core.data_manager import TrackerData
from ..core.entries import build_daily_view
from ..dependencies import get_tracker_data

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("/{date}", response_model=DailyView)
async def get_daily_entry(
    date: str,
    data: TrackerData = Depends(get_tracker_data)
):
    """
    Tasks, summary and progress for one day

    A day without a record is not an error: the response has found=false.
    """
    return build_daily_view(data.tasks, date)
