import logging

from fastapi import APIRouter, Depends, HTTPException, status

from shared.models import ReloadResponse
from ..core.data_manager import DataManager
from ..dependencies import get_data_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/data", tags=["data"])


@router.post("/reload", response_model=ReloadResponse)
async def reload_data(data_manager: DataManager = Depends(get_data_manager)):
    """
    Load every source again and swap in the new snapshot
    """
    await data_manager.reload()

    if data_manager.snapshot is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=data_manager.error)

    snapshot = data_manager.snapshot
    return ReloadResponse(
        status="loaded",
        tasks_days=len(snapshot.tasks),
        study_days=len(snapshot.study),
        sleep_days=len(snapshot.sleep),
        loaded_at=snapshot.loaded_at,
    )
