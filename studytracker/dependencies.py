#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Study Tracker - Dashboard Dependencies
Dependency providers for the FastAPI routes.
"""

import logging

from fastapi import Depends, HTTPException, Request, status

from studytracker.config import DashboardSettings, METRICS
from studytracker.core.data_manager import DataLoadError, DataManager, TrackerData

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> DashboardSettings:
    return request.app.state.settings


def get_data_manager(request: Request) -> DataManager:
    data_manager = getattr(request.app.state, "data_manager", None)
    if data_manager is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Data manager is not initialized"
        )
    return data_manager


def get_tracker_data(data_manager: DataManager = Depends(get_data_manager)) -> TrackerData:
    """Current snapshot, or 503 with the load error"""
    try:
        return data_manager.get_snapshot()
    except DataLoadError as e:
        logger.warning(f"Tracker data unavailable: {e.message}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)


def get_metric(metric: str) -> str:
    if metric not in METRICS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown metric: {metric}. Available: {list(METRICS.keys())}"
        )
    return metric
