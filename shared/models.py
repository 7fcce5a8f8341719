from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, RootModel, computed_field
from typing import List, Optional, Dict, Any, Union
from datetime import datetime


# Source documents
class TaskEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    task: str
    done: bool = False


class DailyEntry(BaseModel):
    """One day of the tasks document: tasks and/or a free-text summary."""
    model_config = ConfigDict(frozen=True)

    date: str
    summary: Optional[str] = None
    highlights: List[str] = []
    tasks: List[TaskEntry] = []


class TasksDocument(RootModel[Union[Dict[str, List[TaskEntry]], List[DailyEntry]]]):
    """Either {"2025-01-01": [TaskEntry, ...]} or [DailyEntry, ...]."""


class HoursDocument(RootModel[Dict[str, NonNegativeFloat]]):
    """{"2025-01-01": 6.5, ...}"""


# Charts and statistics
class SeriesPoint(BaseModel):
    day: int = Field(..., ge=1, le=31)
    value: float
    date: str


class SeriesStats(BaseModel):
    total: float = 0.0
    average: float = 0.0
    days_with_data: int = 0
    peak: float = 0.0
    ceiling: int = 4

    @computed_field
    @property
    def average_display(self) -> str:
        if not self.days_with_data:
            return "0"
        return f"{self.average:.1f}"


class Progress(BaseModel):
    done: int
    total: int
    percent: int = Field(..., ge=0, le=100)


# API responses
class DailyView(BaseModel):
    date: str
    heading: str
    found: bool
    entry: Optional[DailyEntry] = None
    progress: Optional[Progress] = None
    footer: Optional[str] = None


class ChartResponse(BaseModel):
    metric: str
    title: str
    unit: str
    color: str
    month: str
    points: List[SeriesPoint]
    stats: SeriesStats


class StatsResponse(BaseModel):
    metric: str
    month: str
    stats: SeriesStats


class OverviewResponse(BaseModel):
    date: str
    month: str
    metrics: Dict[str, StatsResponse]


class ReloadResponse(BaseModel):
    status: str
    tasks_days: int
    study_days: int
    sleep_days: int
    loaded_at: datetime


class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    timestamp: float
    data: Dict[str, Any] = {}
