import asyncio
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import aiohttp
from pydantic import ValidationError

from shared.models import DailyEntry, HoursDocument, TasksDocument
from utils.validators import is_remote_source

from ..config import DATA_KINDS, LOAD_ERROR_MESSAGE, DashboardSettings
from .entries import normalize_tasks_document

logger = logging.getLogger(__name__)


class DataLoadError(Exception):
    """A data source could not be retrieved or parsed."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.source = source


@dataclass(frozen=True)
class TrackerData:
    """Read-only snapshot of the three source documents."""
    tasks: Tuple[DailyEntry, ...]
    study: Mapping[str, float]
    sleep: Mapping[str, float]
    loaded_at: datetime = field(default_factory=datetime.now)

    def hours(self, metric: str) -> Mapping[str, float]:
        if metric == "study":
            return self.study
        if metric == "sleep":
            return self.sleep
        raise KeyError(metric)


class DataManager:
    """Loads the tracker JSON documents and holds the current snapshot"""

    def __init__(self, sources: Dict[str, str], timeout: float = 10.0, error_location: str = "data"):
        missing = [kind for kind in DATA_KINDS if kind not in sources]
        if missing:
            raise ValueError(f"Missing data sources: {missing}")

        self.sources = dict(sources)
        self.timeout = timeout
        self.error_message = LOAD_ERROR_MESSAGE.format(location=error_location)

        self.snapshot: Optional[TrackerData] = None
        self.error: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: DashboardSettings) -> "DataManager":
        return cls(
            settings.get_data_sources(),
            timeout=settings.FETCH_TIMEOUT,
            error_location=str(settings.DATA_DIR)
        )

    # === LOADING ===

    async def initialize(self) -> None:
        """Load all sources; on failure keep the error instead of a snapshot"""
        try:
            self.snapshot = await self.load()
            self.error = None
        except DataLoadError as e:
            self.snapshot = None
            self.error = e.message
            return

        logger.info(
            "Loaded tracker data: %d task days, %d study days, %d sleep days",
            len(self.snapshot.tasks), len(self.snapshot.study), len(self.snapshot.sleep)
        )

    async def reload(self) -> None:
        logger.info("Reloading tracker data")
        await self.initialize()

    async def cleanup(self) -> None:
        self.snapshot = None

    async def load(self) -> TrackerData:
        """
        Fetch every source concurrently and build a snapshot.

        All fetches are awaited before anything is decided; if any of them
        failed, the whole load fails with one DataLoadError.
        """
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            results = await asyncio.gather(
                *(self._fetch_json(session, kind) for kind in DATA_KINDS),
                return_exceptions=True
            )

        documents = {}
        failures = []
        for kind, result in zip(DATA_KINDS, results):
            if isinstance(result, BaseException):
                logger.error(f"Error loading {kind} from {self.sources[kind]}: {result}")
                failures.append(result)
            else:
                documents[kind] = result

        if failures:
            first = failures[0]
            source = first.source if isinstance(first, DataLoadError) else None
            raise DataLoadError(self.error_message, source=source) from first

        try:
            tasks = TasksDocument.model_validate(documents["tasks"])
            study = HoursDocument.model_validate(documents["study"])
            sleep = HoursDocument.model_validate(documents["sleep"])
        except ValidationError as e:
            logger.error(f"Tracker data has an unexpected shape: {e}")
            raise DataLoadError(self.error_message) from e

        return TrackerData(
            tasks=normalize_tasks_document(tasks),
            study=MappingProxyType(dict(study.root)),
            sleep=MappingProxyType(dict(sleep.root)),
        )

    def get_snapshot(self) -> TrackerData:
        if self.snapshot is None:
            raise DataLoadError(self.error or self.error_message)
        return self.snapshot

    # === SOURCES ===

    async def _fetch_json(self, session: aiohttp.ClientSession, kind: str) -> Any:
        location = self.sources[kind]
        if is_remote_source(location):
            return await self._fetch_remote(session, location)
        return await self._fetch_local(location)

    async def _fetch_remote(self, session: aiohttp.ClientSession, url: str) -> Any:
        try:
            async with session.get(url) as response:
                if not response.ok:
                    raise DataLoadError(
                        f"Failed to load {url}: {response.status} {response.reason}",
                        source=url
                    )
                return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise DataLoadError(f"Failed to load {url}: {e}", source=url) from e

    async def _fetch_local(self, location: str) -> Any:
        try:
            return await asyncio.to_thread(self._load_json, Path(location))
        except (OSError, ValueError) as e:
            raise DataLoadError(f"Failed to load {location}: {e}", source=location) from e

    @staticmethod
    def _load_json(file_path: Path) -> Any:
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
