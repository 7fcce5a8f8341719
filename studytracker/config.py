#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Study Tracker - Dashboard Configuration
Settings for the dashboard, read from the environment and `.env`.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.datetime_utils import parse_date
from utils.logger import setup_logger
from utils.validators import is_remote_source, is_valid_date


class DashboardSettings(BaseSettings):
    """Study Tracker dashboard settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===== APPLICATION =====

    APP_NAME: str = Field(
        default="Study Tracker",
        description="Application name"
    )

    VERSION: str = Field(
        default="2.0.0",
        description="Dashboard version"
    )

    ENVIRONMENT: str = Field(
        default="development",
        description="Runtime environment (development/production/testing/staging)"
    )

    DEBUG: bool = Field(
        default=False,
        description="Debug mode"
    )

    # ===== NETWORK =====

    DASHBOARD_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the dashboard to"
    )

    DASHBOARD_PORT: int = Field(
        default=8000,
        description="Port to bind the dashboard to"
    )

    ALLOWED_ORIGINS: str = Field(
        default="*",
        description="Comma-separated CORS origins"
    )

    # ===== DATA SOURCES =====

    DATA_DIR: Path = Field(
        default=Path("data"),
        description="Directory that relative data sources resolve against"
    )

    TASKS_SOURCE: str = Field(
        default="tasks.json",
        description="Tasks document: path or http(s) URL"
    )

    STUDY_SOURCE: str = Field(
        default="study.json",
        description="Study hours document: path or http(s) URL"
    )

    SLEEP_SOURCE: str = Field(
        default="sleep.json",
        description="Sleep hours document: path or http(s) URL"
    )

    FETCH_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for URL sources, seconds"
    )

    # ===== NAVIGATION =====

    DEFAULT_DATE: Optional[str] = Field(
        default=None,
        description="Date selected on first load (YYYY-MM-DD); today when unset"
    )

    TIMEZONE: str = Field(
        default="UTC",
        description="Timezone used to decide what 'today' is"
    )

    # ===== HEADER =====

    HEADER_TITLE: str = Field(
        default="Study Tracker",
        description="Dashboard heading"
    )

    HEADER_TAGLINE: str = Field(
        default="study tracker v2.0",
        description="Small caption above the heading"
    )

    HEADER_BADGES: str = Field(
        default="",
        description="Comma-separated labels shown under the heading"
    )

    # ===== LOGGING =====

    LOGS_DIR: Path = Field(
        default=Path("logs"),
        description="Log directory"
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Log level (DEBUG/INFO/WARNING/ERROR/CRITICAL)"
    )

    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format"
    )

    LOG_DATE_FORMAT: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Log date format"
    )

    # ===== VALIDATORS =====

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v):
        allowed_envs = ['development', 'production', 'testing', 'staging']
        if v.lower() not in allowed_envs:
            raise ValueError(f"ENVIRONMENT must be one of {allowed_envs}")
        return v.lower()

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        allowed_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}")
        return v.upper()

    @field_validator('DASHBOARD_PORT')
    @classmethod
    def validate_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError("DASHBOARD_PORT must be between 1 and 65535")
        return v

    @field_validator('DEFAULT_DATE')
    @classmethod
    def validate_default_date(cls, v):
        if v is None:
            return v
        if not is_valid_date(v):
            raise ValueError("DEFAULT_DATE must look like YYYY-MM-DD")
        try:
            parse_date(v)
        except ValueError:
            raise ValueError(f"DEFAULT_DATE is not a calendar date: {v}")
        return v

    # ===== HELPERS =====

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(',') if origin.strip()]

    @property
    def header_badges(self) -> List[str]:
        return [badge.strip() for badge in self.HEADER_BADGES.split(',') if badge.strip()]

    def get_data_source(self, kind: str) -> str:
        """Resolve a data source location: URLs as-is, relative paths under DATA_DIR"""
        sources = {
            "tasks": self.TASKS_SOURCE,
            "study": self.STUDY_SOURCE,
            "sleep": self.SLEEP_SOURCE,
        }
        if kind not in sources:
            raise ValueError(f"Unknown data source: {kind}. Available: {list(sources.keys())}")

        location = sources[kind]
        if is_remote_source(location):
            return location

        path = Path(location)
        if not path.is_absolute():
            path = self.DATA_DIR / path
        return str(path)

    def get_data_sources(self) -> Dict[str, str]:
        return {kind: self.get_data_source(kind) for kind in DATA_KINDS}

    def setup_logging(self) -> None:
        """Console plus rotating file logging"""
        logging.basicConfig(
            level=getattr(logging, self.LOG_LEVEL),
            format=self.LOG_FORMAT,
            datefmt=self.LOG_DATE_FORMAT,
            handlers=[logging.StreamHandler()]
        )
        setup_logger(
            str(self.LOGS_DIR / "dashboard.log"),
            fmt=self.LOG_FORMAT,
            datefmt=self.LOG_DATE_FORMAT
        )

        if not self.DEBUG:
            logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


@lru_cache()
def get_settings() -> DashboardSettings:
    return DashboardSettings()


# ===== CONSTANTS =====

DATA_KINDS = ("tasks", "study", "sleep")

# Charted metrics and how they are drawn
METRICS = {
    "study": {
        "title": "Study Focus",
        "unit": "hrs",
        "color": "#10b981",
    },
    "sleep": {
        "title": "Sleep Cycles",
        "unit": "hrs",
        "color": "#3b82f6",
    },
}

LOAD_ERROR_MESSAGE = "Failed to load tracker data. Ensure JSON files are available in {location}."
