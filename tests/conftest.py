"""
Pytest configuration and shared fixtures.

Provides sample tracker documents written to a temp directory, settings
pointing at them, and a test client running the app lifespan.
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from studytracker.app import create_app
from studytracker.config import DashboardSettings

# ==============================================================================
# Sample documents
# ==============================================================================

SAMPLE_TASKS = {
    "2025-01-01": [
        {"task": "Physics problem set", "done": True},
        {"task": "Chemistry revision", "done": False},
        {"task": "Maths PYQs", "done": True},
    ],
    "2025-01-02": [
        {"task": "Mock test"},
    ],
}

SAMPLE_STUDY = {
    "2025-01-01": 6.5,
    "2025-01-03": 2.5,
    "2025-02-01": 5,
}

SAMPLE_SLEEP = {
    "2025-01-01": 7,
    "2025-01-02": 6.5,
    "2025-01-03": 8,
}


def write_documents(data_dir: Path, documents: Dict[str, Any]) -> Path:
    data_dir.mkdir(parents=True, exist_ok=True)
    for name, document in documents.items():
        (data_dir / f"{name}.json").write_text(json.dumps(document), encoding="utf-8")
    return data_dir


# ==============================================================================
# Fixtures
# ==============================================================================


@pytest.fixture
def data_dir(tmp_path):
    """Directory holding the three sample documents."""
    return write_documents(tmp_path / "data", {
        "tasks": SAMPLE_TASKS,
        "study": SAMPLE_STUDY,
        "sleep": SAMPLE_SLEEP,
    })


@pytest.fixture
def sources(data_dir):
    return {
        "tasks": str(data_dir / "tasks.json"),
        "study": str(data_dir / "study.json"),
        "sleep": str(data_dir / "sleep.json"),
    }


@pytest.fixture
def settings(data_dir):
    return DashboardSettings(
        _env_file=None,
        DATA_DIR=data_dir,
        DEFAULT_DATE="2025-01-01",
        ENVIRONMENT="testing",
    )


@pytest.fixture
def client(settings):
    """Test client with the data loaded by the app lifespan."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def broken_settings(tmp_path):
    """Settings whose sleep document is missing."""
    data_dir = write_documents(tmp_path / "broken", {
        "tasks": SAMPLE_TASKS,
        "study": SAMPLE_STUDY,
    })
    return DashboardSettings(
        _env_file=None,
        DATA_DIR=data_dir,
        DEFAULT_DATE="2025-01-01",
        ENVIRONMENT="testing",
    )
