"""Tests for dashboard settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from studytracker.config import DashboardSettings
from studytracker.core.navigation import default_date, neighbours, resolve_date, resolve_month


def _settings(**overrides):
    return DashboardSettings(_env_file=None, **overrides)


class TestDashboardSettings:
    """Tests for validation and helpers."""

    def test_defaults(self) -> None:
        settings = _settings()
        assert settings.DATA_DIR == Path("data")
        assert settings.get_data_source("tasks") == str(Path("data") / "tasks.json")
        assert settings.allowed_origins == ["*"]
        assert settings.header_badges == []

    def test_sources_resolve_against_data_dir(self, tmp_path) -> None:
        absolute = tmp_path / "elsewhere" / "sleep.json"
        settings = _settings(
            DATA_DIR=tmp_path,
            STUDY_SOURCE="https://example.com/study.json",
            SLEEP_SOURCE=str(absolute),
        )

        sources = settings.get_data_sources()

        assert sources["tasks"] == str(tmp_path / "tasks.json")
        assert sources["study"] == "https://example.com/study.json"
        assert sources["sleep"] == str(absolute)

    def test_unknown_source(self) -> None:
        with pytest.raises(ValueError):
            _settings().get_data_source("mood")

    def test_environment_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "PRODUCTION")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        settings = _settings()
        assert settings.is_production
        assert settings.LOG_LEVEL == "DEBUG"

    @pytest.mark.parametrize("field,value", [
        ("ENVIRONMENT", "moon"),
        ("LOG_LEVEL", "LOUD"),
        ("DASHBOARD_PORT", 70000),
        ("DEFAULT_DATE", "01/01/2025"),
        ("DEFAULT_DATE", "2025-02-30"),
        ("FETCH_TIMEOUT", 0),
    ])
    def test_invalid_values(self, field, value) -> None:
        with pytest.raises(ValidationError):
            _settings(**{field: value})

    def test_comma_separated_lists(self) -> None:
        settings = _settings(ALLOWED_ORIGINS="http://a.test, http://b.test", HEADER_BADGES="AIR 11,notes")
        assert settings.allowed_origins == ["http://a.test", "http://b.test"]
        assert settings.header_badges == ["AIR 11", "notes"]


class TestNavigation:
    """Tests for selected date and month resolution."""

    def test_default_date_setting(self) -> None:
        assert default_date(_settings(DEFAULT_DATE="2025-01-01")) == "2025-01-01"

    def test_default_date_is_today_when_unset(self) -> None:
        assert len(default_date(_settings(TIMEZONE="Asia/Kolkata"))) == 10

    @pytest.mark.parametrize("value,expected", [
        ("2025-03-04", "2025-03-04"),
        (None, "2025-01-01"),
        ("", "2025-01-01"),
        ("2025-02-30", "2025-01-01"),
        ("tomorrow", "2025-01-01"),
    ])
    def test_resolve_date(self, value, expected) -> None:
        assert resolve_date(value, _settings(DEFAULT_DATE="2025-01-01")) == expected

    def test_resolve_month(self) -> None:
        assert resolve_month(None, "2025-03-04") == "2025-03"
        assert resolve_month("2024-02", "2025-03-04") == "2024-02"
        assert resolve_month("garbage", "2025-03-04") == "garbage"

    def test_neighbours(self) -> None:
        assert neighbours("2025-03-01") == ("2025-02-28", "2025-03-02")
        assert neighbours("9999-12-31") == ("9999-12-30", "9999-12-31")

    def test_neighbours_of_impossible_date(self) -> None:
        assert neighbours("2025-02-30") == ("2025-02-30", "2025-02-30")
