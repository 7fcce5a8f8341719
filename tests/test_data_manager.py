"""Tests for loading the tracker documents."""

import asyncio
import json

import pytest
from aiohttp import web

from studytracker.core.data_manager import DataLoadError, DataManager, TrackerData

from .conftest import SAMPLE_SLEEP, SAMPLE_STUDY, SAMPLE_TASKS


class TestLocalSources:
    """Tests for file sources."""

    def test_load_builds_snapshot(self, sources) -> None:
        snapshot = asyncio.run(DataManager(sources).load())

        assert isinstance(snapshot, TrackerData)
        assert [e.date for e in snapshot.tasks] == ["2025-01-01", "2025-01-02"]
        assert snapshot.study["2025-01-03"] == 2.5
        assert snapshot.hours("sleep")["2025-01-02"] == 6.5

    def test_snapshot_is_read_only(self, sources) -> None:
        snapshot = asyncio.run(DataManager(sources).load())

        with pytest.raises(TypeError):
            snapshot.study["2025-01-09"] = 1
        with pytest.raises(AttributeError):
            snapshot.tasks = ()

    def test_unknown_metric(self, sources) -> None:
        snapshot = asyncio.run(DataManager(sources).load())
        with pytest.raises(KeyError):
            snapshot.hours("mood")

    def test_missing_file_fails_whole_load(self, sources, data_dir) -> None:
        (data_dir / "sleep.json").unlink()

        with pytest.raises(DataLoadError) as exc_info:
            asyncio.run(DataManager(sources, error_location=str(data_dir)).load())

        assert exc_info.value.source == sources["sleep"]
        assert "Failed to load tracker data" in exc_info.value.message
        assert str(data_dir) in exc_info.value.message

    def test_invalid_json_fails(self, sources, data_dir) -> None:
        (data_dir / "study.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(DataLoadError):
            asyncio.run(DataManager(sources).load())

    @pytest.mark.parametrize("name,document", [
        ("study", {"2025-01-01": -2}),
        ("study", ["2025-01-01"]),
        ("tasks", {"2025-01-01": "not a list"}),
    ])
    def test_unexpected_shape_fails(self, sources, data_dir, name, document) -> None:
        (data_dir / f"{name}.json").write_text(json.dumps(document), encoding="utf-8")

        with pytest.raises(DataLoadError):
            asyncio.run(DataManager(sources).load())

    def test_missing_source_kind(self, sources) -> None:
        del sources["tasks"]
        with pytest.raises(ValueError):
            DataManager(sources)


class TestInitialize:
    """Tests for keeping the snapshot or the error."""

    def test_initialize_success(self, sources) -> None:
        manager = DataManager(sources)
        asyncio.run(manager.initialize())

        assert manager.error is None
        assert manager.get_snapshot() is manager.snapshot

    def test_initialize_failure_keeps_single_error(self, sources, data_dir) -> None:
        (data_dir / "tasks.json").unlink()
        (data_dir / "sleep.json").unlink()
        manager = DataManager(sources, error_location="data")

        asyncio.run(manager.initialize())

        assert manager.snapshot is None
        assert manager.error == "Failed to load tracker data. Ensure JSON files are available in data."
        with pytest.raises(DataLoadError):
            manager.get_snapshot()

    def test_reload_recovers(self, sources, data_dir) -> None:
        (data_dir / "sleep.json").unlink()
        manager = DataManager(sources)
        asyncio.run(manager.initialize())
        assert manager.snapshot is None

        (data_dir / "sleep.json").write_text(json.dumps(SAMPLE_SLEEP), encoding="utf-8")
        asyncio.run(manager.reload())

        assert manager.error is None
        assert manager.snapshot.sleep["2025-01-03"] == 8


class TestRemoteSources:
    """Tests for http sources served by a local aiohttp server."""

    @staticmethod
    async def _load_from_server(documents, missing=(), status=200):
        async def handler(request):
            name = request.match_info["name"]
            if name in missing:
                return web.Response(status=404, text="not found")
            return web.json_response(documents[name], status=status)

        app = web.Application()
        app.router.add_get("/data/{name}.json", handler)
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", 0)
        await site.start()
        port = runner.addresses[0][1]

        try:
            manager = DataManager(
                {kind: f"http://127.0.0.1:{port}/data/{kind}.json" for kind in documents},
                timeout=5
            )
            return await manager.load()
        finally:
            await runner.cleanup()

    def test_load_over_http(self) -> None:
        documents = {"tasks": SAMPLE_TASKS, "study": SAMPLE_STUDY, "sleep": SAMPLE_SLEEP}

        snapshot = asyncio.run(self._load_from_server(documents))

        assert len(snapshot.tasks) == 2
        assert snapshot.study["2025-02-01"] == 5

    def test_any_2xx_status_is_success(self) -> None:
        documents = {"tasks": SAMPLE_TASKS, "study": SAMPLE_STUDY, "sleep": SAMPLE_SLEEP}

        snapshot = asyncio.run(self._load_from_server(documents, status=203))

        assert snapshot.sleep["2025-01-03"] == 8

    def test_http_error_fails_whole_load(self) -> None:
        documents = {"tasks": SAMPLE_TASKS, "study": SAMPLE_STUDY, "sleep": SAMPLE_SLEEP}

        with pytest.raises(DataLoadError) as exc_info:
            asyncio.run(self._load_from_server(documents, missing=("study",)))

        assert exc_info.value.source.endswith("/data/study.json")
