"""Tests for the JSON store and host configuration."""

import json
import os
from pathlib import Path

import pytest

from stradl_mcp.config import default_data_dir, get_settings, load_settings
from stradl_mcp.models.task import AppData
from stradl_mcp.utils.storage import JsonStore, legacy_data_files


def _write(path: Path, payload) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


class TestJsonStore:
    """Tests for JsonStore load/save and migration."""

    def test_creates_default_file(self, tmp_path):
        store = JsonStore(tmp_path / "data" / "tasks.json")
        data = store.load()

        assert data.tasks == []
        assert data.next_task_id == 1
        assert data.settings.stale_threshold_hours == 48
        assert (tmp_path / "data" / "tasks.json").is_file()

    def test_saves_camel_case_keys(self, tmp_path, make_task):
        path = tmp_path / "tasks.json"
        store = JsonStore(path)
        store.save(AppData(tasks=[make_task(1, hidden_until_at="2026-02-20T10:00:00.000Z")], next_task_id=2))

        raw = json.loads(path.read_text(encoding="utf-8"))
        assert raw["nextTaskId"] == 2
        assert raw["tasks"][0]["hiddenUntilAt"] == "2026-02-20T10:00:00.000Z"
        assert "staleThresholdHours" in raw["settings"]

    def test_save_then_load(self, tmp_path, make_task, make_blocker):
        store = JsonStore(tmp_path / "tasks.json")
        data = AppData(
            tasks=[make_task(1, priority="P0", status="line one\nline two")],
            blockers=[make_blocker(1, task_id=1, blocked_until_date="2026-03-01T00:00:00.000Z")],
            next_task_id=2,
            next_blocker_id=2,
        )
        store.save(data)
        assert store.load() == data

    def test_save_leaves_no_temp_files(self, tmp_path):
        store = JsonStore(tmp_path / "tasks.json")
        store.save(AppData())
        store.save(AppData())
        assert os.listdir(tmp_path) == ["tasks.json"]

    def test_migrates_is_deleted(self, tmp_path):
        path = tmp_path / "tasks.json"
        _write(
            path,
            {
                "tasks": [
                    {"id": 1, "title": "Gone", "createdAt": "2026-01-01T00:00:00.000Z",
                     "updatedAt": "2026-01-01T00:00:00.000Z", "isDeleted": True},
                    {"id": 2, "title": "Kept", "createdAt": "2026-01-01T00:00:00.000Z",
                     "updatedAt": "2026-01-01T00:00:00.000Z", "isDeleted": False},
                ],
                "nextTaskId": 3,
            },
        )

        data = JsonStore(path).load()

        assert [t.is_archived for t in data.tasks] == [True, False]
        raw = json.loads(path.read_text(encoding="utf-8"))
        assert all("isDeleted" not in t for t in raw["tasks"])

    def test_invalid_settings_fall_back_per_key(self, tmp_path):
        path = tmp_path / "tasks.json"
        _write(path, {"settings": {"staleThresholdHours": -5, "topN": 7, "focusedTaskId": "abc"}})

        settings = JsonStore(path).load().settings

        assert settings.stale_threshold_hours == 48
        assert settings.top_n == 7
        assert settings.focused_task_id is None

    def test_copies_newest_legacy_file(self, tmp_path):
        older = tmp_path / "project" / "data" / "tasks.json"
        newer = tmp_path / "project" / "server" / "data" / "tasks.json"
        _write(older, {"nextTaskId": 10})
        _write(newer, {"nextTaskId": 20})
        os.utime(older, (1_000_000, 1_000_000))
        os.utime(newer, (2_000_000, 2_000_000))

        path = tmp_path / "app" / "tasks.json"
        data = JsonStore(path, legacy_data_files(tmp_path / "project")).load()

        assert data.next_task_id == 20
        assert path.is_file()
        assert newer.is_file()

    def test_existing_file_wins_over_legacy(self, tmp_path):
        _write(tmp_path / "project" / "data" / "tasks.json", {"nextTaskId": 10})
        path = tmp_path / "tasks.json"
        _write(path, {"nextTaskId": 4})

        data = JsonStore(path, legacy_data_files(tmp_path / "project")).load()
        assert data.next_task_id == 4

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError):
            JsonStore(path).load()

    def test_non_object_raises(self, tmp_path):
        path = tmp_path / "tasks.json"
        _write(path, [1, 2, 3])
        with pytest.raises(ValueError, match="JSON object"):
            JsonStore(path).load()


class TestConfig:
    """Tests for environment-driven host settings."""

    def test_default_data_dir_per_platform(self, tmp_path):
        home = tmp_path / "home"
        assert default_data_dir("darwin", home, {}) == home / "Library" / "Application Support" / "Stradl"
        assert default_data_dir("win32", home, {"APPDATA": str(tmp_path / "roaming")}) == tmp_path / "roaming" / "Stradl"
        assert default_data_dir("linux", home, {}) == home / ".local" / "share" / "stradl"
        assert default_data_dir("linux", home, {"XDG_DATA_HOME": str(tmp_path / "xdg")}) == tmp_path / "xdg" / "stradl"

    def test_env_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("STRADL_DATA_DIR", str(tmp_path / "dir"))
        monkeypatch.delenv("STRADL_DATA_FILE", raising=False)
        monkeypatch.setenv("STRADL_LOG_LEVEL", "debug")
        monkeypatch.setenv("STRADL_LOG_FILE", "")

        settings = load_settings()

        assert settings.data_file == tmp_path / "dir" / "tasks.json"
        assert settings.log_level == "DEBUG"
        assert settings.log_file is None

    def test_store_fixture_uses_env(self, store, tmp_path):
        assert get_settings().data_file == tmp_path / "stradl" / "tasks.json"
        assert store.path == tmp_path / "stradl" / "tasks.json"
        assert store.legacy_paths == legacy_data_files(tmp_path / "project")
