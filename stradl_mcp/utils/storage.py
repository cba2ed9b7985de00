"""Flat JSON file store for the task snapshot."""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
import threading
from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path
from typing import Any

from stradl_mcp.config import get_settings
from stradl_mcp.models.task import AppData, SettingsModel

logger = logging.getLogger(__name__)


def legacy_data_files(project_root: str | Path) -> list[Path]:
    """Older locations of the data file, inside the project checkout."""
    root = Path(project_root)
    return [root / "data" / "tasks.json", root / "server" / "data" / "tasks.json"]


def _migrate_tasks(raw_tasks: list[dict[str, Any]]) -> bool:
    """Fold the legacy ``isDeleted`` flag into ``isArchived``. Returns True if anything changed."""
    migrated = False
    for task in raw_tasks:
        if "isDeleted" in task:
            if task.pop("isDeleted"):
                task["isArchived"] = True
            migrated = True
    return migrated


def _clean_settings(raw: Any) -> dict[str, Any]:
    """Keep only settings values that validate; the rest fall back to defaults."""
    if not isinstance(raw, dict):
        return {}
    cleaned: dict[str, Any] = {}
    for key, value in raw.items():
        try:
            SettingsModel.model_validate({key: value})
        except ValueError:
            logger.warning("Ignoring invalid stored setting %s=%r", key, value)
            continue
        cleaned[key] = value
    return cleaned


class JsonStore:
    """
    Load-all / save-all store backed by one JSON file.

    Writes go through a temp file in the same directory and are renamed into
    place. ``lock`` serializes load-mutate-save sequences within the process.
    """

    def __init__(self, path: str | Path, legacy_paths: Iterable[str | Path] = ()) -> None:
        self.path = Path(path)
        self.legacy_paths = [Path(p) for p in legacy_paths]
        self.lock = threading.RLock()

    # ---- migration ----

    def _newest_legacy_file(self) -> Path | None:
        existing = [p for p in self.legacy_paths if p.is_file()]
        if not existing:
            return None
        return max(existing, key=lambda p: p.stat().st_mtime)

    def _ensure_file(self) -> None:
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)

        legacy = self._newest_legacy_file()
        if legacy is not None:
            shutil.copy2(legacy, self.path)
            logger.info("Migrated data file from %s to %s", legacy, self.path)
            return

        self.save(AppData())
        logger.info("Created new data file at %s", self.path)

    # ---- public API ----

    def load(self) -> AppData:
        """
        Read the snapshot, creating or migrating the file when needed.

        Raises:
            OSError: the file cannot be read
            ValueError: the file is not valid JSON or does not match the schema
        """
        with self.lock:
            self._ensure_file()
            try:
                raw = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                logger.exception("Failed to read data file %s", self.path)
                raise

            if not isinstance(raw, dict):
                raise ValueError(f"Data file {self.path} does not contain a JSON object")

            raw_tasks = raw.get("tasks") or []
            migrated = _migrate_tasks(raw_tasks)
            raw["settings"] = _clean_settings(raw.get("settings"))

            data = AppData.model_validate(raw)
            if migrated:
                logger.info("Migrated legacy isDeleted flags in %s", self.path)
                self.save(data)
            return data

    def save(self, data: AppData) -> None:
        """Write the snapshot atomically."""
        with self.lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(data.model_dump(mode="json", by_alias=True), indent=2)
            fd, tmp_name = tempfile.mkstemp(prefix=".tasks-", suffix=".json", dir=self.path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, self.path)
            except OSError:
                logger.exception("Failed to write data file %s", self.path)
                Path(tmp_name).unlink(missing_ok=True)
                raise
            logger.debug("Saved %d task(s), %d blocker(s) to %s", len(data.tasks), len(data.blockers), self.path)


@lru_cache(maxsize=1)
def get_store() -> JsonStore:
    """Store for the configured data file. Call ``get_store.cache_clear()`` after changing config."""
    settings = get_settings()
    return JsonStore(settings.data_file, legacy_data_files(settings.project_root))
