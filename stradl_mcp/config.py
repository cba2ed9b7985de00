"""Process settings loaded from environment variables (+ optional .env).

These are host settings (where the data file lives, how to log). The
tracker's own settings (stale threshold, top N, focus...) are persisted in
the data file and handled by the engine.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "STRADL"
APP_DIR_NAME = "Stradl"
DATA_FILE_NAME = "tasks.json"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def default_data_dir(platform: str | None = None, home: Path | None = None, env: dict[str, str] | None = None) -> Path:
    """Per-user application data directory for the current platform."""
    platform = platform or sys.platform
    home = home or Path.home()
    env = os.environ if env is None else env

    if platform == "darwin":
        return home / "Library" / "Application Support" / APP_DIR_NAME
    if platform.startswith("win"):
        appdata = env.get("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return base / APP_DIR_NAME
    xdg = env.get("XDG_DATA_HOME")
    base = Path(xdg) if xdg else home / ".local" / "share"
    return base / APP_DIR_NAME.lower()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Storage ----
    data_dir: Path
    data_file: Path
    project_root: Path

    # ---- Logging ----
    log_level: str
    log_file: Path | None


def load_settings() -> Settings:
    """Read settings from the environment. Loads .env once without overriding real env vars."""
    load_dotenv(override=False)

    data_dir = _env_path(_k("DATA_DIR"), default_data_dir())
    data_file = _env_path(_k("DATA_FILE"), data_dir / DATA_FILE_NAME)
    log_file_raw = _env(_k("LOG_FILE")).strip()

    return Settings(
        data_dir=data_dir,
        data_file=data_file,
        project_root=_env_path(_k("PROJECT_ROOT"), Path.cwd()),
        log_level=_env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO",
        log_file=Path(log_file_raw).expanduser() if log_file_raw else None,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached process settings. Call ``get_settings.cache_clear()`` after changing env."""
    return load_settings()
