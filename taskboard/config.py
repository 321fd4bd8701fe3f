"""
FILE: taskboard/config.py
PURPOSE: Settings loaded from environment variables
EXPORTS:
  - Settings (dataclass)
  - load_settings() -> Settings
NOTES:
  - All variables use the TASKBOARD_ prefix
  - Nothing is read at import time; the CLI calls load_settings() per run
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .core.constants import DEFAULT_MAX_WORKERS

ENV_PREFIX = "TASKBOARD"

DEFAULT_DB_PATH = Path.home() / ".taskboard" / "taskboard.db"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Optional[Path]) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    db_path: Path
    max_workers: int
    log_level: str
    log_file: Optional[Path]

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            db_path=_env_path(_k("DB_PATH"), DEFAULT_DB_PATH),
            max_workers=max(1, _env_int(_k("MAX_WORKERS"), DEFAULT_MAX_WORKERS)),
            log_level=_env(_k("LOG_LEVEL"), "WARNING").upper(),
            log_file=_env_path(_k("LOG_FILE"), None),
        )


def load_settings() -> Settings:
    return Settings.from_env()
