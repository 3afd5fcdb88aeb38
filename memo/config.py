"""
FILE: memo/config.py
PURPOSE: Settings loaded from environment variables
EXPORTS:
  - Settings (frozen dataclass)
  - Settings.from_env() -> Settings
DEPENDENCIES:
  - os (stdlib)
  - pathlib (stdlib)
NOTES:
  - Every variable uses the MEMO_ prefix (MEMO_DATA_DIR, MEMO_DB_PATH, ...)
  - Empty or malformed values fall back to defaults
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.constants import TODO_LIST_KEY

ENV_PREFIX = "MEMO"

DEFAULT_DATA_DIR = Path.home() / ".memo"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw.strip()).expanduser()


def _env_log_level(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    raw = raw.strip()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    db_path: Path
    log_dir: Path
    log_level: int
    storage_key: str

    @staticmethod
    def from_env() -> "Settings":
        data_dir = _env_path(_k("DATA_DIR"), DEFAULT_DATA_DIR)
        return Settings(
            data_dir=data_dir,
            db_path=_env_path(_k("DB_PATH"), data_dir / "memo.db"),
            log_dir=_env_path(_k("LOG_DIR"), data_dir),
            log_level=_env_log_level(_k("LOG_LEVEL"), logging.WARNING),
            storage_key=_env(_k("STORAGE_KEY"), TODO_LIST_KEY),
        )
