"""Defaults, storage keys and filesystem locations for Pomolog."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


APP_NAME = "Pomolog"

DEFAULT_MINUTES = 25
DEFAULT_SECONDS = 0
MAX_INPUT_SECONDS = 59

TICK_INTERVAL_MS = 1000
TITLE_FLASH_MS = 8000

STATE_KEY = "pomodoro:state"
SESSIONS_KEY = "pomodoro:sessions"

NO_NAME_LABEL = "(no name)"
DELETE_PROMPT = "Delete this session? This cannot be undone."


class Preset(str, Enum):
    POMODORO = "pomodoro"
    SHORT_BREAK = "short"
    LONG_BREAK = "long"

    @property
    def seconds(self) -> int:
        return PRESET_SECONDS[self]

    @property
    def auto_starts(self) -> bool:
        return self is not Preset.POMODORO


PRESET_SECONDS = {
    Preset.POMODORO: DEFAULT_MINUTES * 60 + DEFAULT_SECONDS,
    Preset.SHORT_BREAK: 5 * 60,
    Preset.LONG_BREAK: 10 * 60,
}


def user_data_dir(app_name: str = APP_NAME) -> Path:
    """Per-user data directory (Windows/macOS/Linux)."""
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA", os.path.expanduser("~\\AppData\\Local"))
    else:
        base = os.environ.get("XDG_DATA_HOME", os.path.expanduser("~/.local/share"))
    return Path(base) / app_name


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppConfig:
    data_dir: Path
    log_level: int = logging.INFO
    console_log: bool = False

    @property
    def db_path(self) -> Path:
        return self.data_dir / "pomolog.db"

    @property
    def log_dir(self) -> Path:
        return self.data_dir / "logs"

    @classmethod
    def from_env(cls) -> "AppConfig":
        raw_dir = os.environ.get("POMOLOG_DATA_DIR")
        data_dir = Path(raw_dir).expanduser() if raw_dir else user_data_dir()
        level_name = os.environ.get("POMOLOG_LOG_LEVEL", "INFO").upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.INFO
        return cls(
            data_dir=data_dir,
            log_level=level,
            console_log=_env_flag("POMOLOG_CONSOLE_LOG"),
        )
