from __future__ import annotations

import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PERSISTENCE_BACKEND: 'sqlite' (default) or 'memory'
    - TODO_DB_PATH: path to sqlite db file. Default 'db/sqlite.db'
    - TODO_LIST_PAGE_SIZE: max number of todos visible at once in the list chooser (default: 5)
    - TODO_LOG_ENABLED: 'false' to disable the log file (default: true)
    - TODO_LOG_FILE: path of the log file. Default 'todo_terminal.log'
    - TODO_LOG_LEVEL: standard logging level name (default: WARNING)
    """

    persistence_backend: str
    db_path: str
    list_page_size: int
    log_enabled: bool
    log_file: str
    log_level: int


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_positive_int(value: str, default: int) -> int:
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return parsed if parsed >= 1 else default


def _parse_level(value: str, default: int = logging.WARNING) -> int:
    level = logging.getLevelName(value.strip().upper())
    # getLevelName returns a "Level X" string for unknown names
    return level if isinstance(level, int) else default


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "sqlite").strip().lower()
    if backend not in {"memory", "sqlite"}:
        backend = "sqlite"

    return Settings(
        persistence_backend=backend,
        db_path=_get_env("TODO_DB_PATH", "db/sqlite.db").strip(),
        list_page_size=_parse_positive_int(_get_env("TODO_LIST_PAGE_SIZE", "5"), 5),
        log_enabled=_parse_bool(_get_env("TODO_LOG_ENABLED", "true"), True),
        log_file=_get_env("TODO_LOG_FILE", "todo_terminal.log").strip(),
        log_level=_parse_level(_get_env("TODO_LOG_LEVEL", "WARNING")),
    )
