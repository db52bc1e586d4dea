# src/todo_sync/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time: every value has a local-dev default.
- Bad values fall back to defaults instead of crashing startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Remote task store ----
    api_base_url: str
    connect_timeout_seconds: float
    read_timeout_seconds: float
    max_retries: int
    retry_backoff_seconds: float

    # ---- Sync behaviour ----
    consistency: str  # "refetch" | "patch"

    # ---- Initial UI state ----
    dark_mode: bool
    default_filter: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo-sync").strip() or "todo-sync"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo-sync"))

        api_base_url = _env(_k("API_BASE_URL"), "http://127.0.0.1:8000").strip().rstrip("/")

        connect_timeout = _env_float(_k("CONNECT_TIMEOUT_SECONDS"), 5.0)
        read_timeout = _env_float(_k("READ_TIMEOUT_SECONDS"), 10.0)

        max_retries = max(0, _env_int(_k("MAX_RETRIES"), 2))
        retry_backoff = max(0.0, _env_float(_k("RETRY_BACKOFF_SECONDS"), 0.5))

        consistency = _env(_k("CONSISTENCY"), "refetch").strip().lower()
        if consistency not in ("refetch", "patch"):
            consistency = "refetch"

        dark_mode = _env_bool(_k("DARK_MODE"), False)
        default_filter = _env(_k("DEFAULT_FILTER"), "all").strip().lower() or "all"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            api_base_url=api_base_url,
            connect_timeout_seconds=connect_timeout,
            read_timeout_seconds=read_timeout,
            max_retries=max_retries,
            retry_backoff_seconds=retry_backoff,
            consistency=consistency,
            dark_mode=dark_mode,
            default_filter=default_filter,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
