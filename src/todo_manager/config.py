# src/todo_manager/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Components receive settings by injection (tests pass a SimpleNamespace).
- Every path is relative to the data dir unless overridden explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

TIMEZONE_CHOICES = ("local", "utc")
LOAD_MODE_CHOICES = ("lenient", "strict")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Real environment variables win over .env.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    return value if value in choices else default


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

    # ---- Local files ----
    data_dir: Path
    store_path: Path
    export_path: Path
    log_dir: Path

    # ---- Behaviour ----
    timezone: str
    load_mode: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo").strip() or "todo"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path("."))
        store_path = _env_path(_k("STORE_PATH"), data_dir / "tasks.csv")
        export_path = _env_path(_k("EXPORT_PATH"), data_dir / "exported_tasks.csv")
        log_dir = _env_path(_k("LOG_DIR"), data_dir / ".local" / "todo")

        timezone = _env_choice(_k("TIMEZONE"), TIMEZONE_CHOICES, "local")
        load_mode = _env_choice(_k("LOAD_MODE"), LOAD_MODE_CHOICES, "lenient")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            store_path=store_path,
            export_path=export_path,
            log_dir=log_dir,
            timezone=timezone,
            load_mode=load_mode,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
