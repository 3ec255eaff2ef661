"""Environment-backed settings.

Values are read on every call rather than cached at import, so a changed
environment (e.g. a re-rendered ConfigMap picked up by the process) is seen by
the next request.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from task_tracker.domain.task_models import (
    AppConfig,
    DEFAULT_APP_TITLE,
    DEFAULT_AWS_REGION,
    DEFAULT_THEME_COLOR,
)

DEFAULT_TABLE_NAME = "task-tracker-tasks"
DEFAULT_PORT = 8080
DEFAULT_HOST = "0.0.0.0"
DEFAULT_STORE = "dynamodb"
DEFAULT_DB_PATH = "./data/tasks.db"


def _env(name: str, default: str) -> str:
    # empty counts as unset
    return os.getenv(name) or default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def table_name() -> str:
    return _env("DYNAMODB_TABLE_NAME", DEFAULT_TABLE_NAME)


def aws_region() -> str:
    return _env("AWS_REGION", DEFAULT_AWS_REGION)


def host() -> str:
    return _env("HOST", DEFAULT_HOST)


def port() -> int:
    return _env_int("PORT", DEFAULT_PORT)


def store_backend() -> str:
    return _env("TASK_STORE", DEFAULT_STORE).strip().lower()


def db_path() -> str:
    return _env("DB_PATH", DEFAULT_DB_PATH)


def environment() -> str:
    return _env("APP_ENV", "development")


def log_level() -> str:
    return _env("LOG_LEVEL", "INFO").upper()


def log_dir() -> Optional[Path]:
    raw = os.getenv("LOG_DIR")
    return Path(raw) if raw else None


def ui_config() -> AppConfig:
    return AppConfig(
        app_title=_env("APP_TITLE", DEFAULT_APP_TITLE),
        theme_color=_env("APP_THEME_COLOR", DEFAULT_THEME_COLOR),
        aws_region=aws_region(),
    )
