"""Application configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from game_rental.utils.config_store import load_config_data
from game_rental.version import __app_name__

APP_NAME = __app_name__
APP_DATA_DIRNAME = "GameRental"
DB_FILENAME = "game_rental.db"
LOGS_DIRNAME = "logs"
LOG_FILENAME = "app.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3
CONFIG_FILENAME = "config.json"

ENV_HOME = "GAME_RENTAL_HOME"
ENV_DB = "GAME_RENTAL_DB"


@dataclass(frozen=True)
class AppSettings:
    """Runtime settings for GameRental."""

    database_path: Path
    serialize_checkout: bool = True
    log_level: str = "INFO"


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    return default


def load_settings(
    config_path: Path,
    default_db_path: Path,
    *,
    environ: Optional[dict[str, str]] = None,
) -> AppSettings:
    """Build settings from the JSON config file and environment overrides."""
    env = os.environ if environ is None else environ
    data = load_config_data(config_path)

    raw_db = env.get(ENV_DB) or data.get("database_path")
    database_path = Path(raw_db) if raw_db else default_db_path

    log_level = str(data.get("log_level") or "INFO").upper()
    return AppSettings(
        database_path=database_path,
        serialize_checkout=_as_bool(data.get("serialize_checkout"), True),
        log_level=log_level,
    )
