"""Configuración por variables de entorno."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import tzinfo
from functools import lru_cache
from pathlib import Path

from dateutil import tz

_BASE_DIR_ENV = "HIVE_TOOL_BASE_DIR"
_TIMEZONE_ENV = "HIVE_TOOL_TIMEZONE"
_PERIOD_ENV = "HIVE_TOOL_PERIOD"
_LOG_LEVEL_ENV = "LOG_LEVEL"

PERIOD_CHOICES: tuple[str, ...] = ("today", "3days", "7days", "30days", "all")


@dataclass(frozen=True)
class Settings:
    base_dir: Path
    timezone: str
    default_period: str
    log_level: str

    @property
    def zone(self) -> tzinfo:
        """Resolved timezone; unknown names fall back to UTC."""
        return tz.gettz(self.timezone) or tz.UTC


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_period(default: str) -> str:
    candidate = _read_str_env(_PERIOD_ENV, default)
    return candidate if candidate in PERIOD_CHOICES else default


def _read_log_level(default: str) -> str:
    return _read_str_env(_LOG_LEVEL_ENV, default).upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        base_dir=Path(
            _read_str_env(_BASE_DIR_ENV, str(Path.home() / "proyectos" / "colmenas"))
        ).expanduser(),
        timezone=_read_str_env(_TIMEZONE_ENV, "UTC"),
        default_period=_read_period("7days"),
        log_level=_read_log_level("INFO"),
    )
