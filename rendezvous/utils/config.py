"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str
    venue_catalog_path: Optional[Path]
    default_top_k_venues: Optional[int]
    grid_day_count: int
    grid_start_hour: int
    grid_end_hour: int
    grid_slot_minutes: int


def _read_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _read_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _read_optional_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return Path(raw).expanduser()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process from environment variables."""
    return Settings(
        app_name=os.getenv("APP_NAME", "Rendezvous"),
        app_version=os.getenv("APP_VERSION", "0.1.0"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        venue_catalog_path=_read_optional_path("VENUE_CATALOG_PATH"),
        default_top_k_venues=_read_optional_int("DEFAULT_TOP_K_VENUES"),
        grid_day_count=_read_int("GRID_DAY_COUNT", 7),
        grid_start_hour=_read_int("GRID_START_HOUR", 9),
        grid_end_hour=_read_int("GRID_END_HOUR", 21),
        grid_slot_minutes=_read_int("GRID_SLOT_MINUTES", 30),
    )
