from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_WEATHER_URL_ENV = "WEATHER_API_URL"
_WEATHER_PATH_ENV = "WEATHER_API_PATH"
_WEATHER_KEY_ENV = "WEATHER_API_KEY"
_WEATHER_TIMEOUT_ENV = "WEATHER_API_TIMEOUT"
_DIRECTORY_PATH_ENV = "DEVICE_DIRECTORY_PATH"
_LOG_LEVEL_ENV = "LOG_LEVEL"

_DISABLED_TIMEOUT_VALUES = {"none", "off", "0"}


@dataclass(frozen=True)
class Settings:
    weather_api_url: str
    weather_api_path: str
    weather_api_key: str
    weather_api_timeout: Optional[float]
    device_directory_path: Optional[str]
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_timeout(default: Optional[float]) -> Optional[float]:
    value = os.getenv(_WEATHER_TIMEOUT_ENV)
    if value is None:
        return default
    candidate = value.strip().lower()
    if not candidate:
        return default
    if candidate in _DISABLED_TIMEOUT_VALUES:
        return None
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else None


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        weather_api_url=_read_str_env(_WEATHER_URL_ENV, "https://api.openweathermap.org"),
        weather_api_path=_read_str_env(_WEATHER_PATH_ENV, "/data/2.5/weather"),
        weather_api_key=_read_str_env(_WEATHER_KEY_ENV, ""),
        weather_api_timeout=_read_timeout(10.0),
        device_directory_path=_read_optional_env(_DIRECTORY_PATH_ENV, "./data/devices.json"),
        log_level=_read_log_level("INFO"),
    )
