"""Weather provider query construction and response decoding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import httpx
from pydantic import ValidationError

from app.schemas import WeatherReading
from settings import Settings


@dataclass(frozen=True)
class WeatherProviderConfig:
    """Connection details for the current-weather endpoint."""

    base_url: str
    path: str
    api_key: str
    timeout: Optional[float] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "WeatherProviderConfig":
        return cls(
            base_url=settings.weather_api_url,
            path=settings.weather_api_path,
            api_key=settings.weather_api_key,
            timeout=settings.weather_api_timeout,
        )


@dataclass(frozen=True)
class WeatherDecoded:
    reading: WeatherReading


@dataclass(frozen=True)
class WeatherDecodeFailed:
    reason: str


WeatherDecodeResult = Union[WeatherDecoded, WeatherDecodeFailed]


def weather_endpoint(config: WeatherProviderConfig) -> str:
    """Provider URL without the query string, safe to log."""
    return config.base_url.rstrip("/") + "/" + config.path.lstrip("/")


def build_weather_uri(
    config: WeatherProviderConfig, longitude: float, latitude: float
) -> httpx.URL:
    """Return the provider URI for the current weather at a coordinate pair."""
    return httpx.URL(
        weather_endpoint(config),
        params={
            "lat": latitude,
            "lon": longitude,
            "appid": config.api_key,
            "units": "metric",
        },
    )


def decode_weather(body: str) -> WeatherDecodeResult:
    """Decode a provider body into a reading; malformed bodies are a failure value."""
    try:
        reading = WeatherReading.model_validate_json(body)
    except ValidationError as exc:
        return WeatherDecodeFailed(reason=exc.errors()[0]["msg"])
    return WeatherDecoded(reading=reading)


def build_weather_http_client(config: WeatherProviderConfig) -> httpx.Client:
    return httpx.Client(timeout=config.timeout)
