"""Device lookup enriched with the current weather at the device's position."""

from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Optional

import httpx

from app.schemas import DeviceView, EnrichmentResult, StatusCode
from datastore.device_directory import DeviceDirectory, build_default_directory
from models.records import DeviceRecord
from services.weather import (
    WeatherDecodeFailed,
    WeatherProviderConfig,
    build_weather_http_client,
    build_weather_uri,
    decode_weather,
    weather_endpoint,
)
from settings import get_settings

logger = logging.getLogger(__name__)


class RepairCheckService:
    """Combines directory lookups with a weather provider call.

    Holds no per-call state, so a single instance may serve concurrent
    requests as long as the directory and HTTP client are thread safe.
    """

    def __init__(
        self,
        directory: DeviceDirectory,
        http_client: httpx.Client,
        provider: WeatherProviderConfig,
    ) -> None:
        self.directory = directory
        self.http_client = http_client
        self.provider = provider

    def list_devices(self) -> list[DeviceView]:
        devices = [DeviceView.from_record(record) for record in self.directory.list_all()]
        logger.debug("Listed devices", extra={"device_count": len(devices)})
        return devices

    def check_repair_feasibility(
        self, device_id: str
    ) -> tuple[StatusCode, Optional[EnrichmentResult]]:
        record = self.directory.find_by_id(device_id)
        if record is None:
            logger.debug("Device not found", extra={"device_id": device_id})
            return StatusCode.device_not_found, None
        logger.debug("Device found", extra={"device_id": device_id})
        return self.fetch_weather(record)

    def fetch_weather(self, record: DeviceRecord) -> tuple[StatusCode, EnrichmentResult]:
        """Query the provider for ``record``'s position and merge the reading in."""
        device = DeviceView.from_record(record)
        uri = build_weather_uri(self.provider, record.longitude, record.latitude)
        endpoint = weather_endpoint(self.provider)

        start_time = time.perf_counter()
        try:
            response = self.http_client.get(uri)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning(
                "Weather provider unavailable",
                extra={
                    "device_id": record.device_id,
                    "url": endpoint,
                    "reason": _describe_failure(exc),
                    "elapsed_ms": _elapsed_ms(start_time),
                },
            )
            return StatusCode.provider_unavailable, EnrichmentResult(device=device, weather=None)

        logger.debug(
            "Weather provider responded",
            extra={
                "device_id": record.device_id,
                "url": endpoint,
                "http_status": response.status_code,
                "elapsed_ms": _elapsed_ms(start_time),
            },
        )

        decoded = decode_weather(response.text)
        if isinstance(decoded, WeatherDecodeFailed):
            logger.debug(
                "Weather payload could not be decoded",
                extra={"device_id": record.device_id, "url": endpoint, "reason": decoded.reason},
            )
            return StatusCode.ok, EnrichmentResult(device=device, weather=None)

        return StatusCode.ok, EnrichmentResult(device=device, weather=decoded.reading)

    def close(self) -> None:
        """Release pooled connections held by the HTTP client."""
        self.http_client.close()


def _describe_failure(exc: httpx.HTTPError) -> str:
    # Status errors embed the request URL, which includes the API key.
    if isinstance(exc, httpx.HTTPStatusError):
        return f"HTTP {exc.response.status_code}"
    return f"{type(exc).__name__}: {exc}"


def _elapsed_ms(start_time: float) -> int:
    return int((time.perf_counter() - start_time) * 1000)


@lru_cache
def build_default_service() -> RepairCheckService:
    """Factory that wires the service from environment settings."""
    settings = get_settings()
    provider = WeatherProviderConfig.from_settings(settings)
    if not provider.api_key:
        logger.warning("WEATHER_API_KEY is not set; provider requests will likely be rejected")
    return RepairCheckService(
        directory=build_default_directory(),
        http_client=build_weather_http_client(provider),
        provider=provider,
    )
