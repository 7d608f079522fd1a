"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, RootModel

from models.records import DeviceRecord


class StatusCode(str, Enum):
    """Outcome of a repair feasibility check."""

    ok = "ok"
    device_not_found = "device_not_found"
    provider_unavailable = "provider_unavailable"


class DeviceView(BaseModel):
    """Read-only projection of a directory record."""

    device_id: str = Field(..., description="Unique device identifier.")
    last_heartbeat: datetime
    longitude: float
    latitude: float
    height: float
    enabled: bool
    connected: bool

    @classmethod
    def from_record(cls, record: DeviceRecord) -> "DeviceView":
        return cls(
            device_id=record.device_id,
            last_heartbeat=record.last_heartbeat,
            longitude=record.longitude,
            latitude=record.latitude,
            height=record.height,
            enabled=record.enabled,
            connected=record.connected,
        )


class WeatherReading(RootModel[Dict[str, Any]]):
    """Current weather payload exactly as returned by the provider."""


class EnrichmentResult(BaseModel):
    """A device paired with the weather at its position, when available."""

    device: DeviceView
    weather: Optional[WeatherReading] = None


class RepairCheckResponse(BaseModel):
    """Response body for a repair feasibility check."""

    status: StatusCode
    result: EnrichmentResult
