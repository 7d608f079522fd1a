"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class DeviceRecord:
    """A traffic-monitoring device as held by the device directory."""

    device_id: str
    last_heartbeat: datetime
    longitude: float
    latitude: float
    height: float
    enabled: bool
    connected: bool
