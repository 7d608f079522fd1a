from __future__ import annotations
import json
import logging
from dataclasses import asdict, replace
from datetime import timezone
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional, Protocol

from pydantic import TypeAdapter, ValidationError

from models.records import DeviceRecord
from settings import get_settings

logger = logging.getLogger(__name__)

_RECORD_ADAPTER = TypeAdapter(DeviceRecord)


class DeviceDirectory(Protocol):
    """Read access to the store of device records."""

    def list_all(self) -> list[DeviceRecord]:
        ...

    def find_by_id(self, device_id: str) -> Optional[DeviceRecord]:
        ...


class JsonDeviceDirectory:

    def __init__(self, persistence_path: Optional[Path] = None) -> None:
        self._records: Dict[str, DeviceRecord] = {}
        self.persistence_path = persistence_path
        self._lock = Lock()
        if persistence_path:
            self._load_from_disk()

    def put_record(self, record: DeviceRecord) -> None:
        with self._lock:
            self._records[record.device_id] = replace(record)
            self._persist()

    def find_by_id(self, device_id: str) -> Optional[DeviceRecord]:
        with self._lock:
            record = self._records.get(device_id)
            if record is None:
                return None
            return replace(record)

    def list_all(self) -> list[DeviceRecord]:
        """Return copies of all records in insertion order."""

        with self._lock:
            return [replace(record) for record in self._records.values()]

    def _persist(self) -> None:
        if not self.persistence_path:
            return
        payload = {
            device_id: _record_to_json(record)
            for device_id, record in self._records.items()
        }
        self.persistence_path.parent.mkdir(parents=True, exist_ok=True)
        self.persistence_path.write_text(json.dumps(payload, indent=2))

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "{}"
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError):
            logger.warning(
                "Device directory file unreadable; starting empty",
                extra={"url": str(self.persistence_path)},
            )
            data = {}

        if not isinstance(data, dict):
            logger.warning(
                "Device directory file is not a JSON object; starting empty",
                extra={"url": str(self.persistence_path)},
            )
            data = {}

        for device_id, payload in data.items():
            if not isinstance(payload, dict):
                logger.warning(
                    "Skipping malformed device entry",
                    extra={"device_id": device_id, "reason": "entry is not an object"},
                )
                continue
            try:
                self._records[device_id] = _record_from_json(device_id, payload)
            except ValidationError as exc:
                logger.warning(
                    "Skipping malformed device entry",
                    extra={
                        "device_id": device_id,
                        "reason": f"{exc.error_count()} invalid field(s)",
                    },
                )


def _record_to_json(record: DeviceRecord) -> Dict[str, Any]:
    payload = asdict(record)
    payload.pop("device_id")
    payload["last_heartbeat"] = record.last_heartbeat.isoformat()
    return payload


def _record_from_json(device_id: str, payload: Dict[str, Any]) -> DeviceRecord:
    record = _RECORD_ADAPTER.validate_python({**payload, "device_id": device_id})
    if record.last_heartbeat.tzinfo is None:
        record.last_heartbeat = record.last_heartbeat.replace(tzinfo=timezone.utc)
    return record


@lru_cache
def build_default_directory(path: Optional[str] = None) -> JsonDeviceDirectory:
    settings = get_settings()
    directory_path = settings.device_directory_path if path is None else path
    persistence = Path(directory_path) if directory_path else None
    return JsonDeviceDirectory(persistence_path=persistence)
