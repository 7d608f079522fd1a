"""Unit tests for the JSON-backed device directory."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from datastore.device_directory import JsonDeviceDirectory
from models.records import DeviceRecord


def _sample_record(device_id: str = "dev-1") -> DeviceRecord:
    return DeviceRecord(
        device_id=device_id,
        last_heartbeat=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
        longitude=20.0,
        latitude=10.0,
        height=3.5,
        enabled=True,
        connected=False,
    )


def test_find_by_id_returns_copy() -> None:
    directory = JsonDeviceDirectory()
    original = _sample_record()

    directory.put_record(original)
    fetched = directory.find_by_id(original.device_id)

    assert fetched == original
    assert fetched is not original

    fetched.latitude = 99.0  # type: ignore[union-attr]
    assert directory.find_by_id(original.device_id).latitude == 10.0  # type: ignore[union-attr]


def test_find_by_id_returns_none_for_unknown_id() -> None:
    directory = JsonDeviceDirectory()
    directory.put_record(_sample_record())

    assert directory.find_by_id("missing") is None
    assert directory.find_by_id("") is None


def test_list_all_preserves_insertion_order() -> None:
    directory = JsonDeviceDirectory()
    for device_id in ("dev-b", "dev-a", "dev-c"):
        directory.put_record(_sample_record(device_id))

    assert [record.device_id for record in directory.list_all()] == ["dev-b", "dev-a", "dev-c"]


def test_list_all_on_empty_directory() -> None:
    assert JsonDeviceDirectory().list_all() == []


def test_put_record_persists_to_disk_and_reloads(tmp_path) -> None:
    path = tmp_path / "devices.json"
    directory = JsonDeviceDirectory(persistence_path=path)
    record = _sample_record()

    directory.put_record(record)

    payload = json.loads(path.read_text())
    assert payload["dev-1"]["latitude"] == 10.0
    assert payload["dev-1"]["last_heartbeat"] == "2024-01-01T12:00:00+00:00"

    reloaded = JsonDeviceDirectory(persistence_path=path)
    assert reloaded.find_by_id("dev-1") == record


def test_seed_file_accepts_zulu_timestamps(tmp_path) -> None:
    path = tmp_path / "devices.json"
    path.write_text(
        json.dumps(
            {
                "dev-9": {
                    "last_heartbeat": "2024-03-05T08:30:00Z",
                    "longitude": 1.5,
                    "latitude": 2.5,
                    "height": 0,
                    "enabled": True,
                    "connected": True,
                }
            }
        )
    )

    record = JsonDeviceDirectory(persistence_path=path).find_by_id("dev-9")

    assert record is not None
    assert record.last_heartbeat == datetime(2024, 3, 5, 8, 30, tzinfo=timezone.utc)
    assert record.height == 0.0


def test_malformed_seed_file_yields_empty_directory(tmp_path) -> None:
    path = tmp_path / "devices.json"
    path.write_text("{not valid json")

    assert JsonDeviceDirectory(persistence_path=path).list_all() == []


def test_malformed_entries_are_skipped(tmp_path) -> None:
    path = tmp_path / "devices.json"
    good = {
        "last_heartbeat": "2024-01-01T00:00:00+00:00",
        "longitude": 1.0,
        "latitude": 2.0,
        "height": 3.0,
        "enabled": True,
        "connected": True,
    }
    path.write_text(json.dumps({"good": good, "bad": {"latitude": 1.0}, "worse": "text"}))

    directory = JsonDeviceDirectory(persistence_path=path)

    assert [record.device_id for record in directory.list_all()] == ["good"]


def _seed_entry(**overrides) -> dict:
    entry = {
        "last_heartbeat": "2024-01-01T00:00:00+00:00",
        "longitude": 1.0,
        "latitude": 2.0,
        "height": 3.0,
        "enabled": True,
        "connected": True,
    }
    entry.update(overrides)
    return entry


def test_seed_flags_given_as_strings_are_parsed(tmp_path) -> None:
    path = tmp_path / "devices.json"
    path.write_text(
        json.dumps(
            {
                "off": _seed_entry(enabled="false", connected="no"),
                "on": _seed_entry(enabled="true", connected="1"),
            }
        )
    )

    directory = JsonDeviceDirectory(persistence_path=path)

    off = directory.find_by_id("off")
    on = directory.find_by_id("on")
    assert off is not None and off.enabled is False and off.connected is False
    assert on is not None and on.enabled is True and on.connected is True


def test_seed_entry_with_invalid_flag_is_skipped(tmp_path, caplog) -> None:
    path = tmp_path / "devices.json"
    path.write_text(
        json.dumps({"bad": _seed_entry(enabled="maybe"), "good": _seed_entry()})
    )

    with caplog.at_level(logging.WARNING, logger="datastore.device_directory"):
        directory = JsonDeviceDirectory(persistence_path=path)

    assert [record.device_id for record in directory.list_all()] == ["good"]
    assert [record.device_id for record in caplog.records] == ["bad"]


def test_seed_file_with_non_object_top_level_logs_warning(tmp_path, caplog) -> None:
    path = tmp_path / "devices.json"
    path.write_text(json.dumps([_seed_entry()]))

    with caplog.at_level(logging.WARNING, logger="datastore.device_directory"):
        directory = JsonDeviceDirectory(persistence_path=path)

    assert directory.list_all() == []
    assert "not a JSON object" in caplog.text
