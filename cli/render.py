from __future__ import annotations

from typing import Any, Dict, Iterable, List

import typer

_DEVICE_FIELDS = (
    "device_id",
    "last_heartbeat",
    "longitude",
    "latitude",
    "height",
    "enabled",
    "connected",
)


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_devices(devices: List[Dict[str, Any]]) -> None:
    echo_heading("Devices")
    if not devices:
        typer.echo("No devices registered.")
        return
    for device in devices:
        state = "connected" if device.get("connected") else "disconnected"
        if not device.get("enabled"):
            state += ", disabled"
        typer.echo(
            f"  - {device.get('device_id')} "
            f"(lat={device.get('latitude')}, lon={device.get('longitude')}) [{state}]"
        )


def render_repair_check(payload: Dict[str, Any]) -> None:
    result = payload.get("result") or {}

    echo_heading("Repair Check")
    echo_key_values([("status", payload.get("status"))])

    device = result.get("device") or {}
    typer.echo()
    echo_heading("Device")
    echo_key_values((field, device.get(field)) for field in _DEVICE_FIELDS)

    weather = result.get("weather")
    typer.echo()
    echo_heading("Weather")
    if weather:
        echo_key_values(sorted(weather.items()))
    else:
        typer.echo("No weather data available.")
