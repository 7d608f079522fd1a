from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_devices, render_repair_check


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for querying the traffic weather check service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Service base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each HTTP response.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("devices")
def devices_command(ctx: typer.Context) -> None:
    """List every registered device."""
    state = _get_state(ctx)
    render_devices(state.client.list_devices())


@app.command("repair-check")
def repair_check_command(
    ctx: typer.Context,
    device_id: str = typer.Argument(..., help="Identifier of the device to check."),
) -> None:
    """Show a device with the current weather at its position."""
    state = _get_state(ctx)
    payload = state.client.repair_check(device_id)
    render_repair_check(payload)
    if payload.get("status") == "provider_unavailable":
        typer.secho("Weather provider could not be reached.", fg=typer.colors.YELLOW, err=True)
