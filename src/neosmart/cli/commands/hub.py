from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from neosmart.core import generate_device_id, parse_info
from neosmart.errors import BridgeError
from neosmart.utils.numbers import clamp, round_half_up

from ..common import build_client, load_settings_or_exit


def info(host: str = typer.Argument(..., help="Hub address")) -> None:
    """Show the zones a hub reports."""
    console = Console()
    settings = load_settings_or_exit()
    client = build_client(settings, host)

    try:
        payload = asyncio.run(client.info())
    except BridgeError as exc:
        console.print(f"[red]✗[/red] {exc}")
        raise typer.Exit(1) from exc

    hub_info = parse_info(payload)
    if hub_info is None:
        console.print("[red]✗[/red] Hub returned an unexpected INFO response")
        raise typer.Exit(1)

    table = Table()
    table.add_column("Name", style="green")
    table.add_column("Type")
    table.add_column("Identity", style="cyan")
    table.add_column("Set point", justify="right")
    table.add_column("Measured", justify="right")

    for device in hub_info.hub_devices():
        table.add_row(
            device.name,
            device.type_code,
            generate_device_id(device.name, device.type_code),
            f"{device.set_temperature:g}",
            f"{round_half_up(device.current_temperature, 1):g}",
        )

    console.print(table)


def set_temperature(
    host: str = typer.Argument(..., help="Hub address"),
    name: str = typer.Argument(..., help="Device name as reported by the hub"),
    temperature: float = typer.Argument(..., help="New set point in °C"),
) -> None:
    """Send a set-temperature command to one device."""
    console = Console()
    settings = load_settings_or_exit()
    client = build_client(settings, host)

    value = clamp(
        temperature, settings.driver.min_temperature, settings.driver.max_temperature
    )
    try:
        asyncio.run(client.set_temperature(int(round_half_up(value)), name))
    except BridgeError as exc:
        console.print(f"[red]✗[/red] {exc}")
        raise typer.Exit(1) from exc

    console.print(f"[green]✓[/green] Set '{name}' to {int(round_half_up(value))}°C")


def register(app: typer.Typer) -> None:
    app.command()(info)
    app.command("set")(set_temperature)
