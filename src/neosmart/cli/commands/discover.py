from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console
from rich.table import Table

from neosmart import __version__
from neosmart.bridge import discover_hub
from neosmart.core import PairingFlow

from ..common import load_settings_or_exit

logger = logging.getLogger(__name__)


def discover(
    timeout: float | None = typer.Option(
        None, "--timeout", "-t", help="Seconds to wait for a hub (config default)"
    ),
) -> None:
    """Find a neoHub on the LAN and list the devices it would offer for pairing."""
    console = Console()
    settings = load_settings_or_exit()
    wait = timeout or settings.driver.pairing_timeout

    console.print(f"Looking for a neoHub ({wait:.0f}s)...")
    flow = PairingFlow(
        lambda: discover_hub(settings.bridge), timeout=wait, app_version=__version__
    )
    descriptors = asyncio.run(flow.list_devices())

    if not descriptors:
        console.print("No devices found.")
        return

    table = Table()
    table.add_column("Name", style="green")
    table.add_column("Identity", style="cyan")
    table.add_column("Hub")

    for descriptor in descriptors:
        table.add_row(
            descriptor.name, descriptor.id, descriptor.data.bridge_ip or ""
        )

    console.print(table)
    console.print(f"\n[green]Found {len(descriptors)} device(s)[/green]")


def register(app: typer.Typer) -> None:
    app.command()(discover)
