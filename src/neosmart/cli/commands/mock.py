from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from neosmart.bridge import run_mock_hub


def register(app: typer.Typer) -> None:
    @app.command()
    def mock(
        host: str = typer.Option("0.0.0.0", "--host", help="Address to bind"),
        port: int = typer.Option(4242, "--port", "-p", help="Port to listen on"),
    ) -> None:
        """Run a mock neoHub for development."""
        console = Console()
        console.print(f"Starting mock neoHub on {host}:{port}...")
        console.print("Press Ctrl+C to stop.\n")

        try:
            asyncio.run(run_mock_hub(host=host, port=port))
        except KeyboardInterrupt:
            console.print("\n[green]Mock neoHub stopped.[/green]")
