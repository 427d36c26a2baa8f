from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from neosmart.config import Settings, load_settings, render_settings_toml, write_settings

from ..common import load_settings_or_exit, resolve_config_path_or_exit

app = typer.Typer(help="Inspect and create the driver configuration", no_args_is_help=True)


@app.command("path")
def config_path() -> None:
    """Print where the configuration is read from."""
    path, exists = resolve_config_path_or_exit(allow_missing=True)
    state = "exists" if exists else "missing, defaults in use"
    typer.echo(f"{path} ({state})")


@app.command("show")
def show_config() -> None:
    """Print the effective settings as TOML."""
    settings = load_settings_or_exit()
    path, exists = resolve_config_path_or_exit(allow_missing=True)

    typer.echo(f"# source: {path if exists else 'built-in defaults'}")
    typer.echo(render_settings_toml(settings))


@app.command("init")
def init_config(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Replace an existing config file"),
    ] = False,
) -> None:
    """Write a config file holding the default poll and hub settings."""
    console = Console()
    path, exists = resolve_config_path_or_exit(allow_missing=True)

    if exists and not force:
        # refuse to clobber, but say whether the file still loads
        try:
            load_settings(path)
        except ValueError as exc:
            console.print(f"[red]✗[/red] {exc}")
            raise typer.Exit(1) from exc
        console.print(f"[dim]Config exists:[/dim] {path}")
        return

    write_settings(Settings(), path)
    action = "Replaced" if exists else "Created"
    console.print(f"[green]✓[/green] {action} config: {path}")
