from __future__ import annotations

from typing import Annotated

import typer

from neosmart.utils.logging import setup_logging

from .commands import config as config_cmd
from .commands.discover import register as register_discover
from .commands.hub import register as register_hub
from .commands.mock import register as register_mock

app = typer.Typer(help="neosmart - Heatmiser neoHub driver tools", no_args_is_help=True)

app.add_typer(config_cmd.app, name="config")

register_discover(app)
register_hub(app)
register_mock(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level (default: LOGLEVEL or INFO)"),
    ] = None,
    wire: Annotated[
        bool,
        typer.Option("--wire", help="Log raw hub commands and replies"),
    ] = False,
) -> None:
    """neosmart CLI."""
    setup_logging(log_level, wire=wire or None)

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"neosmart version {get_version('neosmart')}")
        raise typer.Exit()
