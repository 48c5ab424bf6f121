"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from stationctl import __version__
from stationctl.cli.commands import clean, config, install, presets, snapshot
from stationctl.utils.formatting import configure_logging

app = typer.Typer(
    name="stationctl",
    help="Capture, compare and reconcile macOS workstation setups.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"stationctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """stationctl - Capture, compare and reconcile macOS workstation setups.

    Snapshot a machine, match it against catalog presets, install a setup
    and remove whatever a desired state does not list.
    """
    configure_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


app.add_typer(snapshot.app, name="snapshot")
app.add_typer(presets.app, name="presets")
app.add_typer(install.app, name="install")
app.add_typer(clean.app, name="clean")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
