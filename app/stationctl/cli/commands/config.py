"""Config commands.

Shows the effective settings and writes a settings file with defaults.
"""

from typing import Annotated

import typer
from rich.table import Table

from stationctl.cli.types import require_settings
from stationctl.core.paths import get_settings_path
from stationctl.core.settings import Settings, SettingsError, save_settings
from stationctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize stationctl settings.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective settings and where they are read from."""
    settings = require_settings()
    path = get_settings_path()

    table = Table(
        title="Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", no_wrap=True)
    table.add_column("Value")
    table.add_column("Description")

    for name, field in Settings.model_fields.items():
        table.add_row(
            name,
            str(getattr(settings, name)),
            f"[muted]{field.description or ''}[/muted]",
        )

    console.print(table)
    source = str(path) if path.exists() else f"{path} (not created, using defaults)"
    console.print(f"\n[muted]Source: {source}[/muted]")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file containing the default values."""
    path = get_settings_path()
    if path.exists() and not force:
        print_info(f"Settings already exist at {path}. Use --force to overwrite.")
        raise typer.Exit(code=0)

    try:
        saved = save_settings(Settings(), path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
