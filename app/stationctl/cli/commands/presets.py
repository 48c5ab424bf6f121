"""Presets command implementation.

Lists catalog presets and, given a snapshot, how closely each one matches.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from stationctl.cli.types import require_catalog, require_settings, require_snapshot
from stationctl.core.matcher import jaccard_similarity
from stationctl.utils.formatting import console, print_info

app = typer.Typer(
    help="List presets and compare them with a snapshot.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def presets(
    ctx: typer.Context,
    snapshot_path: Annotated[
        Path | None,
        typer.Option("--from", "-f", help="Compare presets with this snapshot file."),
    ] = None,
    local: Annotated[
        bool,
        typer.Option("--local", "-l", help="Compare presets with the local snapshot."),
    ] = False,
) -> None:
    """Show the available presets.

    With --from or --local, also show the similarity between each preset
    and the snapshot's packages, and which preset would be detected.

    Examples:
        stationctl presets
        stationctl presets --local
        stationctl presets --from team.json
    """
    if ctx.invoked_subcommand is not None:
        return

    catalog = require_catalog()
    compare = local or snapshot_path is not None
    snapshot = require_snapshot(snapshot_path) if compare else None

    table = Table(
        title="Presets",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Preset", no_wrap=True)
    table.add_column("Packages", justify="right")
    table.add_column("Description")
    if snapshot is not None:
        table.add_column("Similarity", justify="right")

    installed = snapshot.packages.all_packages() if snapshot is not None else []

    for name in catalog.preset_names():
        preset = catalog.get_preset(name)
        if preset is None:
            continue
        row = [
            f"[info]{name}[/info]",
            str(preset.package_count),
            f"[muted]{preset.description}[/muted]",
        ]
        if snapshot is not None:
            row.append(f"{jaccard_similarity(installed, preset.packages()):.0%}")
        table.add_row(*row)

    console.print(table)

    if snapshot is None:
        return

    threshold = require_settings().preset_threshold
    best = snapshot.matched_preset
    if best:
        console.print(f"\nDetected preset: [success]{best}[/success]")
    else:
        print_info(f"No preset reaches the {threshold:.0%} similarity threshold.")
