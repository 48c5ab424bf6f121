"""Snapshot command implementation.

Captures the current machine state and optionally saves it.
"""

from pathlib import Path
from typing import Annotated

import typer

from stationctl.cli.display import create_snapshot_table, print_match_summary, print_scan_step
from stationctl.cli.types import require_catalog, require_settings
from stationctl.core.capture import Capture, CaptureError
from stationctl.core.snapshot import SnapshotError, save_local_snapshot, save_snapshot
from stationctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Capture the current machine state.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def snapshot(
    ctx: typer.Context,
    local: Annotated[
        bool,
        typer.Option(
            "--local",
            "-l",
            help="Save to the local snapshot used by 'clean' by default.",
        ),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Save the snapshot to this JSON file.",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Print the snapshot as JSON.",
        ),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Fail if any capture step fails instead of saving a partial snapshot.",
        ),
    ] = False,
) -> None:
    """Capture installed packages, preferences, shell, git and dev tools.

    Examples:
        stationctl snapshot                    # Show a summary
        stationctl snapshot --local            # Save as the local snapshot
        stationctl snapshot -o mac.json        # Save to a file
        stationctl snapshot --json             # Print JSON for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    show_progress = not json_output and not quiet

    catalog = require_catalog()
    settings = require_settings()
    capture = Capture(catalog=catalog, threshold=settings.preset_threshold)

    try:
        snap = capture.capture_with_progress(
            print_scan_step if show_progress else None,
            strict=strict,
        )
    except CaptureError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    saved: list[Path] = []
    try:
        if local:
            saved.append(save_local_snapshot(snap))
        if output is not None:
            saved.append(save_snapshot(snap, output))
    except SnapshotError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if json_output:
        console.print_json(snap.model_dump_json())
        return

    if not quiet:
        console.print()
        console.print(create_snapshot_table(snap))
        print_match_summary(snap)

    for path in saved:
        print_success(f"Snapshot saved to {path}")
    if not saved and not quiet:
        print_info("Use --local or --output to save this snapshot.")
