"""Clean command implementation.

Removes packages that are installed but absent from a desired state.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from stationctl.cli.display import (
    create_actions_table,
    create_results_table,
    print_clean_summary,
    print_results_summary,
    removal_actions,
)
from stationctl.cli.types import require_remote_config, require_settings, require_snapshot
from stationctl.core.reconciler import CleanError, InventoryError, Reconciler
from stationctl.models.action import ActionResult
from stationctl.models.clean_result import CleanResult
from stationctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Remove packages not in the desired state.",
    invoke_without_command=True,
)


def _compute_diff(
    reconciler: Reconciler,
    snapshot_path: Path | None,
    config_path: Path | None,
) -> CleanResult:
    """Diff against the selected desired-state source.

    Raises:
        typer.Exit: If the source cannot be loaded or packages cannot be listed.
    """
    try:
        if config_path is not None:
            return reconciler.diff_from_config(require_remote_config(config_path))
        return reconciler.diff_from_snapshot(require_snapshot(snapshot_path))
    except InventoryError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.callback(invoke_without_command=True)
def clean(
    ctx: typer.Context,
    snapshot_path: Annotated[
        Path | None,
        typer.Option(
            "--from",
            "-f",
            help="Desired state from a snapshot file (default: local snapshot).",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Desired state from a saved config payload (JSON).",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be removed."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output the result as JSON (needs --yes or --dry-run)."),
    ] = False,
) -> None:
    """Remove formulae, casks, npm packages and taps not in the desired state.

    The desired state comes from a snapshot file, a saved config payload,
    or the local snapshot taken with 'stationctl snapshot --local'.

    Examples:
        stationctl clean --dry-run             # Preview against local snapshot
        stationctl clean --from team.json      # Reconcile with a snapshot file
        stationctl clean --config config.json  # Reconcile with a config payload
        stationctl clean -y                    # Remove without asking
    """
    if ctx.invoked_subcommand is not None:
        return

    if snapshot_path is not None and config_path is not None:
        print_error("Use either --from or --config, not both.")
        raise typer.Exit(code=1)

    settings = require_settings()
    needs_confirmation = not yes and settings.confirm_removals
    if json_output and needs_confirmation and not dry_run:
        print_error("--json cannot prompt for confirmation. Add --yes or --dry-run.")
        raise typer.Exit(code=1)

    reconciler = Reconciler()
    result = _compute_diff(reconciler, snapshot_path, config_path)

    if settings.skip_npm:
        result.extra_npm.clear()

    if result.is_clean:
        if json_output:
            console.print_json(json.dumps(result.to_dict()))
        else:
            print_success("Nothing to clean. Installed packages match the desired state.")
        return

    if not json_output:
        console.print(create_actions_table(removal_actions(result), dry_run=dry_run))
        print_clean_summary(result)

    if dry_run:
        if json_output:
            console.print_json(json.dumps(result.to_dict()))
        else:
            print_info("Dry run: no packages were removed.")
        return

    if needs_confirmation:
        confirmed = typer.confirm(
            f"\nProceed with removing {result.total_extra} package(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    results: list[ActionResult] = []
    failure: CleanError | None = None
    try:
        reconciler.execute(result, on_result=results.append)
    except CleanError as e:
        failure = e

    if json_output:
        console.print_json(json.dumps(result.to_dict()))
    else:
        console.print(create_results_table(results))
        print_results_summary(results)

    if failure is not None:
        if not json_output:
            print_error(f"{len(failure.failures)} package(s) could not be removed.")
        raise typer.Exit(code=1) from failure
