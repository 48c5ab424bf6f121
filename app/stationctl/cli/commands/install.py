"""Install command implementation.

Installs a preset, snapshot or config payload, resuming where an earlier
interrupted run stopped.
"""

from pathlib import Path
from typing import Annotated

import typer

from stationctl.cli.display import create_results_table, print_install_summary
from stationctl.cli.types import (
    require_catalog,
    require_remote_config,
    require_settings,
    require_snapshot,
)
from stationctl.core.install_state import (
    InstallStateCorruptError,
    InstallStateError,
    InstallTracker,
)
from stationctl.core.installer import Installer
from stationctl.core.remote_config import config_package_set
from stationctl.models.action import ActionResult
from stationctl.models.catalog import CUSTOM_PRESET
from stationctl.models.package import PackageSet
from stationctl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Install packages from a preset, snapshot or config.",
    invoke_without_command=True,
)


def _desired_packages(
    preset: str | None,
    snapshot_path: Path | None,
    config_path: Path | None,
) -> PackageSet:
    """Resolve the selected source into a PackageSet.

    Raises:
        typer.Exit: If the source is missing, ambiguous or invalid.
    """
    sources = [s for s in (preset, snapshot_path, config_path) if s is not None]
    if len(sources) != 1:
        print_error("Specify exactly one of --preset, --from or --config.")
        raise typer.Exit(code=1)

    if preset == CUSTOM_PRESET:
        print_error("The custom preset has no packages of its own. Use --from or --config.")
        raise typer.Exit(code=1)

    if preset is not None:
        catalog = require_catalog()
        found = catalog.get_preset(preset)
        if found is None:
            print_error(f"Unknown preset: {preset}")
            print_info(f"Available presets: {', '.join(catalog.preset_names())}")
            raise typer.Exit(code=1)
        return found.to_package_set()

    if config_path is not None:
        return config_package_set(require_remote_config(config_path))

    return require_snapshot(snapshot_path).packages


def _load_tracker(reset: bool) -> InstallTracker:
    """Load the install ledger, falling back to an empty one if corrupt.

    Raises:
        typer.Exit: If the ledger cannot be read or reset.
    """
    try:
        tracker = InstallTracker.load()
    except InstallStateCorruptError as e:
        print_warning(f"{e}. Starting with an empty install state.")
        tracker = e.fallback
    except InstallStateError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if reset:
        try:
            tracker.reset()
        except InstallStateError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        print_info("Install state cleared.")

    return tracker


@app.callback(invoke_without_command=True)
def install(
    ctx: typer.Context,
    preset: Annotated[
        str | None,
        typer.Option("--preset", "-p", help="Install a catalog preset."),
    ] = None,
    snapshot_path: Annotated[
        Path | None,
        typer.Option("--from", "-f", help="Install the packages of a snapshot file."),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Install the packages of a config payload."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be installed."),
    ] = False,
    reset_state: Annotated[
        bool,
        typer.Option("--reset-state", help="Forget earlier installs and start over."),
    ] = False,
) -> None:
    """Install packages, skipping those an earlier run already installed.

    Taps are added first, then formulae, casks and npm packages. A failed
    package does not stop the run; re-running retries only what is left.

    Examples:
        stationctl install --preset developer
        stationctl install --from team.json --dry-run
        stationctl install --config config.json
        stationctl install --preset full --reset-state
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = require_settings()
    packages = _desired_packages(preset, snapshot_path, config_path)
    if settings.skip_npm and packages.npm:
        packages = packages.model_copy(update={"npm": []})

    tracker = _load_tracker(reset_state and not dry_run)
    installer = Installer(tracker, dry_run=dry_run)

    results: list[ActionResult] = []
    try:
        report = installer.install_package_set(packages, on_result=results.append)
    except InstallStateError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if dry_run:
        for name in report.planned:
            console.print(f"  [added]+[/added] {name}")
        print_install_summary(report)
        print_info("Dry run: nothing was installed.")
        return

    if results:
        console.print(create_results_table(results))
    print_install_summary(report)

    if not report.success:
        print_error(
            f"{len(report.failed)} package(s) failed. Run the same command again to retry."
        )
        raise typer.Exit(code=1)

    if not report.installed:
        print_success("Everything is already installed.")
    else:
        print_success("Installation complete.")
