"""Shared helpers for CLI commands.

Loading the catalog, settings and desired-state files is common to several
commands; these helpers print a user-friendly error and exit on failure.
"""

from pathlib import Path

import typer

from stationctl.core.catalog import Catalog, CatalogError, get_catalog
from stationctl.core.paths import get_local_snapshot_path
from stationctl.core.remote_config import RemoteConfigError, load_remote_config
from stationctl.core.settings import Settings, SettingsError, load_settings
from stationctl.core.snapshot import SnapshotError, SnapshotNotFoundError, load_snapshot
from stationctl.models.remote_config import RemoteConfig
from stationctl.models.snapshot import Snapshot
from stationctl.utils.formatting import print_error, print_info


def require_catalog() -> Catalog:
    """Load the bundled catalog or exit.

    Raises:
        typer.Exit: If the catalog cannot be loaded.
    """
    try:
        return get_catalog()
    except CatalogError as e:
        print_error(f"Failed to load package catalog: {e}")
        raise typer.Exit(code=1) from e


def require_settings() -> Settings:
    """Load user settings or exit.

    Raises:
        typer.Exit: If the settings file is invalid.
    """
    try:
        return load_settings()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def require_snapshot(path: Path | None = None) -> Snapshot:
    """Load a snapshot file (default: the local snapshot) or exit.

    The catalog match is recomputed with the configured preset threshold.

    Args:
        path: Snapshot file. If None, uses the local snapshot path.

    Raises:
        typer.Exit: If the snapshot is missing or invalid.
    """
    snapshot_path = path or get_local_snapshot_path()
    catalog = require_catalog()
    threshold = require_settings().preset_threshold
    try:
        return load_snapshot(snapshot_path, catalog, threshold)
    except SnapshotNotFoundError as e:
        print_error(f"Snapshot not found: {snapshot_path}")
        if path is None:
            print_info("Run 'stationctl snapshot --local' to capture this machine first.")
        raise typer.Exit(code=1) from e
    except SnapshotError as e:
        print_error(f"Failed to load snapshot: {e}")
        raise typer.Exit(code=1) from e


def require_remote_config(path: Path) -> RemoteConfig:
    """Load a saved config payload or exit.

    Args:
        path: Payload file.

    Raises:
        typer.Exit: If the payload is missing or invalid.
    """
    try:
        return load_remote_config(path)
    except RemoteConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
