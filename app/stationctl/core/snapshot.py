"""Snapshot file I/O operations.

This module provides functions for loading and saving snapshot files in
JSON format with validation using Pydantic models. A missing file and a
malformed file are reported as distinct errors: a corrupt desired-state
file must never be mistaken for an empty desired state. The catalog match
stored in a file is never trusted; it is recomputed on every load.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from stationctl.core.catalog import Catalog, get_catalog
from stationctl.core.matcher import PRESET_MATCH_THRESHOLD, apply_match
from stationctl.core.paths import get_local_snapshot_path
from stationctl.models.snapshot import Snapshot
from stationctl.utils.files import atomic_write_bytes

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Base exception for snapshot-related errors."""


class SnapshotNotFoundError(SnapshotError):
    """Raised when a snapshot file is not found."""


class SnapshotParseError(SnapshotError):
    """Raised when a snapshot file is not valid JSON."""


class SnapshotValidationError(SnapshotError):
    """Raised when snapshot content does not match the schema."""


def load_snapshot(
    path: Path,
    catalog: Catalog | None = None,
    threshold: float = PRESET_MATCH_THRESHOLD,
) -> Snapshot:
    """Load and validate a snapshot from a JSON file.

    Args:
        path: Path to the snapshot file.
        catalog: Catalog to recompute the match against. Defaults to the
            bundled catalog.
        threshold: Minimum similarity for preset detection.

    Returns:
        Validated Snapshot with freshly computed catalog match fields.

    Raises:
        SnapshotNotFoundError: If the file doesn't exist.
        SnapshotParseError: If the file is not valid JSON.
        SnapshotValidationError: If the content doesn't match the schema.
        SnapshotError: If the file cannot be read.
        CatalogError: If no catalog is given and the bundled one cannot load.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SnapshotNotFoundError(f"Snapshot not found: {path}") from e
    except OSError as e:
        raise SnapshotError(f"Failed to read snapshot: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotParseError(f"Invalid snapshot JSON in {path}: {e}") from e

    try:
        snapshot = Snapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotValidationError(f"Invalid snapshot content in {path}: {e}") from e

    return apply_match(snapshot, catalog if catalog is not None else get_catalog(), threshold)


def save_snapshot(snapshot: Snapshot, path: Path) -> Path:
    """Save a snapshot to a JSON file.

    The file is written atomically and readable by the owner only.

    Args:
        snapshot: The Snapshot to save.
        path: Destination path.

    Returns:
        Path where the snapshot was saved.

    Raises:
        SnapshotError: If the file cannot be written.
    """
    data = snapshot.model_dump_json(indent=2).encode("utf-8")
    try:
        atomic_write_bytes(path, data + b"\n")
    except OSError as e:
        raise SnapshotError(f"Failed to write snapshot: {e}") from e

    logger.debug("Saved snapshot to %s", path)
    return path


def save_local_snapshot(snapshot: Snapshot) -> Path:
    """Save a snapshot to the well-known local path.

    Raises:
        SnapshotError: If the file cannot be written.
    """
    return save_snapshot(snapshot, get_local_snapshot_path())
