"""Loading saved config payloads.

The config service returns a JSON document describing a desired setup.
Fetching it is handled elsewhere; this module validates a payload that has
been saved to disk so it can drive reconciliation.
"""

import json
from pathlib import Path

from pydantic import ValidationError

from stationctl.models.package import PackageSet
from stationctl.models.remote_config import RemoteConfig


class RemoteConfigError(Exception):
    """Raised when a config payload is missing, malformed, or invalid."""


def load_remote_config(path: Path) -> RemoteConfig:
    """Load and validate a config payload from a JSON file.

    Args:
        path: Path to the payload.

    Returns:
        Validated RemoteConfig.

    Raises:
        RemoteConfigError: If the file is missing, not JSON, or fails validation.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise RemoteConfigError(f"Config not found: {path}") from e
    except OSError as e:
        raise RemoteConfigError(f"Failed to read config: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RemoteConfigError(f"Invalid config JSON in {path}: {e}") from e

    try:
        return RemoteConfig.model_validate(data)
    except ValidationError as e:
        raise RemoteConfigError(f"Invalid config content in {path}: {e}") from e


def config_package_set(config: RemoteConfig) -> PackageSet:
    """Convert a config payload's lists into a PackageSet.

    Args:
        config: Validated config payload.

    Returns:
        PackageSet with formulae taken from ``packages``.
    """
    return PackageSet(
        formulae=list(config.packages),
        casks=list(config.casks),
        taps=list(config.taps),
        npm=list(config.npm),
    )
