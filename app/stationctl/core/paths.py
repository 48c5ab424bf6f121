"""XDG-compliant path management for stationctl.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and state storage.

XDG defaults:
- Config: ~/.config/stationctl/
- State: ~/.local/state/stationctl/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "stationctl"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/stationctl/ (or XDG_CONFIG_HOME/stationctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    State data includes the local snapshot and the install ledger. It
    should persist between runs but is not configuration.

    Returns:
        Path to ~/.local/state/stationctl/ (or XDG_STATE_HOME/stationctl/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_settings_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/stationctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/stationctl/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_local_snapshot_path() -> Path:
    """Get the well-known local snapshot path.

    Returns:
        Path to ~/.local/state/stationctl/snapshot.json.
    """
    return get_state_dir() / "snapshot.json"


def get_install_state_path() -> Path:
    """Get the install ledger path.

    Returns:
        Path to ~/.local/state/stationctl/install_state.json.
    """
    return get_state_dir() / "install_state.json"
