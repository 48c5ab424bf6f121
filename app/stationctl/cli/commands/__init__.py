"""CLI commands for stationctl.

This package contains all subcommand implementations.
"""

from stationctl.cli.commands import clean, config, install, presets, snapshot

__all__ = ["clean", "config", "install", "presets", "snapshot"]
