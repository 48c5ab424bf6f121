"""CLI package for stationctl.

This package contains the Typer application and all subcommands.
"""

from stationctl.cli.main import app

__all__ = ["app"]
