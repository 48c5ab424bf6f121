"""Utility modules for stationctl.

This module exports commonly used utility functions.
"""

from stationctl.utils.files import atomic_write, atomic_write_bytes
from stationctl.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from stationctl.utils.shell import CommandResult, command_exists, parse_lines, run_command

__all__ = [
    "CommandResult",
    "atomic_write",
    "atomic_write_bytes",
    "command_exists",
    "console",
    "err_console",
    "parse_lines",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
]
