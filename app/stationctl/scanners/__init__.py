"""Package and environment scanners.

This module exports the scanner classes for querying installed packages
and machine configuration.
"""

from stationctl.scanners.base import Scanner
from stationctl.scanners.brew import CaskScanner, FormulaScanner, TapScanner
from stationctl.scanners.environment import EnvironmentScanner
from stationctl.scanners.npm import NpmScanner

__all__ = [
    "CaskScanner",
    "EnvironmentScanner",
    "FormulaScanner",
    "NpmScanner",
    "Scanner",
    "TapScanner",
]
