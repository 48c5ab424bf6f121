"""Homebrew operator implementations.

Installs and removes formulae, casks and taps using the brew CLI.
"""

from stationctl.models.package import PackageKind
from stationctl.operators.base import Operator


class FormulaOperator(Operator):
    """Operator for Homebrew formulae."""

    @property
    def kind(self) -> PackageKind:
        """Return FORMULA as the package kind."""
        return PackageKind.FORMULA

    @property
    def executable(self) -> str:
        """Return brew as the driven tool."""
        return "brew"

    def _install_args(self, name: str) -> list[str]:
        return ["brew", "install", name]

    def _remove_args(self, name: str) -> list[str]:
        return ["brew", "uninstall", name]


class CaskOperator(Operator):
    """Operator for Homebrew casks (GUI applications)."""

    @property
    def kind(self) -> PackageKind:
        """Return CASK as the package kind."""
        return PackageKind.CASK

    @property
    def executable(self) -> str:
        """Return brew as the driven tool."""
        return "brew"

    def _install_args(self, name: str) -> list[str]:
        return ["brew", "install", "--cask", name]

    def _remove_args(self, name: str) -> list[str]:
        return ["brew", "uninstall", "--cask", name]


class TapOperator(Operator):
    """Operator for Homebrew taps.

    Installing a tap adds the repository; removing it untaps it.
    """

    _TIMEOUT: float = 120.0

    @property
    def kind(self) -> PackageKind:
        """Return TAP as the package kind."""
        return PackageKind.TAP

    @property
    def executable(self) -> str:
        """Return brew as the driven tool."""
        return "brew"

    def _install_args(self, name: str) -> list[str]:
        return ["brew", "tap", name]

    def _remove_args(self, name: str) -> list[str]:
        return ["brew", "untap", name]
