"""Homebrew scanner implementations.

Lists installed formulae, casks and taps using the brew CLI.
"""

import logging
from abc import abstractmethod
from collections.abc import Iterator

from stationctl.models.package import PackageKind
from stationctl.scanners.base import Scanner
from stationctl.utils.shell import command_exists, parse_lines, run_command

logger = logging.getLogger(__name__)


class BrewScanner(Scanner):
    """Common behavior for scanners backed by a ``brew`` list command."""

    # brew can be slow on first run while it refreshes its caches
    _BREW_TIMEOUT: float = 120.0

    def is_available(self) -> bool:
        """Check if brew is available."""
        return command_exists("brew")

    @abstractmethod
    def _list_args(self) -> list[str]:
        """Arguments passed to brew to list this kind."""

    def scan(self) -> Iterator[str]:
        """Scan installed packages of this kind.

        Yields:
            Package names, one per output line.

        Raises:
            RuntimeError: If brew is not available or the command fails.
        """
        if not self.is_available():
            msg = "Homebrew is not available on this system"
            raise RuntimeError(msg)

        args = ["brew", *self._list_args()]
        result = run_command(args, timeout=self._BREW_TIMEOUT)

        if not result.success:
            msg = f"{' '.join(args)} failed: {result.error_output or 'unknown error'}"
            raise RuntimeError(msg)

        names = parse_lines(result.stdout)
        logger.debug("%s listed %d %s", " ".join(args), len(names), self.kind.plural)
        yield from names


class FormulaScanner(BrewScanner):
    """Scanner for Homebrew formulae.

    By default only top-level formulae (``brew leaves``) are listed, i.e.
    formulae that no other installed formula depends on.

    Args:
        leaves_only: If False, list every installed formula including
            dependencies (``brew list --formula -1``).
    """

    def __init__(self, leaves_only: bool = True) -> None:
        self._leaves_only = leaves_only

    @property
    def kind(self) -> PackageKind:
        """Return FORMULA as the package kind."""
        return PackageKind.FORMULA

    def _list_args(self) -> list[str]:
        if self._leaves_only:
            return ["leaves"]
        return ["list", "--formula", "-1"]


class CaskScanner(BrewScanner):
    """Scanner for Homebrew casks."""

    @property
    def kind(self) -> PackageKind:
        """Return CASK as the package kind."""
        return PackageKind.CASK

    def _list_args(self) -> list[str]:
        return ["list", "--cask", "-1"]


class TapScanner(BrewScanner):
    """Scanner for Homebrew taps."""

    @property
    def kind(self) -> PackageKind:
        """Return TAP as the package kind."""
        return PackageKind.TAP

    def _list_args(self) -> list[str]:
        return ["tap"]
