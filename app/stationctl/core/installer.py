"""Resumable package installation.

Installs packages one at a time, skipping those the install ledger already
records and marking each one right after it succeeds. Re-running an
interrupted install therefore only attempts what is left.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from stationctl.core.install_state import TRACKED_KINDS, InstallTracker
from stationctl.models.action import ActionResult, create_install_action
from stationctl.models.package import PackageKind, PackageSet
from stationctl.operators import get_operators
from stationctl.operators.base import Operator

logger = logging.getLogger(__name__)

# Taps first so formulae from taps can resolve
INSTALL_ORDER: tuple[PackageKind, ...] = (
    PackageKind.TAP,
    PackageKind.FORMULA,
    PackageKind.CASK,
    PackageKind.NPM,
)


@dataclass(slots=True)
class InstallReport:
    """Outcome of an install run.

    Attributes:
        installed: Names installed in this run.
        skipped: Names skipped because the ledger already had them.
        failed: Failed results, in order.
        planned: Names that would be installed (dry run only).
    """

    installed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[ActionResult] = field(default_factory=list)
    planned: list[str] = field(default_factory=list)

    def merge(self, other: "InstallReport") -> None:
        """Append another report's entries to this one."""
        self.installed.extend(other.installed)
        self.skipped.extend(other.skipped)
        self.failed.extend(other.failed)
        self.planned.extend(other.planned)

    @property
    def success(self) -> bool:
        """True when no install failed."""
        return not self.failed


class Installer:
    """Installs packages through operators, consulting the install ledger.

    Args:
        tracker: Install ledger.
        operators: Operator per package kind. Defaults to the real operators.
        dry_run: If True, only plan: nothing is installed or marked.
    """

    def __init__(
        self,
        tracker: InstallTracker,
        operators: dict[PackageKind, Operator] | None = None,
        dry_run: bool = False,
    ) -> None:
        self._tracker = tracker
        self._operators = operators if operators is not None else get_operators()
        self._dry_run = dry_run

    def filter_pending(self, kind: PackageKind, names: Iterable[str]) -> list[str]:
        """Drop names the ledger already records as installed.

        Args:
            kind: Package kind.
            names: Candidate names; duplicates are removed.

        Returns:
            Names still to install, in input order.
        """
        return [
            name
            for name in dict.fromkeys(names)
            if not self._tracker.is_installed(kind, name)
        ]

    def install(
        self,
        kind: PackageKind,
        names: Iterable[str],
        on_result: Callable[[ActionResult], None] | None = None,
    ) -> InstallReport:
        """Install the pending packages of one kind.

        Each successful install is marked in the ledger before the next one
        starts. Failures are collected, never raised.

        Args:
            kind: Package kind.
            names: Names to install.
            on_result: Called with each install's outcome.

        Returns:
            InstallReport for this kind.

        Raises:
            InstallStateError: If the ledger cannot be written.
        """
        candidates = list(dict.fromkeys(names))
        pending = self.filter_pending(kind, candidates)
        report = InstallReport(skipped=[n for n in candidates if n not in pending])

        if report.skipped:
            logger.info("Skipping %d already installed %s", len(report.skipped), kind.plural)

        if self._dry_run:
            report.planned.extend(pending)
            return report

        operator = self._operators.get(kind)

        for name in pending:
            if operator is None:
                result = ActionResult(
                    action=create_install_action(name, kind),
                    success=False,
                    error=f"No operator available for {kind.plural}",
                )
            else:
                result = operator.install_package(name)

            if result.success:
                if kind in TRACKED_KINDS:
                    self._tracker.mark(kind, name)
                report.installed.append(name)
            else:
                logger.warning("Failed to install %s: %s", name, result.error)
                report.failed.append(result)

            if on_result is not None:
                on_result(result)

        return report

    def install_package_set(
        self,
        packages: PackageSet,
        on_result: Callable[[ActionResult], None] | None = None,
    ) -> InstallReport:
        """Add taps, then install formulae, casks and npm packages.

        Args:
            packages: Packages to install.
            on_result: Called with each install's outcome.

        Returns:
            Combined InstallReport.

        Raises:
            InstallStateError: If the ledger cannot be written.
        """
        report = InstallReport()
        for kind in INSTALL_ORDER:
            names = packages.names(kind)
            if names:
                report.merge(self.install(kind, names, on_result))
        return report
