"""Reconciliation of installed packages against a desired state.

The reconciler computes which packages are installed now but absent from
a desired state (a snapshot, a config payload, or plain lists), and can
remove them one at a time. A failing removal never stops the remaining
ones; failures are collected and reported together at the end.
"""

import logging
import subprocess
from collections.abc import Callable, Iterable

from stationctl.core.remote_config import config_package_set
from stationctl.models.action import ActionResult, create_remove_action
from stationctl.models.clean_result import CleanResult
from stationctl.models.package import PackageKind, PackageSet
from stationctl.models.remote_config import RemoteConfig
from stationctl.models.snapshot import Snapshot
from stationctl.operators import get_operators
from stationctl.operators.base import Operator
from stationctl.scanners.base import Scanner
from stationctl.scanners.brew import CaskScanner, FormulaScanner, TapScanner
from stationctl.scanners.npm import NpmScanner

logger = logging.getLogger(__name__)

# Removal order: packages before the taps that may provide them
EXECUTION_ORDER: tuple[PackageKind, ...] = (
    PackageKind.FORMULA,
    PackageKind.CASK,
    PackageKind.NPM,
    PackageKind.TAP,
)

# Kinds whose listing failure skips the comparison instead of aborting
_OPTIONAL_KINDS = frozenset({PackageKind.NPM, PackageKind.TAP})

# Failures a scanner can raise: non-zero exit, missing binary, timeout
_SCAN_ERRORS = (RuntimeError, OSError, subprocess.SubprocessError)


class InventoryError(Exception):
    """Raised when the installed package set cannot be determined."""


class CleanError(Exception):
    """Raised after execution when one or more removals failed.

    Attributes:
        failures: Failed ActionResults in execution order.
    """

    def __init__(self, failures: list[ActionResult]) -> None:
        self.failures = failures
        details = "; ".join(
            f"{r.action.package}: {r.error or 'unknown error'}" for r in failures
        )
        super().__init__(f"{len(failures)} package(s) failed to remove: {details}")


class InstalledInventory:
    """Lists the live installed packages, one scanner per kind.

    Formulae are listed with ``brew leaves`` so dependencies of desired
    formulae are never reported as extra.

    Args:
        scanners: Scanner per kind. Missing kinds use the default scanner.
    """

    def __init__(self, scanners: dict[PackageKind, Scanner] | None = None) -> None:
        defaults: dict[PackageKind, Scanner] = {
            PackageKind.FORMULA: FormulaScanner(),
            PackageKind.CASK: CaskScanner(),
            PackageKind.NPM: NpmScanner(),
            PackageKind.TAP: TapScanner(),
        }
        self._scanners = {**defaults, **(scanners or {})}

    def names(self, kind: PackageKind) -> list[str]:
        """List installed packages of one kind.

        Args:
            kind: Package kind to list.

        Returns:
            Installed names, empty if the package manager is not installed.

        Raises:
            InventoryError: If the package manager is present but fails or
                times out.
        """
        try:
            return self._scanners[kind].names()
        except _SCAN_ERRORS as e:
            raise InventoryError(f"Failed to list installed {kind.plural}: {e}") from e


def _extra(installed: Iterable[str], desired: Iterable[str]) -> list[str]:
    """Names installed but not desired, deduplicated and sorted."""
    return sorted(set(installed) - set(desired))


class Reconciler:
    """Diffs the current package set against a desired one and removes extras.

    Args:
        current: Already captured package set. If None, the live set is
            read from ``inventory`` on first use and reused afterwards.
        inventory: Source of the live package set.
        operators: Operator per package kind used for removals.
    """

    def __init__(
        self,
        current: PackageSet | None = None,
        inventory: InstalledInventory | None = None,
        operators: dict[PackageKind, Operator] | None = None,
    ) -> None:
        self._current = current
        self._inventory = inventory
        self._operators = operators
        self._listed: dict[PackageKind, list[str] | None] = {}

    @property
    def operators(self) -> dict[PackageKind, Operator]:
        """Operators used by execute(), created on first use."""
        if self._operators is None:
            self._operators = get_operators()
        return self._operators

    def _installed(self, kind: PackageKind) -> list[str] | None:
        """Installed names of one kind, or None if the kind must be skipped.

        Raises:
            InventoryError: If formulae or casks cannot be listed.
        """
        if self._current is not None:
            return self._current.names(kind)

        if kind not in self._listed:
            if self._inventory is None:
                self._inventory = InstalledInventory()
            try:
                self._listed[kind] = self._inventory.names(kind)
            except InventoryError as e:
                if kind not in _OPTIONAL_KINDS:
                    raise
                logger.warning("Skipping %s comparison: %s", kind.plural, e)
                self._listed[kind] = None

        return self._listed[kind]

    def _diff(self, desired: PackageSet) -> CleanResult:
        result = CleanResult()

        for kind in (PackageKind.FORMULA, PackageKind.CASK, PackageKind.NPM):
            installed = self._installed(kind)
            if installed is not None:
                result.extra(kind).extend(_extra(installed, desired.names(kind)))

        # Taps are only reconciled when the desired state declares some
        if desired.taps:
            installed_taps = self._installed(PackageKind.TAP)
            if installed_taps is not None:
                result.extra_taps.extend(_extra(installed_taps, desired.taps))

        logger.debug(
            "Diff: %d extra (%s)",
            result.total_extra,
            ", ".join(f"{len(result.extra(k))} {k.plural}" for k in EXECUTION_ORDER),
        )
        return result

    def diff_from_snapshot(self, desired: Snapshot) -> CleanResult:
        """Compare the current packages against a snapshot's packages.

        Args:
            desired: Snapshot describing the desired state.

        Returns:
            CleanResult with the extra lists filled in.

        Raises:
            InventoryError: If formulae or casks cannot be listed.
        """
        return self._diff(desired.packages)

    def diff_from_lists(
        self,
        formulae: Iterable[str],
        casks: Iterable[str],
        npm: Iterable[str],
        taps: Iterable[str] | None = None,
    ) -> CleanResult:
        """Compare the current packages against explicit desired lists.

        Args:
            formulae: Desired formulae.
            casks: Desired casks.
            npm: Desired global npm packages.
            taps: Desired taps. Taps are not compared when empty or None.

        Returns:
            CleanResult with the extra lists filled in.

        Raises:
            InventoryError: If formulae or casks cannot be listed.
        """
        desired = PackageSet(
            formulae=list(formulae),
            casks=list(casks),
            npm=list(npm),
            taps=list(taps or []),
        )
        return self._diff(desired)

    def diff_from_config(self, config: RemoteConfig) -> CleanResult:
        """Compare the current packages against a config payload.

        Args:
            config: Validated config payload.

        Returns:
            CleanResult with the extra lists filled in.

        Raises:
            InventoryError: If formulae or casks cannot be listed.
        """
        return self._diff(config_package_set(config))

    def execute(
        self,
        result: CleanResult,
        dry_run: bool = False,
        on_result: Callable[[ActionResult], None] | None = None,
    ) -> None:
        """Remove every extra package, one at a time.

        Each processed name is appended to the matching ``removed_*`` or
        ``failed_*`` list of ``result``; the extra lists are left as they
        were. Names are processed once even if listed twice.

        Args:
            result: Diff to execute; mutated in place.
            dry_run: If True, remove nothing and leave ``result`` unchanged.
            on_result: Called with each removal's outcome as it completes.

        Raises:
            CleanError: After all removals were attempted, if any failed.
        """
        if dry_run:
            logger.info("Dry run: %d package(s) would be removed", result.total_extra)
            return

        failures: list[ActionResult] = []

        for kind in EXECUTION_ORDER:
            names = list(dict.fromkeys(result.extra(kind)))
            if not names:
                continue

            operator = self.operators.get(kind)
            logger.info("Removing %d extra %s", len(names), kind.plural)

            for name in names:
                if operator is None:
                    action_result = ActionResult(
                        action=create_remove_action(name, kind),
                        success=False,
                        error=f"No operator available for {kind.plural}",
                    )
                else:
                    action_result = operator.remove_package(name)

                if action_result.success:
                    result.removed(kind).append(name)
                else:
                    result.failed(kind).append(name)
                    failures.append(action_result)
                    logger.warning("Failed to remove %s: %s", name, action_result.error)

                if on_result is not None:
                    on_result(action_result)

        if failures:
            raise CleanError(failures)
