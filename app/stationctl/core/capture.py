"""Live system capture.

Builds a Snapshot by running a fixed sequence of capture phases against
the local machine. Phases run strictly in order; a failing phase degrades
to an empty value and is recorded in the snapshot's health instead of
aborting the capture.
"""

import logging
import socket
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from stationctl.core.catalog import Catalog, get_catalog
from stationctl.core.matcher import PRESET_MATCH_THRESHOLD, apply_match
from stationctl.models.package import PackageSet
from stationctl.models.snapshot import (
    CaptureHealth,
    GitIdentity,
    ShellProfile,
    Snapshot,
)
from stationctl.scanners.base import Scanner
from stationctl.scanners.brew import CaskScanner, FormulaScanner, TapScanner
from stationctl.scanners.environment import EnvironmentScanner
from stationctl.scanners.npm import NpmScanner

logger = logging.getLogger(__name__)

# Failures a phase may raise that count as "degraded", not as a bug
_PHASE_ERRORS = (RuntimeError, OSError, subprocess.SubprocessError, ValueError)


class CaptureError(Exception):
    """Raised by a strict capture when any phase failed."""

    def __init__(self, failed_steps: list[str]) -> None:
        self.failed_steps = failed_steps
        super().__init__(f"Capture failed in: {', '.join(failed_steps)}")


class StepStatus(str, Enum):
    """Progress state of a capture phase."""

    SCANNING = "scanning"
    DONE = "done"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ScanStep:
    """Progress report for one capture phase.

    Attributes:
        name: Human-readable phase name.
        index: Zero-based position of the phase.
        total: Number of phases.
        status: Whether the phase is starting, finished, or failed.
        count: Items found (0 while scanning or on error).
    """

    name: str
    index: int
    total: int
    status: StepStatus
    count: int = 0


ProgressCallback = Callable[[ScanStep], None]


@dataclass(frozen=True, slots=True)
class _Phase:
    name: str
    run: Callable[[], Any]
    fallback: Callable[[], Any]
    count: Callable[[Any], int]


def _default_hostname() -> str:
    try:
        return socket.gethostname() or "unknown"
    except OSError:
        return "unknown"


class Capture:
    """Captures the current machine state into a Snapshot.

    All collaborators default to the real system scanners and can be
    replaced for testing.

    Args:
        formula_scanner: Lists top-level formulae.
        cask_scanner: Lists casks.
        tap_scanner: Lists taps.
        npm_scanner: Lists global npm packages.
        environment: Reads preferences, shell, git and dev tools.
        catalog: Catalog the captured snapshot is matched against. Defaults
            to the bundled catalog.
        threshold: Minimum similarity for preset detection.
        hostname: Overrides the detected hostname.
    """

    PHASE_NAMES: tuple[str, ...] = (
        "Homebrew Formulae",
        "Homebrew Casks",
        "Homebrew Taps",
        "NPM Global Packages",
        "macOS Preferences",
        "Shell Environment",
        "Git Configuration",
        "Dev Tools",
    )

    def __init__(
        self,
        formula_scanner: Scanner | None = None,
        cask_scanner: Scanner | None = None,
        tap_scanner: Scanner | None = None,
        npm_scanner: Scanner | None = None,
        environment: EnvironmentScanner | None = None,
        catalog: Catalog | None = None,
        threshold: float = PRESET_MATCH_THRESHOLD,
        hostname: str | None = None,
    ) -> None:
        self._formulae = formula_scanner or FormulaScanner()
        self._casks = cask_scanner or CaskScanner()
        self._taps = tap_scanner or TapScanner()
        self._npm = npm_scanner or NpmScanner()
        self._environment = environment or EnvironmentScanner()
        self._catalog = catalog if catalog is not None else get_catalog()
        self._threshold = threshold
        self._hostname = hostname

    def _phases(self) -> list[_Phase]:
        env = self._environment
        return [
            _Phase(self.PHASE_NAMES[0], self._formulae.names, list, len),
            _Phase(self.PHASE_NAMES[1], self._casks.names, list, len),
            _Phase(self.PHASE_NAMES[2], self._taps.names, list, len),
            _Phase(self.PHASE_NAMES[3], self._npm.names, list, len),
            _Phase(self.PHASE_NAMES[4], env.capture_macos_prefs, list, len),
            _Phase(self.PHASE_NAMES[5], env.capture_shell, ShellProfile, lambda _: 1),
            _Phase(self.PHASE_NAMES[6], env.capture_git, GitIdentity, lambda _: 1),
            _Phase(self.PHASE_NAMES[7], env.capture_dev_tools, list, len),
        ]

    def capture(self, strict: bool = False) -> Snapshot:
        """Capture the machine state without progress reporting.

        Args:
            strict: Raise instead of degrading when any phase fails.

        Returns:
            The captured Snapshot.

        Raises:
            CaptureError: If strict and a phase failed.
        """
        return self.capture_with_progress(None, strict=strict)

    def capture_with_progress(
        self,
        callback: ProgressCallback | None,
        strict: bool = False,
    ) -> Snapshot:
        """Capture the machine state, reporting each phase.

        The callback is invoked with status SCANNING before a phase runs and
        with DONE or ERROR after it finishes, always before the next phase
        starts.

        Args:
            callback: Receives a ScanStep per phase transition, or None.
            strict: Raise instead of degrading when any phase fails.

        Returns:
            The captured Snapshot, matched against the catalog.

        Raises:
            CaptureError: If strict and a phase failed. All phases still run
                and report progress first.
        """
        phases = self._phases()
        total = len(phases)
        results: list[Any] = []
        failed_steps: list[str] = []

        for index, phase in enumerate(phases):
            if callback is not None:
                callback(ScanStep(phase.name, index, total, StepStatus.SCANNING))

            try:
                value = phase.run()
            except _PHASE_ERRORS as e:
                logger.warning("Capture phase '%s' failed: %s", phase.name, e)
                failed_steps.append(phase.name)
                results.append(phase.fallback())
                if callback is not None:
                    callback(ScanStep(phase.name, index, total, StepStatus.ERROR))
                continue

            results.append(value)
            if callback is not None:
                callback(ScanStep(phase.name, index, total, StepStatus.DONE, phase.count(value)))

        if strict and failed_steps:
            raise CaptureError(failed_steps)

        formulae, casks, taps, npm, prefs, shell, git, dev_tools = results
        snapshot = Snapshot(
            captured_at=datetime.now(UTC),
            hostname=self._hostname if self._hostname is not None else _default_hostname(),
            packages=PackageSet(formulae=formulae, casks=casks, taps=taps, npm=npm),
            macos_prefs=prefs,
            shell=shell,
            git=git,
            dev_tools=dev_tools,
            health=CaptureHealth(failed_steps=failed_steps, partial=bool(failed_steps)),
        )

        snapshot = apply_match(snapshot, self._catalog, self._threshold)

        logger.debug(
            "Captured %d packages (%d failed phases)",
            snapshot.packages.total,
            len(failed_steps),
        )
        return snapshot
