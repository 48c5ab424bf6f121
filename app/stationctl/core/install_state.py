"""Install state tracking for resumable installs.

The tracker is a small ledger of packages that earlier install runs
installed successfully. Each mark is written to disk immediately and
atomically, so an interrupted run loses at most the package that was
being installed when it stopped.

Storage location: ~/.local/state/stationctl/install_state.json
"""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from stationctl.core.paths import get_install_state_path
from stationctl.models.install_state import InstallState
from stationctl.models.package import PackageKind
from stationctl.utils.files import atomic_write_bytes

logger = logging.getLogger(__name__)


class InstallStateError(Exception):
    """Raised when the install state cannot be read or written."""


class InstallStateCorruptError(InstallStateError):
    """Raised when the install state file exists but is unreadable.

    Attributes:
        fallback: An empty tracker bound to the same path, for callers that
            choose to continue without the ledger.
    """

    def __init__(self, message: str, fallback: "InstallTracker") -> None:
        super().__init__(message)
        self.fallback = fallback


_FIELDS: dict[PackageKind, str] = {
    PackageKind.FORMULA: "installed_formulae",
    PackageKind.CASK: "installed_casks",
    PackageKind.NPM: "installed_npm",
}

# Taps are cheap to re-add and are not tracked
TRACKED_KINDS = frozenset(_FIELDS)


class InstallTracker:
    """Ledger of packages installed by earlier runs.

    Args:
        state: Current ledger contents.
        path: File the ledger is persisted to.
    """

    def __init__(self, state: InstallState | None = None, path: Path | None = None) -> None:
        self._state = state if state is not None else InstallState()
        self._path = path if path is not None else get_install_state_path()

    @property
    def path(self) -> Path:
        """File the ledger is persisted to."""
        return self._path

    @property
    def state(self) -> InstallState:
        """Current ledger contents."""
        return self._state

    @classmethod
    def load(cls, path: Path | None = None) -> "InstallTracker":
        """Load the ledger from disk.

        A missing file is not an error and yields an empty ledger.

        Args:
            path: Ledger file. If None, uses the default state path.

        Returns:
            Tracker with the persisted contents.

        Raises:
            InstallStateCorruptError: If the file is not a valid ledger. The
                exception carries an empty fallback tracker.
            InstallStateError: If the file exists but cannot be read.
        """
        state_path = path if path is not None else get_install_state_path()

        try:
            text = state_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No install state at %s, starting empty", state_path)
            return cls(InstallState(), state_path)
        except OSError as e:
            raise InstallStateError(f"Failed to read install state: {e}") from e

        try:
            state = InstallState.model_validate(json.loads(text))
        except (json.JSONDecodeError, ValidationError) as e:
            raise InstallStateCorruptError(
                f"Corrupt install state in {state_path}: {e}",
                fallback=cls(InstallState(), state_path),
            ) from e

        return cls(state, state_path)

    def save(self) -> Path:
        """Persist the whole ledger atomically with owner-only permissions.

        Returns:
            Path the ledger was written to.

        Raises:
            InstallStateError: If the file cannot be written.
        """
        data = self._state.model_dump_json(indent=2).encode("utf-8")
        try:
            return atomic_write_bytes(self._path, data)
        except OSError as e:
            raise InstallStateError(f"Failed to write install state: {e}") from e

    def is_installed(self, kind: PackageKind, name: str) -> bool:
        """Check whether a package was marked as installed.

        Args:
            kind: Package kind (formula, cask, or npm).
            name: Package name.

        Returns:
            True only if the package was marked.
        """
        field = _FIELDS.get(kind)
        if field is None:
            return False
        return getattr(self._state, field).get(name, False)

    def mark(self, kind: PackageKind, name: str) -> None:
        """Mark a package as installed and persist the ledger.

        Args:
            kind: Package kind (formula, cask, or npm).
            name: Package name.

        Raises:
            ValueError: If the kind is not tracked.
            InstallStateError: If the ledger cannot be written.
        """
        field = _FIELDS.get(kind)
        if field is None:
            msg = f"Install state does not track {kind.plural}"
            raise ValueError(msg)

        getattr(self._state, field)[name] = True
        self._state.last_updated = datetime.now(UTC)
        self.save()

    def is_formula_installed(self, name: str) -> bool:
        """Check whether a formula was marked as installed."""
        return self.is_installed(PackageKind.FORMULA, name)

    def is_cask_installed(self, name: str) -> bool:
        """Check whether a cask was marked as installed."""
        return self.is_installed(PackageKind.CASK, name)

    def is_npm_installed(self, name: str) -> bool:
        """Check whether an npm package was marked as installed."""
        return self.is_installed(PackageKind.NPM, name)

    def mark_formula(self, name: str) -> None:
        """Mark a formula as installed and persist."""
        self.mark(PackageKind.FORMULA, name)

    def mark_cask(self, name: str) -> None:
        """Mark a cask as installed and persist."""
        self.mark(PackageKind.CASK, name)

    def mark_npm(self, name: str) -> None:
        """Mark an npm package as installed and persist."""
        self.mark(PackageKind.NPM, name)

    def reset(self) -> None:
        """Forget all marks and delete the ledger file.

        Raises:
            InstallStateError: If the file exists but cannot be deleted.
        """
        self._state = InstallState()
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            raise InstallStateError(f"Failed to delete install state: {e}") from e
