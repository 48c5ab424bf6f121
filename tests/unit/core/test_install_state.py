"""Unit tests for the install state tracker.

Tests for loading, marking and persisting the install ledger.
"""

import json
import stat
from pathlib import Path

import pytest
from stationctl.core.install_state import (
    TRACKED_KINDS,
    InstallStateCorruptError,
    InstallTracker,
)
from stationctl.core.paths import get_install_state_path
from stationctl.models.package import PackageKind


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    """Ledger path inside the test directory."""
    return tmp_path / "state" / "install_state.json"


class TestLoad:
    """Tests for InstallTracker.load."""

    def test_missing_file_is_empty(self, state_path: Path) -> None:
        """No file means nothing is installed."""
        tracker = InstallTracker.load(state_path)
        assert tracker.is_formula_installed("git") is False
        assert tracker.path == state_path

    def test_default_path(self) -> None:
        """Without a path the XDG state location is used."""
        tracker = InstallTracker.load()
        assert tracker.path == get_install_state_path()

    def test_corrupt_json_raises_with_fallback(self, state_path: Path) -> None:
        """Malformed JSON raises and offers an empty fallback tracker."""
        state_path.parent.mkdir(parents=True)
        state_path.write_text("{broken")

        with pytest.raises(InstallStateCorruptError) as exc_info:
            InstallTracker.load(state_path)

        fallback = exc_info.value.fallback
        assert fallback.path == state_path
        assert fallback.is_formula_installed("git") is False

    def test_wrong_schema_raises(self, state_path: Path) -> None:
        """Valid JSON with the wrong shape is also corrupt."""
        state_path.parent.mkdir(parents=True)
        state_path.write_text(json.dumps({"installed_formulae": ["git"]}))

        with pytest.raises(InstallStateCorruptError):
            InstallTracker.load(state_path)

    def test_null_maps_load_as_empty(self, state_path: Path) -> None:
        """JSON null maps are treated as empty."""
        state_path.parent.mkdir(parents=True)
        state_path.write_text(json.dumps({"installed_casks": None}))

        tracker = InstallTracker.load(state_path)

        assert tracker.is_cask_installed("docker") is False


class TestMark:
    """Tests for marking and persistence."""

    def test_mark_and_reload(self, state_path: Path) -> None:
        """Marks survive a reload from disk."""
        tracker = InstallTracker.load(state_path)
        tracker.mark_formula("git")
        tracker.mark_cask("docker")
        tracker.mark_npm("@anthropic-ai/claude-code")

        reloaded = InstallTracker.load(state_path)

        assert reloaded.is_formula_installed("git") is True
        assert reloaded.is_cask_installed("docker") is True
        assert reloaded.is_npm_installed("@anthropic-ai/claude-code") is True
        assert reloaded.is_formula_installed("docker") is False

    def test_every_mark_is_persisted(self, state_path: Path) -> None:
        """Each mark writes the file immediately."""
        tracker = InstallTracker.load(state_path)
        tracker.mark_formula("git")

        data = json.loads(state_path.read_text())

        assert data["installed_formulae"] == {"git": True}
        assert "last_updated" in data

    def test_kinds_are_independent(self, state_path: Path) -> None:
        """A formula mark does not cover a cask of the same name."""
        tracker = InstallTracker.load(state_path)
        tracker.mark_formula("docker")
        assert tracker.is_cask_installed("docker") is False

    def test_file_mode_is_owner_only(self, state_path: Path) -> None:
        """The ledger is written with mode 0600."""
        tracker = InstallTracker.load(state_path)
        tracker.mark_formula("git")
        assert stat.S_IMODE(state_path.stat().st_mode) == 0o600

    def test_last_updated_advances(self, state_path: Path) -> None:
        """Marking refreshes last_updated."""
        tracker = InstallTracker.load(state_path)
        before = tracker.state.last_updated
        tracker.mark_formula("git")
        assert tracker.state.last_updated >= before

    def test_taps_not_tracked(self, state_path: Path) -> None:
        """Taps cannot be marked and are never reported installed."""
        tracker = InstallTracker.load(state_path)
        assert PackageKind.TAP not in TRACKED_KINDS
        assert tracker.is_installed(PackageKind.TAP, "a/b") is False
        with pytest.raises(ValueError, match="taps"):
            tracker.mark(PackageKind.TAP, "a/b")

    def test_reset(self, state_path: Path) -> None:
        """reset() forgets marks and deletes the file."""
        tracker = InstallTracker.load(state_path)
        tracker.mark_formula("git")

        tracker.reset()

        assert tracker.is_formula_installed("git") is False
        assert not state_path.exists()

    def test_reset_without_file(self, state_path: Path) -> None:
        """reset() is fine when nothing was saved."""
        InstallTracker.load(state_path).reset()
        assert not state_path.exists()
