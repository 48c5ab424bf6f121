"""Unit tests for cli/display.py.

Tests for shared Rich display functions used by the clean, install and
snapshot commands.
"""

import io

import pytest
from rich.console import Console
from stationctl.cli.display import (
    create_actions_table,
    create_results_table,
    create_snapshot_table,
    print_clean_summary,
    print_install_summary,
    print_match_summary,
    print_results_summary,
    print_scan_step,
    removal_actions,
)
from stationctl.core.capture import ScanStep, StepStatus
from stationctl.core.installer import InstallReport
from stationctl.core.theme import get_theme
from stationctl.models.action import (
    Action,
    ActionResult,
    create_install_action,
    create_remove_action,
)
from stationctl.models.clean_result import CleanResult
from stationctl.models.package import PackageKind, PackageSet
from stationctl.models.snapshot import CaptureHealth, CatalogMatch, Snapshot


@pytest.fixture
def remove_action() -> Action:
    """A remove action for a formula."""
    return create_remove_action("htop", PackageKind.FORMULA, reason="Not in desired state")


@pytest.fixture
def failure_result(remove_action: Action) -> ActionResult:
    """A failed action result."""
    return ActionResult(action=remove_action, success=False, error="Refusing to uninstall")


def _render(renderable: object) -> str:
    buf = io.StringIO()
    Console(theme=get_theme(), file=buf, color_system=None, width=120).print(renderable)
    return buf.getvalue()


def _capture_console_output(func: object, *args: object, **kwargs: object) -> str:
    """Capture Rich console output by temporarily replacing the console."""
    import stationctl.cli.display as display_mod
    import stationctl.utils.formatting as fmt_mod

    buf = io.StringIO()
    test_console = Console(theme=get_theme(), file=buf, color_system=None, width=120)

    original_display_console = display_mod.console
    original_fmt_console = fmt_mod.console
    display_mod.console = test_console
    fmt_mod.console = test_console
    try:
        func(*args, **kwargs)  # type: ignore[operator]
    finally:
        display_mod.console = original_display_console
        fmt_mod.console = original_fmt_console

    return buf.getvalue()


class TestRemovalActions:
    """Tests for removal_actions."""

    def test_order_formulae_casks_npm_taps(self) -> None:
        """Formulae go first and taps last."""
        result = CleanResult(
            extra_formulae=["htop"],
            extra_casks=["slack"],
            extra_npm=["eslint"],
            extra_taps=["old/tap"],
        )
        actions = removal_actions(result)

        assert [a.package for a in actions] == ["htop", "slack", "eslint", "old/tap"]
        assert [a.kind for a in actions] == [
            PackageKind.FORMULA,
            PackageKind.CASK,
            PackageKind.NPM,
            PackageKind.TAP,
        ]
        assert all(a.is_remove for a in actions)

    def test_clean_result_has_no_actions(self) -> None:
        """Nothing extra means nothing to do."""
        assert removal_actions(CleanResult()) == []


class TestCreateActionsTable:
    """Tests for create_actions_table."""

    def test_columns(self, remove_action: Action) -> None:
        """Table has Action, Kind, Package, and Reason columns."""
        table = create_actions_table([remove_action])
        assert [col.header for col in table.columns] == ["Action", "Kind", "Package", "Reason"]

    def test_remove_row(self, remove_action: Action) -> None:
        """Remove actions render as '-remove'."""
        output = _render(create_actions_table([remove_action]))
        assert "-remove" in output
        assert "htop" in output
        assert "formula" in output

    def test_install_row(self) -> None:
        """Install actions render as '+install'."""
        action = create_install_action("rectangle", PackageKind.CASK)
        output = _render(create_actions_table([action]))
        assert "+install" in output
        assert "rectangle" in output

    def test_dry_run_title(self, remove_action: Action) -> None:
        """dry_run=True changes the title."""
        assert create_actions_table([remove_action], dry_run=True).title == (
            "Planned Actions (Dry Run)"
        )
        assert create_actions_table([remove_action]).title == "Planned Actions"


class TestCreateResultsTable:
    """Tests for create_results_table."""

    def test_success_and_failure_rows(self, failure_result: ActionResult) -> None:
        """OK and FAIL rows show their message or error."""
        ok = ActionResult(
            action=create_remove_action("wget", PackageKind.FORMULA),
            success=True,
            message="Uninstalled",
        )
        table = create_results_table([ok, failure_result])
        assert table.row_count == 2

        output = _render(table)
        assert "OK" in output
        assert "FAIL" in output
        assert "Refusing to uninstall" in output

    def test_missing_error_message(self, remove_action: Action) -> None:
        """A failure without an error text says so."""
        output = _render(create_results_table([ActionResult(action=remove_action, success=False)]))
        assert "Unknown error" in output


class TestSummaries:
    """Tests for the summary printers."""

    def test_clean_summary_counts(self) -> None:
        """Only kinds with extras are listed."""
        result = CleanResult(extra_formulae=["htop", "wget"], extra_casks=["slack"])
        output = _capture_console_output(print_clean_summary, result)
        assert "2 formulae" in output
        assert "1 casks" in output
        assert "npm" not in output
        assert "3 to remove" in output

    def test_clean_summary_empty(self) -> None:
        """A clean result prints nothing."""
        assert _capture_console_output(print_clean_summary, CleanResult()) == ""

    def test_results_summary_all_ok(self) -> None:
        """All successes print a success line."""
        ok = ActionResult(action=create_remove_action("wget", PackageKind.FORMULA), success=True)
        output = _capture_console_output(print_results_summary, [ok])
        assert "All 1 action(s) completed successfully." in output

    def test_results_summary_with_failures(self, failure_result: ActionResult) -> None:
        """Failures print succeeded and failed counts."""
        ok = ActionResult(action=create_remove_action("wget", PackageKind.FORMULA), success=True)
        output = _capture_console_output(print_results_summary, [ok, failure_result])
        assert "1 succeeded" in output
        assert "1 failed" in output

    def test_install_summary(self) -> None:
        """Installed, skipped and failed counts are shown."""
        report = InstallReport(installed=["git"], skipped=["jq", "fd"])
        output = _capture_console_output(print_install_summary, report)
        assert "2 already installed" in output
        assert "1 installed" in output
        assert "0 failed" in output

    def test_install_summary_dry_run(self) -> None:
        """Planned packages are counted."""
        output = _capture_console_output(print_install_summary, InstallReport(planned=["git"]))
        assert "1 package(s) would be installed" in output


class TestSnapshotDisplay:
    """Tests for snapshot display helpers."""

    def test_scan_step_only_finished(self) -> None:
        """Starting phases are silent; finished and failed ones print."""
        scanning = ScanStep("Homebrew Formulae", 0, 9, StepStatus.SCANNING)
        done = ScanStep("Homebrew Formulae", 0, 9, StepStatus.DONE, count=42)
        error = ScanStep("npm Globals", 3, 9, StepStatus.ERROR)

        assert _capture_console_output(print_scan_step, scanning) == ""
        assert "[1/9]" in _capture_console_output(print_scan_step, done)
        assert "(42)" in _capture_console_output(print_scan_step, done)
        assert "failed" in _capture_console_output(print_scan_step, error)

    def test_snapshot_table(self) -> None:
        """The table is titled by host and counts each section."""
        snapshot = Snapshot(
            hostname="studio",
            packages=PackageSet(formulae=["git", "go"], casks=["docker"]),
        )
        table = create_snapshot_table(snapshot)
        assert table.title == "Snapshot of studio"

        output = _render(table)
        assert "Formulae" in output
        assert "Dev tools" in output

    def test_match_summary(self) -> None:
        """Coverage, preset and partial capture are reported."""
        snapshot = Snapshot(
            matched_preset="developer",
            catalog_match=CatalogMatch(matched=["git"], unmatched=["cowsay"], match_rate=0.5),
            health=CaptureHealth(failed_steps=["Dev Tools"], partial=True),
        )
        output = _capture_console_output(print_match_summary, snapshot)
        assert "50%" in output
        assert "1 known, 1 unknown" in output
        assert "developer" in output
        assert "Partial capture, failed: Dev Tools" in output

    def test_match_summary_no_preset(self) -> None:
        """A snapshot without a preset says so."""
        output = _capture_console_output(print_match_summary, Snapshot())
        assert "No preset matches" in output
