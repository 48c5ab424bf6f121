"""Unit tests for Homebrew operators.

Tests for FormulaOperator, CaskOperator and TapOperator.
"""

import subprocess
from unittest.mock import patch

import pytest
from stationctl.models.action import ActionType
from stationctl.models.package import PackageKind
from stationctl.operators.brew import CaskOperator, FormulaOperator, TapOperator
from stationctl.utils.shell import CommandResult


class TestFormulaOperator:
    """Tests for FormulaOperator class."""

    @pytest.fixture
    def operator(self) -> FormulaOperator:
        """Create FormulaOperator instance."""
        return FormulaOperator()

    def test_kind(self, operator: FormulaOperator) -> None:
        """Operator handles formulae."""
        assert operator.kind == PackageKind.FORMULA
        assert operator.executable == "brew"

    def test_install_package(self, operator: FormulaOperator) -> None:
        """install_package runs brew install."""
        with (
            patch("stationctl.operators.base.command_exists", return_value=True),
            patch("stationctl.operators.base.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)
            result = operator.install_package("git")

        assert result.success is True
        assert result.action.action_type == ActionType.INSTALL
        assert result.action.kind == PackageKind.FORMULA
        assert mock_run.call_args.args[0] == ["brew", "install", "git"]

    def test_remove_package(self, operator: FormulaOperator) -> None:
        """remove_package runs brew uninstall."""
        with (
            patch("stationctl.operators.base.command_exists", return_value=True),
            patch("stationctl.operators.base.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)
            result = operator.remove_package("htop")

        assert result.success is True
        assert mock_run.call_args.args[0] == ["brew", "uninstall", "htop"]

    def test_remove_failure(self, operator: FormulaOperator) -> None:
        """A non-zero exit yields a failed result with stderr."""
        with (
            patch("stationctl.operators.base.command_exists", return_value=True),
            patch("stationctl.operators.base.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(
                stdout="", stderr="Error: Refusing to uninstall", returncode=1
            )
            result = operator.remove_package("openssl@3")

        assert result.success is False
        assert result.error == "Error: Refusing to uninstall"

    def test_timeout_is_failure(self, operator: FormulaOperator) -> None:
        """A timeout becomes a failed result instead of an exception."""
        with (
            patch("stationctl.operators.base.command_exists", return_value=True),
            patch(
                "stationctl.operators.base.run_command",
                side_effect=subprocess.TimeoutExpired(cmd="brew", timeout=600),
            ),
        ):
            result = operator.install_package("llvm")

        assert result.success is False
        assert "timed out" in (result.error or "")

    def test_unavailable(self, operator: FormulaOperator) -> None:
        """Without brew every action fails."""
        with patch("stationctl.operators.base.command_exists", return_value=False):
            result = operator.remove_package("git")

        assert result.success is False
        assert "brew is not available" in (result.error or "")

    def test_dry_run(self) -> None:
        """Dry run succeeds without running anything."""
        operator = FormulaOperator(dry_run=True)
        with patch("stationctl.operators.base.run_command") as mock_run:
            results = [operator.remove_package(n) for n in ("htop", "wget")]

        mock_run.assert_not_called()
        assert all(r.success for r in results)
        assert [r.action.package for r in results] == ["htop", "wget"]


class TestCaskOperator:
    """Tests for CaskOperator class."""

    def test_commands(self) -> None:
        """Casks use the --cask flag."""
        operator = CaskOperator()
        with (
            patch("stationctl.operators.base.command_exists", return_value=True),
            patch("stationctl.operators.base.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)
            operator.install_package("docker")
            operator.remove_package("slack")

        calls = [c.args[0] for c in mock_run.call_args_list]
        assert calls == [
            ["brew", "install", "--cask", "docker"],
            ["brew", "uninstall", "--cask", "slack"],
        ]


class TestTapOperator:
    """Tests for TapOperator class."""

    def test_commands(self) -> None:
        """Taps are added with brew tap and removed with brew untap."""
        operator = TapOperator()
        with (
            patch("stationctl.operators.base.command_exists", return_value=True),
            patch("stationctl.operators.base.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)
            results = [operator.install_package("hashicorp/tap"), operator.remove_package("x/y")]

        calls = [c.args[0] for c in mock_run.call_args_list]
        assert calls == [["brew", "tap", "hashicorp/tap"], ["brew", "untap", "x/y"]]
        assert [r.action.kind for r in results] == [PackageKind.TAP, PackageKind.TAP]
