"""Unit tests for the npm operator."""

from unittest.mock import patch

from stationctl.models.package import PackageKind
from stationctl.operators import get_operators
from stationctl.operators.npm import NpmOperator
from stationctl.utils.shell import CommandResult


class TestNpmOperator:
    """Tests for NpmOperator class."""

    def test_commands(self) -> None:
        """Global installs and removals use -g."""
        operator = NpmOperator()
        with (
            patch("stationctl.operators.base.command_exists", return_value=True),
            patch("stationctl.operators.base.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)
            operator.install_package("@anthropic-ai/claude-code")
            operator.remove_package("eslint")

        calls = [c.args[0] for c in mock_run.call_args_list]
        assert calls == [
            ["npm", "install", "-g", "@anthropic-ai/claude-code"],
            ["npm", "uninstall", "-g", "eslint"],
        ]

    def test_failure_uses_stdout_without_stderr(self) -> None:
        """Error text falls back to stdout."""
        operator = NpmOperator()
        with (
            patch("stationctl.operators.base.command_exists", return_value=True),
            patch("stationctl.operators.base.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(stdout="ERR 404", stderr="", returncode=1)
            result = operator.install_package("nope")

        assert result.error == "ERR 404"


class TestGetOperators:
    """Tests for get_operators function."""

    def test_one_operator_per_kind(self) -> None:
        """Every package kind has an operator."""
        operators = get_operators(dry_run=True)
        assert set(operators) == set(PackageKind)
        assert all(op.dry_run for op in operators.values())
        assert operators[PackageKind.NPM].kind == PackageKind.NPM
