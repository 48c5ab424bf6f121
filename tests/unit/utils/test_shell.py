"""Unit tests for shell utilities.

Tests for run_command, command_exists and parse_lines.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from stationctl.utils.shell import CommandResult, command_exists, parse_lines, run_command


class TestCommandResult:
    """Tests for CommandResult dataclass."""

    def test_success(self) -> None:
        """Exit code 0 is success."""
        assert CommandResult(stdout="", stderr="", returncode=0).success is True
        assert CommandResult(stdout="", stderr="", returncode=2).success is False

    def test_error_output_prefers_stderr(self) -> None:
        """stderr is used when present, stdout otherwise."""
        assert CommandResult(stdout="out", stderr=" err\n", returncode=1).error_output == "err"
        assert CommandResult(stdout=" out ", stderr="", returncode=1).error_output == "out"


class TestRunCommand:
    """Tests for run_command function."""

    def test_passes_arguments(self) -> None:
        """Arguments are forwarded to subprocess.run."""
        completed = MagicMock(stdout="ok", stderr="", returncode=0)
        with patch("stationctl.utils.shell.subprocess.run", return_value=completed) as mock_run:
            result = run_command(["brew", "leaves"], timeout=5)

        assert result == CommandResult(stdout="ok", stderr="", returncode=0)
        mock_run.assert_called_once_with(
            ["brew", "leaves"],
            capture_output=True,
            text=True,
            check=False,
            timeout=5,
            cwd=None,
        )

    def test_timeout_propagates(self) -> None:
        """Timeouts are raised to the caller."""
        with (
            patch(
                "stationctl.utils.shell.subprocess.run",
                side_effect=subprocess.TimeoutExpired(cmd="brew", timeout=1),
            ),
            pytest.raises(subprocess.TimeoutExpired),
        ):
            run_command(["brew"], timeout=1)


class TestCommandExists:
    """Tests for command_exists function."""

    def test_uses_which(self) -> None:
        """command_exists checks PATH with shutil.which."""
        with patch("stationctl.utils.shell.shutil.which", return_value="/opt/homebrew/bin/brew"):
            assert command_exists("brew") is True
        with patch("stationctl.utils.shell.shutil.which", return_value=None):
            assert command_exists("brew") is False


class TestParseLines:
    """Tests for parse_lines function."""

    def test_strips_and_drops_blank_lines(self) -> None:
        """Whitespace and blank lines are removed."""
        assert parse_lines("  git \n\n go\n\t\n") == ["git", "go"]

    def test_empty(self) -> None:
        """Empty output gives no lines."""
        assert parse_lines("") == []
