"""Abstract base class for package operators.

This module defines the Operator interface that all package management
operators must implement.
"""

import logging
import subprocess
from abc import ABC, abstractmethod

from stationctl.models.action import Action, ActionResult, ActionType
from stationctl.models.package import PackageKind
from stationctl.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


class Operator(ABC):
    """Abstract base class for all package operators.

    Operators execute install and remove actions for one package kind,
    one package per command, so a failure affects only that package.

    Attributes:
        dry_run: If True, only log actions without executing them.

    Example:
        >>> operator = CaskOperator(dry_run=True)
        >>> if operator.is_available():
        ...     result = operator.remove_package("slack")
        ...     print(f"{result.action.package}: {result.success}")
    """

    # Installs can download large archives
    _TIMEOUT: float = 600.0

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the operator.

        Args:
            dry_run: If True, only log actions without executing them.
        """
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._dry_run

    @property
    @abstractmethod
    def kind(self) -> PackageKind:
        """Return the package kind this operator handles."""

    @property
    @abstractmethod
    def executable(self) -> str:
        """Return the command-line tool this operator drives."""

    @abstractmethod
    def _install_args(self, name: str) -> list[str]:
        """Command that installs one package."""

    @abstractmethod
    def _remove_args(self, name: str) -> list[str]:
        """Command that removes one package."""

    def is_available(self) -> bool:
        """Check if the underlying tool is available.

        Returns:
            True if the tool is on PATH, False otherwise.
        """
        return command_exists(self.executable)

    def install_package(self, name: str) -> ActionResult:
        """Install a single package.

        Args:
            name: Package name.

        Returns:
            ActionResult describing the outcome.
        """
        return self._run(ActionType.INSTALL, name, self._install_args(name))

    def remove_package(self, name: str) -> ActionResult:
        """Remove a single package.

        Args:
            name: Package name.

        Returns:
            ActionResult describing the outcome.
        """
        return self._run(ActionType.REMOVE, name, self._remove_args(name))

    def _run(self, action_type: ActionType, name: str, args: list[str]) -> ActionResult:
        """Run one package command and wrap its outcome.

        Missing tools, timeouts and non-zero exits all become failed
        results so callers can continue with the next package.
        """
        action = Action(action_type=action_type, package=name, kind=self.kind)

        if self.dry_run:
            logger.info("[dry-run] %s", " ".join(args))
            return ActionResult(action=action, success=True, message="Dry-run: not executed")

        if not self.is_available():
            return ActionResult(
                action=action,
                success=False,
                error=f"{self.executable} is not available on this system",
            )

        logger.info("Executing: %s", " ".join(args))
        try:
            result = run_command(args, timeout=self._TIMEOUT)
        except (OSError, subprocess.SubprocessError) as e:
            return ActionResult(action=action, success=False, error=str(e))

        if result.success:
            return ActionResult(action=action, success=True, message="Operation completed")

        error = result.error_output or f"{args[0]} exited with code {result.returncode}"
        logger.debug("%s failed for %s: %s", action_type.value, name, error)
        return ActionResult(action=action, success=False, error=error)
