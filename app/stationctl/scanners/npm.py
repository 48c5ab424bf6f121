"""npm global package scanner implementation.

Lists globally installed npm packages using ``npm list -g --parseable``.
"""

import logging
from collections.abc import Iterator

from stationctl.models.package import PackageKind
from stationctl.scanners.base import Scanner
from stationctl.utils.shell import command_exists, parse_lines, run_command

logger = logging.getLogger(__name__)

# Bundled with node itself, never user-installed
_IGNORED_PACKAGES = frozenset({"npm", "corepack"})


def parse_npm_parseable(output: str) -> list[str]:
    """Extract package names from ``npm list -g --depth=0 --parseable`` output.

    The first line is the global prefix directory and every following line
    is a package directory. Scoped packages keep their ``@scope/`` prefix.

    Args:
        output: Raw command output.

    Returns:
        Package names in output order, without npm and corepack.
    """
    lines = parse_lines(output)
    packages: list[str] = []

    for line in lines[1:]:
        parts = line.split("/")
        name = parts[-1]
        if len(parts) >= 2 and parts[-2].startswith("@"):
            name = f"{parts[-2]}/{parts[-1]}"
        if name and name not in _IGNORED_PACKAGES:
            packages.append(name)

    return packages


class NpmScanner(Scanner):
    """Scanner for global npm packages."""

    _NPM_TIMEOUT: float = 60.0

    @property
    def kind(self) -> PackageKind:
        """Return NPM as the package kind."""
        return PackageKind.NPM

    def is_available(self) -> bool:
        """Check if npm is available."""
        return command_exists("npm")

    def scan(self) -> Iterator[str]:
        """Scan global npm packages.

        npm exits non-zero when the global tree has problems (e.g., peer
        dependency warnings) but still prints the listing, so any output is
        parsed regardless of the exit code.

        Yields:
            Package names.

        Raises:
            RuntimeError: If npm is not available or produced no output.
        """
        if not self.is_available():
            msg = "npm is not available on this system"
            raise RuntimeError(msg)

        result = run_command(
            ["npm", "list", "-g", "--depth=0", "--parseable"],
            timeout=self._NPM_TIMEOUT,
        )

        if not result.success:
            if not result.stdout.strip():
                msg = f"npm list -g failed: {result.error_output or 'unknown error'}"
                raise RuntimeError(msg)
            logger.debug("npm list -g exited with %d, parsing output anyway", result.returncode)

        yield from parse_npm_parseable(result.stdout)
