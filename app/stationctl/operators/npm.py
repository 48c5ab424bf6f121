"""npm operator implementation.

Installs and removes global npm packages.
"""

from stationctl.models.package import PackageKind
from stationctl.operators.base import Operator


class NpmOperator(Operator):
    """Operator for global npm packages."""

    _TIMEOUT: float = 300.0

    @property
    def kind(self) -> PackageKind:
        """Return NPM as the package kind."""
        return PackageKind.NPM

    @property
    def executable(self) -> str:
        """Return npm as the driven tool."""
        return "npm"

    def _install_args(self, name: str) -> list[str]:
        return ["npm", "install", "-g", name]

    def _remove_args(self, name: str) -> list[str]:
        return ["npm", "uninstall", "-g", name]
