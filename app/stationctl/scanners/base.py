"""Abstract base class for package scanners.

This module defines the Scanner interface that all package listing
scanners must implement.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from stationctl.models.package import PackageKind


class Scanner(ABC):
    """Abstract base class for all package scanners.

    Scanners are responsible for querying a package manager and yielding
    the names of installed packages of one kind.

    Example:
        >>> scanner = CaskScanner()
        >>> if scanner.is_available():
        ...     for name in scanner.scan():
        ...         print(name)
    """

    @property
    @abstractmethod
    def kind(self) -> PackageKind:
        """Return the package kind this scanner lists.

        Returns:
            PackageKind enum value.
        """

    @abstractmethod
    def scan(self) -> Iterator[str]:
        """Scan and yield the names of all installed packages of this kind.

        Yields:
            Package names in the order the package manager reports them.

        Raises:
            RuntimeError: If the package manager is unavailable or fails.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this package manager is available on the system.

        Returns:
            True if the package manager can be used, False otherwise.
        """

    def names(self) -> list[str]:
        """List installed package names, empty if the tool is missing.

        A missing package manager is a valid machine state and yields no
        names; a failing one raises.

        Returns:
            List of package names.

        Raises:
            RuntimeError: If the package manager is present but fails.
        """
        if not self.is_available():
            return []
        return list(self.scan())
