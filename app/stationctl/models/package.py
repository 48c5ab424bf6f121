"""Package models shared by capture, matching and reconciliation.

This module defines the kinds of packages stationctl manages and the
PackageSet container that groups package names by kind.
"""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PackageKind(str, Enum):
    """Kind of package, which determines the tool that manages it.

    Attributes:
        FORMULA: CLI tool managed by Homebrew.
        CASK: GUI application managed by Homebrew.
        NPM: Global npm package.
        TAP: Third-party Homebrew repository.
    """

    FORMULA = "formula"
    CASK = "cask"
    NPM = "npm"
    TAP = "tap"

    @property
    def plural(self) -> str:
        """Human-readable plural label (e.g., 'formulae')."""
        return _PLURALS[self]


_PLURALS: dict[PackageKind, str] = {
    PackageKind.FORMULA: "formulae",
    PackageKind.CASK: "casks",
    PackageKind.NPM: "npm packages",
    PackageKind.TAP: "taps",
}


class PackageSet(BaseModel):
    """Package names grouped by kind.

    Names are plain strings compared by exact equality. Lists may contain
    duplicates; consumers treat them as sets.

    Attributes:
        formulae: Homebrew formulae (CLI tools).
        casks: Homebrew casks (GUI apps).
        taps: Homebrew taps (third-party repositories).
        npm: Global npm packages.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    formulae: Annotated[list[str], Field(default_factory=list, description="CLI formulae")]
    casks: Annotated[list[str], Field(default_factory=list, description="GUI casks")]
    taps: Annotated[list[str], Field(default_factory=list, description="Homebrew taps")]
    npm: Annotated[list[str], Field(default_factory=list, description="Global npm packages")]

    @field_validator("formulae", "casks", "taps", "npm", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Treat a JSON null list as empty."""
        return [] if v is None else v

    def names(self, kind: PackageKind) -> list[str]:
        """Get the package names for one kind.

        Args:
            kind: Package kind to look up.

        Returns:
            List of names of that kind, in stored order.
        """
        if kind == PackageKind.FORMULA:
            return self.formulae
        if kind == PackageKind.CASK:
            return self.casks
        if kind == PackageKind.NPM:
            return self.npm
        return self.taps

    def all_packages(self) -> list[str]:
        """Deduplicated formulae, casks and npm packages (taps excluded).

        Returns:
            Names in first-occurrence order.
        """
        return list(dict.fromkeys([*self.formulae, *self.casks, *self.npm]))

    @property
    def total(self) -> int:
        """Number of formulae, casks and npm packages (with duplicates)."""
        return len(self.formulae) + len(self.casks) + len(self.npm)
