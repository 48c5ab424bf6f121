"""Clean result model for reconciliation runs.

A CleanResult is built fresh for every reconciliation. The diff fills the
``extra_*`` lists; execution appends each processed name to either the
matching ``removed_*`` or ``failed_*`` list. Totals are always derived.
"""

from dataclasses import dataclass, field

from stationctl.models.package import PackageKind


@dataclass(slots=True)
class CleanResult:
    """Packages installed now but absent from the desired state.

    Attributes:
        extra_formulae: Formulae installed but not desired.
        extra_casks: Casks installed but not desired.
        extra_npm: npm packages installed but not desired.
        extra_taps: Taps present but not desired (only when taps are declared).
        removed_formulae: Formulae removed in this run.
        removed_casks: Casks removed in this run.
        removed_npm: npm packages removed in this run.
        removed_taps: Taps removed in this run.
        failed_formulae: Formulae whose removal failed.
        failed_casks: Casks whose removal failed.
        failed_npm: npm packages whose removal failed.
        failed_taps: Taps whose removal failed.
    """

    extra_formulae: list[str] = field(default_factory=list)
    extra_casks: list[str] = field(default_factory=list)
    extra_npm: list[str] = field(default_factory=list)
    extra_taps: list[str] = field(default_factory=list)

    removed_formulae: list[str] = field(default_factory=list)
    removed_casks: list[str] = field(default_factory=list)
    removed_npm: list[str] = field(default_factory=list)
    removed_taps: list[str] = field(default_factory=list)

    failed_formulae: list[str] = field(default_factory=list)
    failed_casks: list[str] = field(default_factory=list)
    failed_npm: list[str] = field(default_factory=list)
    failed_taps: list[str] = field(default_factory=list)

    def extra(self, kind: PackageKind) -> list[str]:
        """Extra packages of one kind."""
        return getattr(self, f"extra_{_SUFFIX[kind]}")

    def removed(self, kind: PackageKind) -> list[str]:
        """Removed packages of one kind."""
        return getattr(self, f"removed_{_SUFFIX[kind]}")

    def failed(self, kind: PackageKind) -> list[str]:
        """Failed removals of one kind."""
        return getattr(self, f"failed_{_SUFFIX[kind]}")

    @property
    def total_extra(self) -> int:
        """Number of extra packages across all kinds."""
        return sum(len(self.extra(kind)) for kind in PackageKind)

    @property
    def total_removed(self) -> int:
        """Number of packages removed across all kinds."""
        return sum(len(self.removed(kind)) for kind in PackageKind)

    @property
    def total_failed(self) -> int:
        """Number of failed removals across all kinds."""
        return sum(len(self.failed(kind)) for kind in PackageKind)

    @property
    def is_clean(self) -> bool:
        """True when nothing is installed beyond the desired state."""
        return self.total_extra == 0

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the clean result.
        """
        return {
            "clean": self.is_clean,
            "summary": {
                "extra": self.total_extra,
                "removed": self.total_removed,
                "failed": self.total_failed,
            },
            "extra": {_SUFFIX[kind]: list(self.extra(kind)) for kind in PackageKind},
            "removed": {_SUFFIX[kind]: list(self.removed(kind)) for kind in PackageKind},
            "failed": {_SUFFIX[kind]: list(self.failed(kind)) for kind in PackageKind},
        }


# Attribute suffix per kind, in execution order
_SUFFIX: dict[PackageKind, str] = {
    PackageKind.FORMULA: "formulae",
    PackageKind.CASK: "casks",
    PackageKind.NPM: "npm",
    PackageKind.TAP: "taps",
}
