"""Snapshot models for captured or desired workstation state.

A Snapshot is the canonical record of a machine's software setup,
regardless of whether it was captured live, read from a file, or decoded
from a remote config payload. Field names are stable because snapshots
are exchanged as JSON files.
"""

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stationctl.models.package import PackageSet

SNAPSHOT_VERSION = 1


class MacOSPref(BaseModel):
    """A single macOS ``defaults`` value.

    Attributes:
        domain: Defaults domain (e.g., "com.apple.dock").
        key: Preference key within the domain.
        value: Current value as printed by ``defaults read``.
        desc: Human-readable description.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    domain: str
    key: str
    value: str = ""
    desc: str = ""


class ShellProfile(BaseModel):
    """Shell environment configuration.

    Attributes:
        default: Path of the login shell (e.g., "/bin/zsh").
        oh_my_zsh: Whether Oh My Zsh is installed.
        plugins: Enabled Oh My Zsh plugins.
        theme: Active ZSH theme.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    default: str = ""
    oh_my_zsh: bool = False
    plugins: Annotated[list[str], Field(default_factory=list)]
    theme: str = ""

    @field_validator("plugins", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Treat a JSON null list as empty."""
        return [] if v is None else v


class GitIdentity(BaseModel):
    """Global git user configuration."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    user_name: str = ""
    user_email: str = ""


class DevTool(BaseModel):
    """A detected development tool and its version."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    version: str = ""


class CatalogMatch(BaseModel):
    """How much of a snapshot's tooling is known to the catalog.

    Computed by the matcher; never edited by hand.

    Attributes:
        matched: Package names found in the catalog.
        unmatched: Package names not in the catalog.
        match_rate: len(matched) / (len(matched) + len(unmatched)), 0 when empty.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    matched: Annotated[list[str], Field(default_factory=list)]
    unmatched: Annotated[list[str], Field(default_factory=list)]
    match_rate: Annotated[float, Field(ge=0.0, le=1.0)] = 0.0

    @field_validator("matched", "unmatched", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Treat a JSON null list as empty."""
        return [] if v is None else v


class CaptureHealth(BaseModel):
    """Which capture phases degraded to an empty result.

    Attributes:
        failed_steps: Names of the capture phases that failed.
        partial: True if any phase failed.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    failed_steps: Annotated[list[str], Field(default_factory=list)]
    partial: bool = False

    @field_validator("failed_steps", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Treat a JSON null list as empty."""
        return [] if v is None else v


class Snapshot(BaseModel):
    """Point-in-time record of a workstation's installed software.

    Attributes:
        version: Snapshot schema version.
        captured_at: When the snapshot was taken.
        hostname: Machine the snapshot was taken on.
        packages: Installed packages grouped by kind.
        macos_prefs: Captured macOS preference values.
        shell: Shell environment configuration.
        git: Global git identity.
        dev_tools: Detected development tools.
        matched_preset: Closest preset name, empty if none.
        catalog_match: Catalog coverage of the installed packages.
        health: Capture phases that degraded.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    version: int = SNAPSHOT_VERSION
    captured_at: Annotated[datetime, Field(default_factory=lambda: datetime.now(UTC))]
    hostname: str = ""
    packages: Annotated[PackageSet, Field(default_factory=PackageSet)]
    macos_prefs: Annotated[list[MacOSPref], Field(default_factory=list)]
    shell: Annotated[ShellProfile, Field(default_factory=ShellProfile)]
    git: Annotated[GitIdentity, Field(default_factory=GitIdentity)]
    dev_tools: Annotated[list[DevTool], Field(default_factory=list)]
    matched_preset: str = ""
    catalog_match: Annotated[CatalogMatch, Field(default_factory=CatalogMatch)]
    health: Annotated[CaptureHealth, Field(default_factory=CaptureHealth)]

    @field_validator("macos_prefs", "dev_tools", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Treat a JSON null list as empty."""
        return [] if v is None else v
