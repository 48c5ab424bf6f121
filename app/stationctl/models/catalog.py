"""Catalog models for the built-in package reference data.

The catalog groups known packages into categories and defines presets,
named bundles of packages representing common setup profiles.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

from stationctl.models.package import PackageSet

# Pseudo-preset meaning "no preset, free selection"
CUSTOM_PRESET = "custom"


class CatalogPackage(BaseModel):
    """A package known to the catalog.

    Attributes:
        name: Package identifier as used by its package manager.
        desc: Short description.
        cask: True for GUI applications installed as casks.
        npm: True for global npm packages.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Annotated[str, Field(min_length=1)]
    desc: str = ""
    cask: bool = False
    npm: bool = False

    @model_validator(mode="after")
    def validate_single_kind(self) -> CatalogPackage:
        """Validate that a package is not both a cask and an npm package."""
        if self.cask and self.npm:
            msg = f"Package '{self.name}' cannot be both a cask and an npm package"
            raise ValueError(msg)
        return self


class Category(BaseModel):
    """A named group of catalog packages."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    icon: str = ""
    packages: Annotated[tuple[CatalogPackage, ...], Field(default_factory=tuple)]


class Preset(BaseModel):
    """A fixed bundle of packages.

    Attributes:
        name: Display name.
        description: What the preset is for.
        cli: Formulae in the preset.
        cask: Casks in the preset.
        npm: Global npm packages in the preset.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    description: str = ""
    cli: Annotated[tuple[str, ...], Field(default_factory=tuple)]
    cask: Annotated[tuple[str, ...], Field(default_factory=tuple)]
    npm: Annotated[tuple[str, ...], Field(default_factory=tuple)]

    def packages(self) -> frozenset[str]:
        """All package names in the preset (cli, cask and npm)."""
        return frozenset((*self.cli, *self.cask, *self.npm))

    @property
    def package_count(self) -> int:
        """Number of distinct packages in the preset."""
        return len(self.packages())

    def to_package_set(self) -> PackageSet:
        """Split the preset into formulae, casks and npm packages."""
        return PackageSet(formulae=list(self.cli), casks=list(self.cask), npm=list(self.npm))
