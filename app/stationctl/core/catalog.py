"""Built-in package catalog.

The catalog is the static reference list of known packages (grouped into
categories) and the presets built from them. It is loaded from TOML data
bundled with the package and never changes at runtime. Consumers receive a
Catalog instance explicitly, which lets tests inject a synthetic one.
"""

import logging
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from stationctl.models.catalog import CatalogPackage, Category, Preset

logger = logging.getLogger(__name__)

_BUNDLED_CATALOG = "catalog.toml"


class CatalogError(Exception):
    """Raised when the catalog cannot be loaded or is inconsistent."""


class _CatalogData(BaseModel):
    """On-disk layout of the catalog file."""

    model_config = ConfigDict(extra="forbid")

    preset_order: list[str] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    presets: dict[str, Preset] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_preset_order(self) -> "_CatalogData":
        """Every preset must be ordered exactly once."""
        if sorted(self.preset_order) != sorted(self.presets):
            msg = (
                f"preset_order {self.preset_order} does not match "
                f"declared presets {sorted(self.presets)}"
            )
            raise ValueError(msg)
        return self


class Catalog:
    """Immutable view over categories and presets.

    Lookups are by exact package name. When a name appears in more than one
    category, the first occurrence decides its kind.

    Args:
        categories: Package categories in display order.
        presets: Presets keyed by identifier (e.g., "minimal").
        preset_order: Preset identifiers from smallest to largest.
    """

    def __init__(
        self,
        categories: list[Category] | tuple[Category, ...],
        presets: dict[str, Preset],
        preset_order: list[str] | tuple[str, ...] | None = None,
    ) -> None:
        self._categories = tuple(categories)
        self._presets = dict(presets)
        self._preset_order = tuple(preset_order) if preset_order is not None else tuple(presets)

        self._packages: dict[str, CatalogPackage] = {}
        for category in self._categories:
            for pkg in category.packages:
                self._packages.setdefault(pkg.name, pkg)

    @property
    def categories(self) -> tuple[Category, ...]:
        """Categories in display order."""
        return self._categories

    def lookup_category(self, name: str) -> bool:
        """Check whether a package is known to the catalog.

        Args:
            name: Package name.

        Returns:
            True if any category lists the package.
        """
        return name in self._packages

    def is_cask(self, name: str) -> bool:
        """Check whether a known package is a GUI cask."""
        pkg = self._packages.get(name)
        return pkg is not None and pkg.cask

    def is_npm(self, name: str) -> bool:
        """Check whether a known package is a global npm package."""
        pkg = self._packages.get(name)
        return pkg is not None and pkg.npm

    @staticmethod
    def is_tap(name: str) -> bool:
        """Check whether a name refers to a formula from a tap.

        Tap formulae are written ``owner/repo/formula``.
        """
        return name.count("/") == 2

    def all_package_names(self) -> list[str]:
        """All package names in category order, without duplicates."""
        return list(self._packages)

    def get_preset(self, name: str) -> Preset | None:
        """Get a preset by identifier.

        Args:
            name: Preset identifier (e.g., "developer").

        Returns:
            The preset, or None if no such preset exists.
        """
        return self._presets.get(name)

    def preset_names(self) -> list[str]:
        """Preset identifiers from smallest to largest."""
        return list(self._preset_order)

    def packages_for_preset(self, name: str) -> set[str]:
        """All package names selected by a preset.

        Args:
            name: Preset identifier.

        Returns:
            Set of package names, empty for an unknown preset.
        """
        preset = self._presets.get(name)
        if preset is None:
            return set()
        return set(preset.packages())


def _read_catalog_data(path: Path | None) -> dict[str, Any]:
    """Read raw catalog TOML from a file or the bundled resource.

    Raises:
        CatalogError: If the data cannot be read or parsed.
    """
    try:
        if path is None:
            resource = resources.files("stationctl.data").joinpath(_BUNDLED_CATALOG)
            with resource.open("rb") as f:
                return tomllib.load(f)
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise CatalogError(f"Invalid catalog TOML: {e}") from e
    except OSError as e:
        raise CatalogError(f"Failed to read catalog: {e}") from e


def load_catalog(path: Path | None = None) -> Catalog:
    """Load and validate a catalog.

    Args:
        path: Catalog TOML file. If None, uses the bundled catalog.

    Returns:
        Validated Catalog.

    Raises:
        CatalogError: If the catalog is missing, malformed, or references
            packages in a preset that no category lists.
    """
    raw = _read_catalog_data(path)

    try:
        data = _CatalogData.model_validate(raw)
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog content: {e}") from e

    catalog = Catalog(data.categories, data.presets, data.preset_order)

    for preset_id in catalog.preset_names():
        unknown = sorted(
            name for name in catalog.packages_for_preset(preset_id)
            if not catalog.lookup_category(name)
        )
        if unknown:
            msg = f"Preset '{preset_id}' references unknown packages: {', '.join(unknown)}"
            raise CatalogError(msg)

    logger.debug(
        "Loaded catalog: %d packages, presets %s",
        len(catalog.all_package_names()),
        catalog.preset_names(),
    )
    return catalog


# Module-level cached catalog instance
_cached_catalog: Catalog | None = None


def get_catalog() -> Catalog:
    """Get the bundled catalog, loading and caching it on first use.

    Returns:
        Cached Catalog instance.

    Raises:
        CatalogError: If the bundled catalog cannot be loaded.
    """
    global _cached_catalog
    if _cached_catalog is None:
        _cached_catalog = load_catalog()
    return _cached_catalog
