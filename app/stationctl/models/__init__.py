"""Data models for stationctl.

This module exports the core data structures used throughout the application.
"""

from stationctl.models.action import (
    Action,
    ActionResult,
    ActionType,
    create_install_action,
    create_remove_action,
)
from stationctl.models.catalog import CUSTOM_PRESET, CatalogPackage, Category, Preset
from stationctl.models.clean_result import CleanResult
from stationctl.models.install_state import InstallState
from stationctl.models.package import PackageKind, PackageSet
from stationctl.models.remote_config import RemoteConfig
from stationctl.models.snapshot import (
    CaptureHealth,
    CatalogMatch,
    DevTool,
    GitIdentity,
    MacOSPref,
    ShellProfile,
    Snapshot,
)

__all__ = [
    "CUSTOM_PRESET",
    "Action",
    "ActionResult",
    "ActionType",
    "CaptureHealth",
    "CatalogMatch",
    "CatalogPackage",
    "Category",
    "CleanResult",
    "DevTool",
    "GitIdentity",
    "InstallState",
    "MacOSPref",
    "PackageKind",
    "PackageSet",
    "Preset",
    "RemoteConfig",
    "ShellProfile",
    "Snapshot",
    "create_install_action",
    "create_remove_action",
]
