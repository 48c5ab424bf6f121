"""User settings.

Settings are stored in ~/.config/stationctl/config.toml. Every field has
a default, so a missing file simply means default settings.
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from stationctl.core.matcher import PRESET_MATCH_THRESHOLD
from stationctl.core.paths import get_settings_path
from stationctl.utils.files import atomic_write

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """User-tunable behavior.

    Attributes:
        preset_threshold: Minimum Jaccard similarity for a snapshot to be
            labelled with a preset.
        confirm_removals: Ask before clean removes packages (``--yes`` skips).
        skip_npm: Leave global npm packages out of clean and install.
    """

    model_config = ConfigDict(extra="forbid")

    preset_threshold: Annotated[
        float,
        Field(ge=0.0, le=1.0, description="Minimum similarity for preset detection (0-1)"),
    ] = PRESET_MATCH_THRESHOLD
    confirm_removals: Annotated[
        bool,
        Field(description="Ask before removing packages"),
    ] = True
    skip_npm: Annotated[
        bool,
        Field(description="Ignore global npm packages"),
    ] = False


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file is not valid TOML."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Settings file. If None, uses the default settings path.

    Returns:
        Validated Settings; defaults if the file doesn't exist.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the file cannot be read or has invalid values.
    """
    settings_path = path or get_settings_path()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        logger.debug("No settings at %s, using defaults", settings_path)
        return Settings()
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {settings_path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file atomically.

    Args:
        settings: Settings to save.
        path: Destination. If None, uses the default settings path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    try:
        with atomic_write(settings_path, mode=0o644) as f:
            tomli_w.dump(settings.model_dump(), f)
    except OSError as e:
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
