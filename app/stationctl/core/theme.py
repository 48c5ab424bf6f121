"""Console color theme.

Colors come from the bundled ``data/theme.toml``; any subset can be
overridden in ``~/.config/stationctl/theme.toml``. Every package kind gets
a style named after its value so tables can write ``[cask]...[/cask]``.
"""

import functools
import logging
import re
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from stationctl.core.paths import get_theme_path
from stationctl.models.package import PackageKind

logger = logging.getLogger(__name__)

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) for every console style."""

    model_config = ConfigDict(extra="forbid")

    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Planned actions
    added: str = "#c1ff62"
    removed: str = "#f53263"

    formula: str = "#69B9A1"
    cask: str = "#0e8ac8"
    npm: str = "#d44ebc"
    tap: str = "#faf870"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        if not isinstance(v, str) or not _HEX_COLOR_RE.match(v.strip()):
            msg = f"{info.field_name}: expected #RGB or #RRGGBB, got {v!r}"
            raise ValueError(msg)
        return v.strip()


def _read_colors(path: Path) -> dict[str, str]:
    """Read the [colors] table of a theme file, empty if unreadable."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return {}
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge the user's overrides onto the bundled colors.

    Invalid colors in the merged result fall back to the built-in defaults.
    """
    bundled = resources.files("stationctl.data").joinpath("theme.toml")
    colors = _read_colors(Path(str(bundled)))
    overrides = _read_colors(get_theme_path())
    if overrides:
        logger.debug("Theme overrides: %s", ", ".join(sorted(overrides)))
    colors.update(overrides)

    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the rich Theme used by the shared consoles."""
    if colors is None:
        colors = load_theme()

    styles = {
        "muted": colors.muted,
        "bold_header": f"bold {colors.header}",
        "border": colors.border,
        "success": colors.success,
        "warning": colors.warning,
        "error": f"bold {colors.error}",
        "info": colors.info,
        "added": colors.added,
        "removed": colors.removed,
    }
    for kind in PackageKind:
        styles[kind.value] = getattr(colors, kind.value)
    return Theme(styles)


@functools.cache
def get_theme() -> Theme:
    """Rich theme for the process, loaded once."""
    return get_rich_theme()
