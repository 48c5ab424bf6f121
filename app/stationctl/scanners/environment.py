"""Environment introspection beyond package lists.

Reads macOS preferences, the shell setup, the global git identity and the
versions of common development tools. Absent tools and unset values are
normal and yield empty results; only unexpected failures (timeouts,
unreadable files) propagate to the caller.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from stationctl.models.snapshot import DevTool, GitIdentity, MacOSPref, ShellProfile
from stationctl.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

_TOOL_TIMEOUT: float = 10.0

_PLUGINS_RE = re.compile(r"plugins=\(([^)]*)\)")
_THEME_RE = re.compile(r'ZSH_THEME="([^"]*)"')


@dataclass(frozen=True, slots=True)
class KnownPreference:
    """A macOS default worth recording in a snapshot."""

    domain: str
    key: str
    desc: str


KNOWN_PREFERENCES: tuple[KnownPreference, ...] = (
    KnownPreference("NSGlobalDomain", "AppleShowAllExtensions", "Show all file extensions"),
    KnownPreference("NSGlobalDomain", "AppleShowScrollBars", "Always show scrollbars"),
    KnownPreference(
        "NSGlobalDomain", "NSAutomaticSpellingCorrectionEnabled", "Disable auto-correct"
    ),
    KnownPreference(
        "NSGlobalDomain", "NSAutomaticCapitalizationEnabled", "Disable auto-capitalization"
    ),
    KnownPreference("NSGlobalDomain", "KeyRepeat", "Fast key repeat rate"),
    KnownPreference("NSGlobalDomain", "InitialKeyRepeat", "Short delay until key repeat"),
    KnownPreference("com.apple.finder", "ShowPathbar", "Show path bar in Finder"),
    KnownPreference("com.apple.finder", "ShowStatusBar", "Show status bar in Finder"),
    KnownPreference("com.apple.finder", "FXPreferredViewStyle", "Use list view in Finder"),
    KnownPreference(
        "com.apple.finder", "FXEnableExtensionChangeWarning", "No extension change warning"
    ),
    KnownPreference("com.apple.finder", "AppleShowAllFiles", "Show hidden files in Finder"),
    KnownPreference("com.apple.dock", "autohide", "Keep Dock visible"),
    KnownPreference("com.apple.dock", "show-recents", "Don't show recent apps in Dock"),
    KnownPreference("com.apple.dock", "tilesize", "Set Dock icon size"),
    KnownPreference("com.apple.dock", "mineffect", "Minimize windows with scale effect"),
    KnownPreference("com.apple.screencapture", "location", "Screenshot location"),
    KnownPreference("com.apple.screencapture", "type", "Screenshot file format"),
    KnownPreference("com.apple.screencapture", "disable-shadow", "Disable screenshot shadows"),
    KnownPreference("com.apple.Safari", "IncludeDevelopMenu", "Enable Safari Developer menu"),
    KnownPreference("com.apple.TextEdit", "RichText", "Use plain text in TextEdit"),
)

# Tool name -> arguments that print its version
DEV_TOOL_COMMANDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("go", ("version",)),
    ("node", ("--version",)),
    ("python3", ("--version",)),
    ("rustc", ("--version",)),
    ("java", ("--version",)),
    ("ruby", ("--version",)),
    ("docker", ("--version",)),
)


def parse_version(tool: str, output: str) -> str:
    """Extract a bare version number from a tool's version output.

    Args:
        tool: Tool name as listed in DEV_TOOL_COMMANDS.
        output: Raw output of the version command.

    Returns:
        Version string (e.g., "1.22.0"), "" if it cannot be found, or the
        stripped output for tools without a known format.
    """
    output = output.strip()
    if not output:
        return ""

    fields = output.split()

    if tool == "go":
        # go version go1.22.0 darwin/arm64
        if output.startswith("go version go") and len(fields) >= 3:
            return fields[2].removeprefix("go")
        return ""
    if tool == "node":
        return output.removeprefix("v")
    if tool == "python3":
        return output.removeprefix("Python ")
    if tool == "java":
        # openjdk 21.0.1 2023-10-17 (plus more lines)
        first_line = output.splitlines()[0].split()
        return first_line[1] if len(first_line) >= 2 else ""
    if tool in ("rustc", "ruby"):
        return fields[1] if len(fields) >= 2 else ""
    if tool == "docker":
        # Docker version 24.0.7, build afdd53b
        return fields[2].removesuffix(",") if len(fields) >= 3 else ""
    return output


class EnvironmentScanner:
    """Reads non-package machine configuration.

    Args:
        home: Home directory to inspect. If None, uses the current user's.
        preferences: macOS defaults to read.
    """

    def __init__(
        self,
        home: Path | None = None,
        preferences: tuple[KnownPreference, ...] = KNOWN_PREFERENCES,
    ) -> None:
        self._home = home
        self._preferences = preferences

    @property
    def home(self) -> Path:
        """Home directory being inspected."""
        return self._home if self._home is not None else Path.home()

    def capture_macos_prefs(self) -> list[MacOSPref]:
        """Read each known preference with ``defaults read``.

        Preferences that are not set (non-zero exit) are skipped.

        Returns:
            The preferences that have a value.
        """
        if not command_exists("defaults"):
            logger.debug("defaults not found, skipping macOS preferences")
            return []

        prefs: list[MacOSPref] = []
        for pref in self._preferences:
            result = run_command(
                ["defaults", "read", pref.domain, pref.key],
                timeout=_TOOL_TIMEOUT,
            )
            if not result.success:
                continue
            prefs.append(
                MacOSPref(
                    domain=pref.domain,
                    key=pref.key,
                    value=result.stdout.strip(),
                    desc=pref.desc,
                )
            )
        return prefs

    def capture_shell(self) -> ShellProfile:
        """Read the login shell and Oh My Zsh configuration.

        Returns:
            ShellProfile; plugins and theme are empty without a ~/.zshrc.

        Raises:
            OSError: If ~/.zshrc exists but cannot be read.
        """
        home = self.home
        default = os.environ.get("SHELL", "")
        oh_my_zsh = (home / ".oh-my-zsh").exists()

        try:
            content = (home / ".zshrc").read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return ShellProfile(default=default, oh_my_zsh=oh_my_zsh)

        plugins: list[str] = []
        if match := _PLUGINS_RE.search(content):
            plugins = match.group(1).split()

        theme = ""
        if match := _THEME_RE.search(content):
            theme = match.group(1)

        return ShellProfile(default=default, oh_my_zsh=oh_my_zsh, plugins=plugins, theme=theme)

    def capture_git(self) -> GitIdentity:
        """Read the global git user name and email.

        Returns:
            GitIdentity with empty fields for unset values.
        """
        if not command_exists("git"):
            return GitIdentity()

        values: dict[str, str] = {}
        for field_name, key in (("user_name", "user.name"), ("user_email", "user.email")):
            result = run_command(["git", "config", "--global", key], timeout=_TOOL_TIMEOUT)
            values[field_name] = result.stdout.strip() if result.success else ""

        return GitIdentity(**values)

    def capture_dev_tools(self) -> list[DevTool]:
        """Detect installed development tools and their versions.

        Returns:
            One DevTool per tool found on PATH whose version command succeeds.
        """
        tools: list[DevTool] = []
        for name, args in DEV_TOOL_COMMANDS:
            if not command_exists(name):
                continue
            result = run_command([name, *args], timeout=_TOOL_TIMEOUT)
            if not result.success:
                logger.debug("%s version check failed: %s", name, result.error_output)
                continue
            tools.append(DevTool(name=name, version=parse_version(name, result.stdout)))
        return tools
