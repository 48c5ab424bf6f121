"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from stationctl.core.catalog import Catalog
from stationctl.models.catalog import CatalogPackage, Category, Preset


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and state directories into the test's tmp_path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    return tmp_path


@pytest.fixture
def mock_brew_leaves_output() -> str:
    """Sample brew leaves output for testing."""
    return """git
go
jq
node
ripgrep
"""


@pytest.fixture
def mock_brew_cask_output() -> str:
    """Sample brew list --cask -1 output for testing."""
    return """docker
google-chrome
rectangle
"""


@pytest.fixture
def mock_brew_tap_output() -> str:
    """Sample brew tap output for testing."""
    return """hashicorp/tap
homebrew/bundle
"""


@pytest.fixture
def mock_npm_parseable_output() -> str:
    """Sample npm list -g --depth=0 --parseable output for testing."""
    return """/opt/homebrew/lib
/opt/homebrew/lib/node_modules/@anthropic-ai/claude-code
/opt/homebrew/lib/node_modules/corepack
/opt/homebrew/lib/node_modules/npm
/opt/homebrew/lib/node_modules/typescript
"""


@pytest.fixture
def mock_empty_output() -> str:
    """Empty output for testing edge cases."""
    return ""


@pytest.fixture
def sample_catalog() -> Catalog:
    """Small synthetic catalog with three nested presets."""
    categories = [
        Category(
            name="CLI",
            packages=(
                CatalogPackage(name="git"),
                CatalogPackage(name="go"),
                CatalogPackage(name="node"),
                CatalogPackage(name="jq"),
                CatalogPackage(name="ripgrep"),
            ),
        ),
        Category(
            name="Apps",
            packages=(
                CatalogPackage(name="docker", cask=True),
                CatalogPackage(name="rectangle", cask=True),
            ),
        ),
        Category(
            name="Node Global",
            packages=(CatalogPackage(name="typescript", npm=True),),
        ),
    ]
    presets = {
        "minimal": Preset(name="Minimal", cli=("git", "jq"), cask=("rectangle",)),
        "developer": Preset(
            name="Developer",
            cli=("git", "go", "node", "jq"),
            cask=("docker", "rectangle"),
            npm=("typescript",),
        ),
        "full": Preset(
            name="Full",
            cli=("git", "go", "node", "jq", "ripgrep"),
            cask=("docker", "rectangle"),
            npm=("typescript",),
        ),
    }
    return Catalog(categories, presets, ["minimal", "developer", "full"])
