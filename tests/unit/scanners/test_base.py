"""Unit tests for the Scanner base class."""

from collections.abc import Iterator

import pytest
from stationctl.models.package import PackageKind
from stationctl.scanners.base import Scanner


class ConcreteScanner(Scanner):
    """Minimal scanner for testing the base class."""

    def __init__(self, available: bool, names: list[str]) -> None:
        self._available = available
        self._names = names

    @property
    def kind(self) -> PackageKind:
        return PackageKind.FORMULA

    def scan(self) -> Iterator[str]:
        yield from self._names

    def is_available(self) -> bool:
        return self._available


class TestScanner:
    """Tests for Scanner."""

    def test_cannot_instantiate_abstract(self) -> None:
        """Scanner itself is abstract."""
        with pytest.raises(TypeError):
            Scanner()  # type: ignore[abstract]

    def test_names_when_available(self) -> None:
        """names() collects scan() output."""
        assert ConcreteScanner(True, ["a", "b"]).names() == ["a", "b"]

    def test_names_when_unavailable(self) -> None:
        """names() is empty when the tool is missing."""
        assert ConcreteScanner(False, ["a"]).names() == []
