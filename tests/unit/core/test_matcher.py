"""Unit tests for catalog matching and preset detection.

Tests for match_packages, jaccard_similarity, detect_best_preset and
apply_match.
"""

import pytest
from stationctl.core.catalog import Catalog
from stationctl.core.matcher import (
    PRESET_MATCH_THRESHOLD,
    apply_match,
    detect_best_preset,
    jaccard_similarity,
    match_packages,
)
from stationctl.models.catalog import CatalogPackage, Category, Preset
from stationctl.models.package import PackageSet
from stationctl.models.snapshot import Snapshot


def _snapshot(
    formulae: list[str] | None = None,
    casks: list[str] | None = None,
    npm: list[str] | None = None,
    taps: list[str] | None = None,
) -> Snapshot:
    return Snapshot(
        packages=PackageSet(
            formulae=formulae or [],
            casks=casks or [],
            npm=npm or [],
            taps=taps or [],
        )
    )


class TestMatchPackages:
    """Tests for match_packages function."""

    def test_empty_snapshot(self, sample_catalog: Catalog) -> None:
        """No packages gives an empty match with rate 0."""
        match = match_packages(_snapshot(), sample_catalog)
        assert match.matched == []
        assert match.unmatched == []
        assert match.match_rate == 0.0

    def test_mixed_known_and_unknown(self, sample_catalog: Catalog) -> None:
        """Four known and one unknown package give a rate of 0.8."""
        snapshot = _snapshot(formulae=["git", "go", "node", "unknown-pkg"], casks=["docker"])
        match = match_packages(snapshot, sample_catalog)

        assert match.matched == ["git", "go", "node", "docker"]
        assert match.unmatched == ["unknown-pkg"]
        assert match.match_rate == pytest.approx(0.8)

    def test_duplicates_counted_once(self, sample_catalog: Catalog) -> None:
        """A name listed under two kinds is classified once."""
        snapshot = _snapshot(formulae=["git"], casks=["git"], npm=["mystery"])
        match = match_packages(snapshot, sample_catalog)

        assert match.matched == ["git"]
        assert match.unmatched == ["mystery"]
        assert match.match_rate == pytest.approx(0.5)

    def test_taps_ignored(self, sample_catalog: Catalog) -> None:
        """Taps are not classified."""
        match = match_packages(_snapshot(taps=["hashicorp/tap"]), sample_catalog)
        assert match.matched == []
        assert match.unmatched == []

    def test_partition_is_complete(self, sample_catalog: Catalog) -> None:
        """matched and unmatched partition the deduplicated package list."""
        snapshot = _snapshot(formulae=["jq", "x", "jq"], casks=["rectangle", "y"])
        match = match_packages(snapshot, sample_catalog)

        assert set(match.matched) | set(match.unmatched) == {"jq", "x", "rectangle", "y"}
        assert not set(match.matched) & set(match.unmatched)


class TestJaccardSimilarity:
    """Tests for jaccard_similarity function."""

    def test_both_empty(self) -> None:
        """Two empty sets have similarity 0."""
        assert jaccard_similarity([], []) == 0.0

    def test_identical(self) -> None:
        """Identical sets have similarity 1."""
        assert jaccard_similarity(["a", "b"], ["b", "a"]) == 1.0

    def test_disjoint(self) -> None:
        """Disjoint sets have similarity 0."""
        assert jaccard_similarity(["a"], ["b"]) == 0.0

    def test_partial_overlap(self) -> None:
        """Similarity is intersection over union."""
        assert jaccard_similarity(["a", "b", "c"], ["b", "c", "d"]) == pytest.approx(0.5)

    def test_duplicates_ignored(self) -> None:
        """Repeated names do not change the result."""
        assert jaccard_similarity(["a", "a"], ["a"]) == 1.0

    def test_symmetric(self) -> None:
        """Order of arguments does not matter."""
        a, b = ["a", "b"], ["b", "c", "d"]
        assert jaccard_similarity(a, b) == jaccard_similarity(b, a)


class TestDetectBestPreset:
    """Tests for detect_best_preset function."""

    def test_exact_match(self, sample_catalog: Catalog) -> None:
        """A snapshot equal to a preset detects that preset."""
        snapshot = _snapshot(
            formulae=["git", "go", "node", "jq"],
            casks=["docker", "rectangle"],
            npm=["typescript"],
        )
        assert detect_best_preset(snapshot, sample_catalog) == "developer"

    def test_disjoint_returns_empty(self, sample_catalog: Catalog) -> None:
        """Packages unrelated to every preset detect nothing."""
        snapshot = _snapshot(formulae=["cowsay", "figlet"])
        assert detect_best_preset(snapshot, sample_catalog) == ""

    def test_empty_snapshot(self, sample_catalog: Catalog) -> None:
        """An empty snapshot detects nothing."""
        assert detect_best_preset(_snapshot(), sample_catalog) == ""

    def test_below_threshold(self, sample_catalog: Catalog) -> None:
        """The best preset is dropped when below the threshold."""
        # git vs minimal {git, jq, rectangle}: 1/3 ~ 0.33
        snapshot = _snapshot(formulae=["git"])
        assert detect_best_preset(snapshot, sample_catalog, threshold=0.34) == ""
        assert detect_best_preset(snapshot, sample_catalog, threshold=0.33) == "minimal"

    def test_default_threshold(self) -> None:
        """The default threshold is 0.3."""
        assert PRESET_MATCH_THRESHOLD == 0.3

    def test_tie_goes_to_earlier_preset(self) -> None:
        """Equal scores keep the preset declared first."""
        catalog = Catalog(
            [Category(name="CLI", packages=(CatalogPackage(name="x"), CatalogPackage(name="y")))],
            {
                "first": Preset(name="First", cli=("x",)),
                "second": Preset(name="Second", cli=("y",)),
            },
            ["first", "second"],
        )
        snapshot = _snapshot(formulae=["x", "y"])
        assert detect_best_preset(snapshot, catalog, threshold=0.5) == "first"

    def test_deterministic(self, sample_catalog: Catalog) -> None:
        """Repeated calls give the same answer."""
        snapshot = _snapshot(formulae=["git", "jq", "go"], casks=["rectangle"])
        results = {detect_best_preset(snapshot, sample_catalog) for _ in range(5)}
        assert len(results) == 1


class TestApplyMatch:
    """Tests for apply_match function."""

    def test_sets_computed_fields(self, sample_catalog: Catalog) -> None:
        """apply_match fills catalog_match and matched_preset on a copy."""
        snapshot = _snapshot(formulae=["git", "jq"], casks=["rectangle"])
        matched = apply_match(snapshot, sample_catalog)

        assert matched.matched_preset == "minimal"
        assert matched.catalog_match.match_rate == 1.0
        assert snapshot.matched_preset == ""
        assert matched.packages == snapshot.packages
