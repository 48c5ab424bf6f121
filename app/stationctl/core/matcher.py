"""Catalog matching and preset detection.

Classifies a snapshot's packages against the catalog and infers which
preset the machine most resembles. All functions here are pure: no I/O,
no errors, identical input gives identical output.
"""

from collections.abc import Iterable

from stationctl.core.catalog import Catalog
from stationctl.models.snapshot import CatalogMatch, Snapshot

# Minimum Jaccard similarity for a preset to count as a match
PRESET_MATCH_THRESHOLD = 0.3


def match_packages(snapshot: Snapshot, catalog: Catalog) -> CatalogMatch:
    """Classify the snapshot's packages as known or unknown to the catalog.

    Formulae, casks and npm packages are concatenated and deduplicated
    (first occurrence wins), then each name is looked up in the catalog.
    Taps are not packages and are ignored.

    Args:
        snapshot: Snapshot to classify.
        catalog: Catalog to classify against.

    Returns:
        CatalogMatch with matched/unmatched names in snapshot order and the
        fraction matched (0.0 when the snapshot has no packages).
    """
    matched: list[str] = []
    unmatched: list[str] = []

    for name in snapshot.packages.all_packages():
        if catalog.lookup_category(name):
            matched.append(name)
        else:
            unmatched.append(name)

    total = len(matched) + len(unmatched)
    match_rate = len(matched) / total if total else 0.0

    return CatalogMatch(matched=matched, unmatched=unmatched, match_rate=match_rate)


def jaccard_similarity(a: Iterable[str], b: Iterable[str]) -> float:
    """Compute |A ∩ B| / |A ∪ B|.

    Duplicates in either input are ignored.

    Args:
        a: First collection of names.
        b: Second collection of names.

    Returns:
        Similarity in [0.0, 1.0]; 0.0 when both are empty.
    """
    set_a = set(a)
    set_b = set(b)
    union = len(set_a | set_b)
    if union == 0:
        return 0.0
    return len(set_a & set_b) / union


def detect_best_preset(
    snapshot: Snapshot,
    catalog: Catalog,
    threshold: float = PRESET_MATCH_THRESHOLD,
) -> str:
    """Find the preset most similar to the snapshot's packages.

    Presets are scored in the catalog's declared order and only a strictly
    higher score replaces the current best, so ties go to the smaller preset.

    Args:
        snapshot: Snapshot to score.
        catalog: Catalog providing the presets.
        threshold: Minimum similarity required to report a preset.

    Returns:
        Preset identifier, or "" if no preset reaches the threshold.
    """
    installed = set(snapshot.packages.all_packages())

    best_preset = ""
    best_similarity = 0.0

    for preset_id in catalog.preset_names():
        similarity = jaccard_similarity(installed, catalog.packages_for_preset(preset_id))
        if similarity > best_similarity:
            best_similarity = similarity
            best_preset = preset_id

    if best_preset and best_similarity >= threshold:
        return best_preset
    return ""


def apply_match(
    snapshot: Snapshot,
    catalog: Catalog,
    threshold: float = PRESET_MATCH_THRESHOLD,
) -> Snapshot:
    """Return a copy of the snapshot with its computed match fields refreshed.

    Args:
        snapshot: Snapshot to annotate.
        catalog: Catalog to match against.
        threshold: Minimum similarity for preset detection.

    Returns:
        New Snapshot with ``catalog_match`` and ``matched_preset`` set.
    """
    return snapshot.model_copy(
        update={
            "catalog_match": match_packages(snapshot, catalog),
            "matched_preset": detect_best_preset(snapshot, catalog, threshold),
        }
    )
