"""Heuristic quality score used to pick the best shot of a burst."""

from typing import Optional, Tuple

RESOLUTION_WEIGHT = 40
SIZE_WEIGHT = 30
NAMING_WEIGHT = 30
DERIVED_NAME_SCORE = 10

FULL_RESOLUTION_MEGAPIXELS = 24.0
FULL_SIZE_MB = 10.0

# Substrings that mark an edited or duplicated copy rather than the original
DERIVED_NAME_MARKERS = ("edit", "copy", "duplicate", "(1)", "(2)")


def resolution_term(dimensions: Optional[Tuple[int, int]]) -> float:
    if dimensions is None:
        return 0.0
    width, height = dimensions
    megapixels = width * height / 1_000_000
    return min(megapixels / FULL_RESOLUTION_MEGAPIXELS, 1.0) * RESOLUTION_WEIGHT


def size_term(size_bytes: int) -> float:
    size_mb = max(size_bytes, 0) / (1024 * 1024)
    return min(size_mb / FULL_SIZE_MB, 1.0) * SIZE_WEIGHT


def naming_term(name: str) -> float:
    lowered = name.lower()
    if any(marker in lowered for marker in DERIVED_NAME_MARKERS):
        return DERIVED_NAME_SCORE
    return NAMING_WEIGHT


def quality_score(name: str, size_bytes: int, dimensions: Optional[Tuple[int, int]]) -> int:
    """
    Score a photo from 0 to 100.

    Resolution (up to 40), file size (up to 30) and naming (30, or 10 for
    names that look like an edited or duplicate copy) are each capped on
    their own, so the total never exceeds 100. Defined even when the
    dimensions are unknown.
    """
    total = resolution_term(dimensions) + size_term(size_bytes) + naming_term(name)
    # Round half up
    return int(total + 0.5)
