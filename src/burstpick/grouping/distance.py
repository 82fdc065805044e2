"""Distance metrics for fingerprint comparison."""

from typing import Optional

import imagehash

from .hash import FINGERPRINT_BITS


def hamming_distance(a: Optional[imagehash.ImageHash], b: Optional[imagehash.ImageHash]) -> int:
    """
    Count differing bits between two fingerprints.

    Missing fingerprints, or fingerprints that are not 64 bits long, are
    treated as maximally different so they never match anything.

    Args:
        a: First fingerprint
        b: Second fingerprint

    Returns:
        Hamming distance in [0, 64]
    """
    if a is None or b is None:
        return FINGERPRINT_BITS
    if a.hash.size != FINGERPRINT_BITS or b.hash.size != FINGERPRINT_BITS:
        return FINGERPRINT_BITS
    return int(a - b)


def similarity(a: Optional[imagehash.ImageHash], b: Optional[imagehash.ImageHash]) -> float:
    """Normalized similarity in [0, 1]; 1.0 means identical fingerprints."""
    return 1.0 - hamming_distance(a, b) / FINGERPRINT_BITS
