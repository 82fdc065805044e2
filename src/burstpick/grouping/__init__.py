"""Burst detection and leader selection for photo folders."""

from .model import PhotoImage, Group, GroupingResult
from .hash import compute_fingerprint, HashComputationError
from .distance import hamming_distance, similarity
from .quality import quality_score
from .engine import group_images, GroupingError, EmptyImageListError

__all__ = [
    "PhotoImage",
    "Group",
    "GroupingResult",
    "compute_fingerprint",
    "HashComputationError",
    "hamming_distance",
    "similarity",
    "quality_score",
    "group_images",
    "GroupingError",
    "EmptyImageListError",
]
