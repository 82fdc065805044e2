"""Average-hash fingerprints and dimension probing for photos."""

from pathlib import Path
from typing import Optional, Tuple

import imagehash
from PIL import Image

from ..logging import get_logger

logger = get_logger(__name__)

HASH_SIZE = 8
FINGERPRINT_BITS = HASH_SIZE * HASH_SIZE


class HashComputationError(Exception):
    """Raised when a fingerprint cannot be computed."""


def compute_fingerprint(image_path: Path) -> imagehash.ImageHash:
    """
    Load an image from disk and compute its 64-bit average hash.

    The image is reduced to an 8x8 luminance grid; a bit is set when its
    sample is strictly brighter than the grid mean.

    Args:
        image_path: Path to image file

    Returns:
        64-bit ImageHash

    Raises:
        HashComputationError: If the image cannot be decoded or resized
    """
    try:
        with Image.open(image_path) as img:
            fingerprint = imagehash.average_hash(img, hash_size=HASH_SIZE)
            logger.debug(f"Computed fingerprint for {image_path}: {fingerprint}")
            return fingerprint

    except Exception as exc:
        raise HashComputationError(f"Failed to compute fingerprint for {image_path}: {exc}") from exc


def probe_dimensions(image_path: Path) -> Optional[Tuple[int, int]]:
    """Read (width, height) from the image header, or None if unreadable."""
    try:
        with Image.open(image_path) as img:
            width, height = img.size
    except Exception as exc:
        logger.warning(f"Failed to read dimensions of {image_path}: {exc}")
        return None
    return int(width), int(height)
