"""Fill in fingerprints, dimensions and quality scores for a photo list.

Decoding is I/O bound, so photos are processed in fixed-size batches: every
photo in a batch is decoded in a worker thread at the same time, and the next
batch starts only after the whole batch has finished. This bounds the number
of open files and decoded images held in memory at once.
"""

import asyncio
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

import imagehash

from ..config import InvalidSettingsError
from .hash import HashComputationError, compute_fingerprint, probe_dimensions
from .model import PhotoImage
from .quality import quality_score
from ..logging import get_logger

logger = get_logger(__name__)

DEFAULT_BATCH_SIZE = 10


def fingerprint_or_none(image_path: Path) -> Optional[imagehash.ImageHash]:
    try:
        return compute_fingerprint(image_path)
    except HashComputationError as exc:
        logger.warning(str(exc))
        return None


def iter_batches(images: Sequence[PhotoImage], batch_size: int) -> Iterator[Sequence[PhotoImage]]:
    for start in range(0, len(images), batch_size):
        yield images[start:start + batch_size]


async def enrich_image(image: PhotoImage) -> PhotoImage:
    """Hash and probe one photo concurrently, then score it. Never raises for bad files."""
    fingerprint, dimensions = await asyncio.gather(
        asyncio.to_thread(fingerprint_or_none, image.path),
        asyncio.to_thread(probe_dimensions, image.path),
    )
    image.fingerprint = fingerprint
    image.dimensions = dimensions
    image.quality_score = quality_score(image.name, image.size, dimensions)
    return image


async def enrich_images(
    images: Sequence[PhotoImage],
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> List[PhotoImage]:
    """
    Enrich every photo in place, one batch at a time.

    Args:
        images: Photos to enrich
        batch_size: Number of photos decoded concurrently

    Returns:
        The same photos, in input order
    """
    if batch_size < 1:
        raise InvalidSettingsError(f"batch_size must be at least 1, got {batch_size}")

    enriched: List[PhotoImage] = []
    for index, batch in enumerate(iter_batches(images, batch_size)):
        # gather preserves argument order regardless of completion order
        results = await asyncio.gather(*(enrich_image(image) for image in batch))
        enriched.extend(results)
        logger.debug(f"Enriched batch {index + 1} ({len(enriched)}/{len(images)} images)")

    failed = sum(1 for image in enriched if image.fingerprint is None)
    if failed:
        logger.warning(f"{failed}/{len(enriched)} images could not be fingerprinted")
    return enriched
