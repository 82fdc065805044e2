"""Public API for grouping photos into bursts."""

from typing import Optional, Sequence

from ..config import GroupingSettings
from .cluster import assign_leaders, find_bursts, sort_by_time
from .enrich import enrich_images
from .model import GroupingResult, PhotoImage
from ..logging import get_logger

logger = get_logger(__name__)


class GroupingError(Exception):
    """Raised when a grouping run fails as a whole."""


class EmptyImageListError(GroupingError):
    """Raised when there are no images to group."""


async def group_images(
    images: Sequence[PhotoImage],
    settings: Optional[GroupingSettings] = None,
) -> GroupingResult:
    """
    Enrich photos and group them into bursts.

    Per-image decode failures only leave that image without a fingerprint
    or dimensions. Groups from any earlier run are forgotten: every image's
    group fields are reset before clustering.

    Args:
        images: Photos to group, in the order they were listed
        settings: Grouping thresholds; defaults are used when omitted

    Returns:
        GroupingResult with every image (grouped or not) in input order and
        the committed groups in time order

    Raises:
        EmptyImageListError: If images is empty
        InvalidSettingsError: If settings are out of range
        GroupingError: If the run fails for any other reason
    """
    if not images:
        raise EmptyImageListError("No images to group")

    settings = (settings or GroupingSettings()).validate()

    for image in images:
        image.group_id = None
        image.is_leader = False

    try:
        enriched = await enrich_images(images, batch_size=settings.batch_size)
        bursts = find_bursts(
            sort_by_time(enriched),
            time_threshold_seconds=settings.time_threshold_seconds,
            similarity_threshold=settings.similarity_threshold,
            min_group_size=settings.min_group_size,
        )
        groups = assign_leaders(bursts)
    except Exception as exc:
        raise GroupingError(f"Grouping failed: {exc}") from exc

    result = GroupingResult(images=list(enriched), groups=groups)
    logger.info(
        f"Found {len(groups)} groups covering {result.grouped_count} of {len(enriched)} images"
    )
    return result
