"""Single-pass temporal and visual clustering of photo bursts."""

from typing import List, Sequence

from .distance import similarity
from .model import Group, PhotoImage
from ..logging import get_logger

logger = get_logger(__name__)

# A single photo is never a burst, whatever min_group_size says.
SMALLEST_GROUP = 2


def sort_by_time(images: Sequence[PhotoImage]) -> List[PhotoImage]:
    """Sort by mtime ascending; equal timestamps keep their input order."""
    return sorted(images, key=lambda image: image.mtime)


def is_similar_to_any(
    image: PhotoImage,
    members: Sequence[PhotoImage],
    similarity_threshold: float,
) -> bool:
    """True if the image matches at least one member, not just the last one."""
    if image.fingerprint is None:
        return False
    for member in members:
        score = similarity(image.fingerprint, member.fingerprint)
        if score >= similarity_threshold:
            logger.debug(f"{image.name} matches {member.name} (similarity: {score:.3f})")
            return True
    return False


def find_bursts(
    images: Sequence[PhotoImage],
    time_threshold_seconds: float,
    similarity_threshold: float,
    min_group_size: int,
) -> List[List[PhotoImage]]:
    """
    Split time-ordered photos into bursts with one greedy pass.

    A photo joins the open burst when it was taken within
    ``time_threshold_seconds`` of the burst's most recent photo and is
    visually similar to any photo already in it. Otherwise the open burst is
    closed and a new one starts with this photo. Closed bursts smaller than
    ``min_group_size`` (or than two photos) are dropped, their photos stay
    ungrouped. Bursts are never split or merged after they close.

    Args:
        images: Photos sorted by mtime
        time_threshold_seconds: Maximum gap to the previous photo of the burst
        similarity_threshold: Minimum fingerprint similarity in [0, 1]
        min_group_size: Minimum number of photos in a committed burst

    Returns:
        Committed bursts in time order, members in time order
    """
    minimum = max(min_group_size, SMALLEST_GROUP)
    bursts: List[List[PhotoImage]] = []
    current: List[PhotoImage] = []

    def close() -> None:
        if len(current) >= minimum:
            bursts.append(list(current))
        elif current:
            logger.debug(f"Discarded burst of {len(current)} starting at {current[0].name}")

    for image in images:
        if not current:
            current.append(image)
            continue

        time_diff = image.mtime - current[-1].mtime
        if time_diff > time_threshold_seconds:
            close()
            current = [image]
        elif is_similar_to_any(image, current, similarity_threshold):
            current.append(image)
        else:
            close()
            current = [image]

    close()
    return bursts


def assign_leaders(bursts: Sequence[Sequence[PhotoImage]]) -> List[Group]:
    """
    Turn bursts into groups and stamp their photos.

    Members are ordered by quality score, best first (stable, so ties keep
    time order); the first member becomes the leader. Group ids are unique
    within one call.
    """
    groups = []
    for counter, burst in enumerate(bursts, start=1):
        ranked = sorted(burst, key=lambda image: image.quality_score, reverse=True)
        group_id = f"burst_{counter:03d}"

        for index, image in enumerate(ranked):
            image.group_id = group_id
            image.is_leader = index == 0

        groups.append(Group(
            group_id=group_id,
            members=[image.path for image in ranked],
            leader_id=ranked[0].path,
        ))
        logger.info(f"Created group {group_id} with {len(ranked)} images, leader: {ranked[0].name}")

    return groups
