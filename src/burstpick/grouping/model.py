"""Data types shared by the grouping engine and the group session."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import imagehash


@dataclass
class PhotoImage:
    """A photo on disk plus everything the grouping pass derives from it."""
    path: Path                                      # Unique key
    name: str
    size: int                                       # Bytes
    mtime: float                                    # Seconds since the epoch
    fingerprint: Optional[imagehash.ImageHash] = None  # None if hashing failed
    dimensions: Optional[Tuple[int, int]] = None    # (width, height), None if probing failed
    quality_score: int = 0
    group_id: Optional[str] = None
    is_leader: bool = False


@dataclass
class Group:
    """A burst of near-duplicate photos.

    ``members`` is ordered by descending quality score at creation time, so
    ``members[0]`` is ``leader_id``. ``override_id`` is the user's pick and
    wins over ``leader_id`` when set.
    """
    group_id: str
    members: List[Path]
    leader_id: Path
    override_id: Optional[Path] = None
    collapsed: bool = False

    @property
    def effective_leader(self) -> Path:
        return self.override_id if self.override_id is not None else self.leader_id

    @property
    def rejects(self) -> List[Path]:
        keep = self.effective_leader
        return [path for path in self.members if path != keep]

    def __len__(self) -> int:
        return len(self.members)


@dataclass
class GroupingResult:
    """Output of one grouping run."""
    images: List[PhotoImage]
    groups: List[Group] = field(default_factory=list)

    @property
    def grouped_count(self) -> int:
        return sum(len(group) for group in self.groups)

    @property
    def ungrouped(self) -> List[PhotoImage]:
        return [image for image in self.images if image.group_id is None]
