"""
JSON report of a grouping run.

The report lists every group with its members and leaders, plus every image
with the fields the grouping pass derived for it.
"""

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import GroupingSettings
from ..grouping.model import Group, GroupingResult, PhotoImage
from ..logging import get_logger

logger = get_logger(__name__)

REPORT_VERSION = "1.0"
REPORT_FILE_NAME = "groups.json"


@dataclass(frozen=True)
class GroupEntry:
    """Single group in the report."""
    group_id: str
    size: int
    leader: str                         # Quality-based pick
    override: Optional[str]             # User's pick, if any
    effective_leader: str
    members: List[str]                  # Best first


@dataclass(frozen=True)
class ImageEntry:
    """Single image in the report."""
    path: str
    name: str
    size: int
    mtime: float
    fingerprint: Optional[str]          # Hex string, None if hashing failed
    dimensions: Optional[Dict[str, int]]
    quality_score: int
    group_id: Optional[str]
    is_leader: bool


@dataclass(frozen=True)
class GroupingReport:
    version: str
    generated_at: str
    settings: Dict[str, Any]
    summary: Dict[str, int]
    groups: List[GroupEntry]
    images: List[ImageEntry]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_report(result: GroupingResult, settings: Optional[GroupingSettings] = None) -> GroupingReport:
    groups = [_group_entry(group) for group in result.groups]
    images = [_image_entry(image) for image in result.images]

    summary = {
        "total_images": len(result.images),
        "groups": len(result.groups),
        "grouped_images": result.grouped_count,
        "ungrouped_images": len(result.ungrouped),
        "rejects": sum(len(group.rejects) for group in result.groups),
        "unhashed_images": sum(1 for image in result.images if image.fingerprint is None),
    }

    return GroupingReport(
        version=REPORT_VERSION,
        generated_at=datetime.now().isoformat(timespec="seconds"),
        settings=asdict(settings or GroupingSettings()),
        summary=summary,
        groups=groups,
        images=images,
    )


def write_report_json(report: GroupingReport, output_dir: Path) -> Path:
    """
    Write the report to ``groups.json`` in the output directory.

    Args:
        report: Report to write
        output_dir: Directory to write into, created if missing

    Returns:
        Path to the written file
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    report_path = output_dir / REPORT_FILE_NAME

    try:
        with open(report_path, 'w', encoding='utf-8') as f:
            json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
    except OSError as exc:
        logger.error(f"Failed to write report to {report_path}: {exc}")
        raise

    logger.info(f"Wrote report to {report_path}")
    return report_path


def _group_entry(group: Group) -> GroupEntry:
    return GroupEntry(
        group_id=group.group_id,
        size=len(group),
        leader=str(group.leader_id),
        override=str(group.override_id) if group.override_id is not None else None,
        effective_leader=str(group.effective_leader),
        members=[str(path) for path in group.members],
    )


def _image_entry(image: PhotoImage) -> ImageEntry:
    dimensions = None
    if image.dimensions is not None:
        dimensions = {"width": image.dimensions[0], "height": image.dimensions[1]}
    return ImageEntry(
        path=str(image.path),
        name=image.name,
        size=image.size,
        mtime=image.mtime,
        fingerprint=str(image.fingerprint) if image.fingerprint is not None else None,
        dimensions=dimensions,
        quality_score=image.quality_score,
        group_id=image.group_id,
        is_leader=image.is_leader,
    )
