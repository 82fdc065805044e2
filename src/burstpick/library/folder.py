from __future__ import annotations

from pathlib import Path
from typing import List

from ..grouping.model import PhotoImage
from ..logging import get_logger

logger = get_logger(__name__)

IMAGE_EXTENSIONS = frozenset({
    ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp", ".tiff",
})


class FolderScanError(Exception):
    """Raised when a folder cannot be listed."""


def is_image_file(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_EXTENSIONS


def list_images(folder: Path | str) -> List[PhotoImage]:
    """
    List the photos directly inside ``folder``.

    Only regular files with a supported extension are returned, sorted by
    name without regard to case. Subfolders are not searched.

    Raises:
        FolderScanError: If the folder does not exist or cannot be read
    """
    folder = Path(folder)
    if not folder.is_dir():
        raise FolderScanError(f"Not a folder: {folder}")

    try:
        entries = list(folder.iterdir())
    except OSError as exc:
        raise FolderScanError(f"Failed to list {folder}: {exc}") from exc

    images = []
    for entry in sorted(entries, key=lambda p: p.name.casefold()):
        if not is_image_file(entry):
            continue
        try:
            if not entry.is_file():
                continue
            stat = entry.stat()
        except OSError as exc:
            logger.warning(f"Skipping unreadable file {entry}: {exc}")
            continue
        images.append(PhotoImage(
            path=entry,
            name=entry.name,
            size=stat.st_size,
            mtime=stat.st_mtime,
        ))

    logger.debug(f"Found {len(images)} images in {folder}")
    return images
