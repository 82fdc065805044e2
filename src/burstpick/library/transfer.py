"""Copy or move selected photos into another folder."""

from __future__ import annotations

import shutil
from enum import Enum
from pathlib import Path
from typing import Iterable, List

from ..logging import get_logger

logger = get_logger(__name__)


class TransferMode(str, Enum):
    COPY = "copy"
    MOVE = "move"


class TransferError(Exception):
    """Raised when a transfer request is invalid."""


def unique_destination(directory: Path, file_name: str) -> Path:
    """Return ``directory/file_name``, or ``name (n).ext`` with the first free n."""
    candidate = directory / file_name
    stem, suffix = Path(file_name).stem, Path(file_name).suffix
    counter = 1
    while candidate.exists():
        candidate = directory / f"{stem} ({counter}){suffix}"
        counter += 1
    return candidate


def transfer_files(
    files: Iterable[Path | str],
    destination: Path | str,
    mode: TransferMode | str = TransferMode.COPY,
) -> List[Path]:
    """
    Copy or move files into ``destination``, never overwriting.

    Files are processed in order and the first failure propagates; files
    already transferred stay where they were put.

    Returns:
        Paths of the transferred files in their new location
    """
    files = [Path(f) for f in files]
    if not files:
        raise TransferError("No files to transfer")
    try:
        mode = TransferMode(mode)
    except ValueError:
        raise TransferError(f"Unknown transfer mode: {mode}") from None

    destination = Path(destination)
    destination.mkdir(parents=True, exist_ok=True)

    targets = []
    for source in files:
        target = unique_destination(destination, source.name)
        if mode is TransferMode.COPY:
            shutil.copy2(source, target)
        else:
            # shutil.move falls back to copy and delete across devices
            shutil.move(str(source), str(target))
        targets.append(target)
        logger.debug(f"{mode.value}: {source} -> {target}")

    logger.info(f"Transferred {len(targets)} file(s) to {destination} ({mode.value})")
    return targets
