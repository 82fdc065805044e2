from pathlib import Path

from send2trash import send2trash

from ..logging import get_logger

logger = get_logger(__name__)


def move_to_trash(path: Path) -> None:
    """Send a file to the platform trash. Raises OSError on failure."""
    if not Path(path).exists():
        raise FileNotFoundError(f"No such file: {path}")
    send2trash(str(path))
    logger.debug(f"Moved {path} to trash")
