import asyncio
from pathlib import Path
from typing import Optional

import typer

from .config import GroupingSettings, InvalidSettingsError
from .grouping.engine import GroupingError
from .grouping.model import GroupingResult
from .library.folder import FolderScanError
from .library.transfer import TransferError, TransferMode, transfer_files
from .logging import get_logger
from .output.report import build_report, write_report_json
from .session import DeletionError, GroupingSession, SessionError

app = typer.Typer(help="burstpick - group photo bursts and keep the best shot", no_args_is_help=True)

logger = get_logger(__name__)

FolderArgument = typer.Argument(..., exists=True, file_okay=False, dir_okay=True, help="Folder of photos")
TimeOption = typer.Option(10.0, "--time-threshold", "-t", help="Maximum seconds between consecutive shots of a burst")
SimilarityOption = typer.Option(0.9, "--similarity", "-s", help="Minimum fingerprint similarity (0-1)")
MinSizeOption = typer.Option(2, "--min-group-size", "-m", help="Minimum number of photos in a group")
BatchOption = typer.Option(10, "--batch-size", help="Number of photos decoded concurrently")


def _settings(time_threshold: float, similarity: float, min_group_size: int, batch_size: int) -> GroupingSettings:
    try:
        return GroupingSettings(
            time_threshold_seconds=time_threshold,
            similarity_threshold=similarity,
            min_group_size=min_group_size,
            batch_size=batch_size,
        ).validate()
    except InvalidSettingsError as exc:
        logger.error(f"Invalid settings: {exc}")
        raise typer.Exit(code=2) from exc


def _open_session(folder: Path, settings: GroupingSettings) -> GroupingSession:
    session = GroupingSession(settings=settings)
    try:
        session.load_folder(folder)
        if not session.images:
            logger.warning(f"No images found in {folder}")
            raise typer.Exit(code=0)
        asyncio.run(session.find_groups())
    except FolderScanError as exc:
        logger.error(f"Cannot read folder: {exc}")
        raise typer.Exit(code=1) from exc
    except GroupingError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1) from exc
    return session


@app.command()
def groups(
    folder: Path = FolderArgument,
    time_threshold: float = TimeOption,
    similarity: float = SimilarityOption,
    min_group_size: int = MinSizeOption,
    batch_size: int = BatchOption,
    report: Optional[Path] = typer.Option(None, "--report", "-r", help="Directory to write groups.json into"),
) -> None:
    """Find photo bursts in FOLDER and show each group's leader."""
    settings = _settings(time_threshold, similarity, min_group_size, batch_size)
    session = _open_session(folder, settings)

    for group in session.groups:
        typer.echo(f"{group.group_id} ({len(group)} photos)")
        for path in group.members:
            image = session.image_for(path)
            marker = "*" if path == group.effective_leader else " "
            score = image.quality_score if image is not None else 0
            typer.echo(f"  {marker} {path.name}  [quality {score}]")

    grouped = sum(len(group) for group in session.groups)
    typer.echo(f"{len(session.groups)} groups, {grouped} of {len(session.images)} photos grouped")

    if report is not None:
        result_report = build_report(GroupingResult(images=session.images, groups=session.groups), settings)
        report_path = write_report_json(result_report, report)
        typer.echo(f"Report: {report_path}")


@app.command()
def clean(
    folder: Path = FolderArgument,
    time_threshold: float = TimeOption,
    similarity: float = SimilarityOption,
    min_group_size: int = MinSizeOption,
    batch_size: int = BatchOption,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Move every non-leader photo of every group in FOLDER to the trash."""
    settings = _settings(time_threshold, similarity, min_group_size, batch_size)
    session = _open_session(folder, settings)

    reject_count = sum(len(group.rejects) for group in session.groups)
    if reject_count == 0:
        typer.echo("Nothing to delete.")
        return

    if not yes and not typer.confirm(f"Move {reject_count} file(s) to trash?"):
        raise typer.Abort()

    deleted = 0
    failed = 0
    for group in session.groups:
        try:
            deleted += asyncio.run(session.delete_rejects(group.group_id))
        except DeletionError as exc:
            deleted += exc.deleted_count
            failed += len(exc.failures)
            logger.error(str(exc))
        except SessionError as exc:
            logger.warning(str(exc))

    typer.echo(f"Moved {deleted} file(s) to trash.")
    if failed:
        typer.echo(f"{failed} file(s) could not be deleted.")
        raise typer.Exit(code=1)


@app.command()
def export(
    folder: Path = FolderArgument,
    destination: Path = typer.Argument(..., help="Folder to copy or move the kept photos into"),
    mode: TransferMode = typer.Option(TransferMode.COPY, "--mode", help="copy or move"),
    time_threshold: float = TimeOption,
    similarity: float = SimilarityOption,
    min_group_size: int = MinSizeOption,
    batch_size: int = BatchOption,
) -> None:
    """Copy or move the keepers of FOLDER (group leaders and ungrouped photos) to DESTINATION."""
    settings = _settings(time_threshold, similarity, min_group_size, batch_size)
    session = _open_session(folder, settings)

    keepers = session.keepers()
    try:
        targets = transfer_files([image.path for image in keepers], destination, mode)
    except (TransferError, OSError) as exc:
        logger.error(f"Export failed: {exc}")
        raise typer.Exit(code=1) from exc

    typer.echo(f"Exported {len(targets)} photo(s) to {destination} ({mode.value})")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
