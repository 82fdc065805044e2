"""Session state for one open folder: its photos, its groups and the edits
a user makes to them (leader overrides and reject deletion).

A session is owned by a single caller. Grouping runs and deletions take the
same lock, so a deletion never interleaves with a clustering run over the
same photo list.
"""

import asyncio
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from .config import GroupingSettings
from .grouping.engine import group_images
from .grouping.model import Group, GroupingResult, PhotoImage
from .library.folder import list_images
from .library.trash import move_to_trash
from .logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]
Remover = Callable[[Path], None]


class SessionError(Exception):
    """Base class for group session errors."""


class SessionBusyError(SessionError):
    """Raised when the photo list is replaced while a run is in flight."""


class GroupNotFoundError(SessionError):
    """Raised when a group id is unknown, e.g. after the group was dissolved."""


class NotAGroupMemberError(SessionError):
    """Raised when a leader override names a photo outside the group."""


class NothingToDeleteError(SessionError):
    """Raised when a group has no rejects left to delete."""


class DeletionError(SessionError):
    """Raised when some rejects could not be removed.

    Deletions that did succeed are already reflected in the session.
    """

    def __init__(self, failures: List[Tuple[Path, str]], deleted_count: int = 0) -> None:
        self.failures = failures
        self.deleted_count = deleted_count
        details = "; ".join(f"{path}: {reason}" for path, reason in failures)
        super().__init__(f"Failed to delete {len(failures)} file(s): {details}")


class GroupingSession:
    def __init__(
        self,
        images: Optional[Iterable[PhotoImage]] = None,
        settings: Optional[GroupingSettings] = None,
        remover: Optional[Remover] = None,
    ) -> None:
        self._images: List[PhotoImage] = list(images or [])
        self._groups: Dict[str, Group] = {}
        self.settings = settings or GroupingSettings()
        self._remover = remover or move_to_trash
        self._lock = asyncio.Lock()

    @property
    def images(self) -> List[PhotoImage]:
        return list(self._images)

    @property
    def groups(self) -> List[Group]:
        return list(self._groups.values())

    def set_images(self, images: Iterable[PhotoImage]) -> None:
        """Replace the photo list and forget every group."""
        if self._lock.locked():
            raise SessionBusyError("Cannot replace images while grouping or deletion is running")
        self._images = list(images)
        self._groups = {}

    def load_folder(self, folder: PathLike) -> List[PhotoImage]:
        images = list_images(Path(folder))
        self.set_images(images)
        logger.info(f"Loaded {len(images)} images from {folder}")
        return self.images

    def image_for(self, path: PathLike) -> Optional[PhotoImage]:
        target = Path(path)
        for image in self._images:
            if image.path == target:
                return image
        return None

    def get_group(self, group_id: str) -> Group:
        try:
            return self._groups[group_id]
        except KeyError:
            raise GroupNotFoundError(f"Group not found: {group_id}") from None

    async def find_groups(self, settings: Optional[GroupingSettings] = None) -> GroupingResult:
        """Run the grouping engine over the current photos, replacing all groups."""
        async with self._lock:
            if settings is not None:
                self.settings = settings
            self._groups = {}
            result = await group_images(self._images, self.settings)
            self.apply(result)
            return result

    def apply(self, result: GroupingResult) -> None:
        """Adopt the photos and groups of a finished grouping run."""
        self._images = list(result.images)
        self._groups = {group.group_id: group for group in result.groups}

    def set_leader(self, group_id: str, path: PathLike) -> Group:
        """Make ``path`` the effective leader; the quality pick stays in leader_id."""
        group = self.get_group(group_id)
        target = Path(path)
        if target not in group.members:
            raise NotAGroupMemberError(f"{target} is not a member of group {group_id}")
        group.override_id = target
        self._sync_leader_flags(group)
        logger.info(f"Group {group_id}: leader overridden to {target.name}")
        return group

    def clear_leader(self, group_id: str) -> Group:
        """Drop the user's override so the quality pick leads again."""
        group = self.get_group(group_id)
        group.override_id = None
        self._sync_leader_flags(group)
        return group

    async def delete_rejects(self, group_id: str) -> int:
        """
        Remove every member of a group except its effective leader.

        Each reject is passed to the remover; photos it removes are dropped
        from the session. The group keeps its leader plus any photos that
        failed to delete, and is dissolved once fewer than two remain.
        Nothing is rolled back on partial failure.

        Returns:
            Number of files removed

        Raises:
            GroupNotFoundError: If the group does not exist (anymore)
            NothingToDeleteError: If the group has no rejects
            DeletionError: If at least one reject could not be removed
        """
        async with self._lock:
            group = self.get_group(group_id)
            rejects = group.rejects
            if not rejects:
                raise NothingToDeleteError(f"Nothing to delete in group {group_id}")

            deleted: List[Path] = []
            failures: List[Tuple[Path, str]] = []
            try:
                for path in rejects:
                    try:
                        await asyncio.to_thread(self._remover, path)
                    except OSError as exc:
                        logger.warning(f"Failed to delete {path}: {exc}")
                        failures.append((path, str(exc)))
                        continue
                    deleted.append(path)
            finally:
                # Confirmed removals are applied even when the remover raises
                self._forget(group, deleted)
                logger.info(f"Group {group_id}: deleted {len(deleted)} of {len(rejects)} rejects")

            if failures:
                raise DeletionError(failures, deleted_count=len(deleted))
            return len(deleted)

    def keepers(self) -> List[PhotoImage]:
        """Ungrouped photos plus the effective leader of every group, in list order."""
        leaders = {group.effective_leader for group in self._groups.values()}
        return [
            image for image in self._images
            if image.group_id not in self._groups or image.path in leaders
        ]

    def _forget(self, group: Group, deleted: List[Path]) -> None:
        removed = set(deleted)
        self._images = [image for image in self._images if image.path not in removed]
        group.members = [path for path in group.members if path not in removed]
        if len(group.members) < 2:
            self._dissolve(group)

    def _sync_leader_flags(self, group: Group) -> None:
        leader = group.effective_leader
        for image in self._images:
            if image.group_id == group.group_id:
                image.is_leader = image.path == leader

    def _dissolve(self, group: Group) -> None:
        del self._groups[group.group_id]
        for image in self._images:
            if image.group_id == group.group_id:
                image.group_id = None
                image.is_leader = False
        logger.info(f"Group {group.group_id} dissolved")
