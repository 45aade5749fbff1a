"""Removal of directories left empty after consolidation."""

from pathlib import Path
from typing import Callable, List, Optional, Tuple
import logging

from ..infrastructure.adapters.filesystem_adapter import FilesystemAdapter
from ..progress_tracker import ProgressCallback, ProgressEvent, ProgressStage, emit_progress

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str], bool]


class EmptyDirectoryReaper:
    """Deletes empty subdirectories of a root, deepest first."""

    def __init__(self,
                 filesystem: Optional[FilesystemAdapter] = None,
                 confirm: Optional[ConfirmCallback] = None,
                 progress: Optional[ProgressCallback] = None):
        self.filesystem = filesystem or FilesystemAdapter()
        self.confirm = confirm
        self.progress = progress
        self.failures: List[Tuple[Path, str]] = []

    def remove_empty(self, root: Path, auto_confirm: bool = False) -> int:
        """
        Remove empty directories below ``root`` and return how many were deleted.

        Directories are visited deepest first, so a parent whose only
        content was empty children is removed in the same pass. ``root``
        itself is never removed.
        """
        root = Path(root)
        self.failures = []

        if not auto_confirm:
            if self.confirm is None or not self.confirm(f"Remove empty subdirectories of {root}?"):
                logger.info("Empty directory removal declined")
                return 0

        directories = self.find_subdirectories(root)
        total = len(directories)
        deleted = 0

        for index, directory in enumerate(directories, start=1):
            failed = False
            try:
                if self.filesystem.is_empty_dir(directory):
                    self.filesystem.remove_dir(directory)
                    deleted += 1
                    logger.info(f"Removed empty directory {directory}")
            except OSError as e:
                failed = True
                self.failures.append((directory, str(e)))
                logger.warning(f"Could not remove {directory}: {e}")

            emit_progress(self.progress, ProgressEvent(
                phase=ProgressStage.CLEANUP,
                current=index,
                total=total,
                detail=str(directory),
                error=failed,
            ))

        logger.info(f"Removed {deleted} empty directories ({len(self.failures)} failures)")
        return deleted

    def find_subdirectories(self, root: Path) -> List[Path]:
        """All real (non-symlink) subdirectories, deepest first."""
        def on_error(error: OSError) -> None:
            logger.warning(f"Skipping unreadable directory {error.filename}: {error.strerror or error}")

        directories = []
        for dirpath, dirnames, _ in self.filesystem.walk(root, on_error=on_error):
            for name in dirnames:
                path = dirpath / name
                if not self.filesystem.is_link(path):
                    directories.append(path)

        directories.sort(key=lambda p: (-len(p.relative_to(root).parts), str(p)))
        return directories

    @property
    def errors(self) -> int:
        return len(self.failures)
