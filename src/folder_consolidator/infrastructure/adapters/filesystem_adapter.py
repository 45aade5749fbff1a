"""
Filesystem Adapter - boundary between the consolidation core and the OS.

The analyzer, resolver, mover and reaper only talk to the filesystem
through this class so tests can substitute a fake or a mock.
"""

import errno
import os
import shutil
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple

WalkErrorHandler = Callable[[OSError], None]

# link() failures that mean "hard links are not available here"
LINK_UNAVAILABLE = {errno.EXDEV, errno.EPERM, errno.ENOTSUP, errno.EOPNOTSUPP, errno.EMLINK}


class FilesystemAdapter:
    """Synchronous filesystem operations used by the consolidation core."""

    def walk(
        self,
        root: Path,
        on_error: Optional[WalkErrorHandler] = None
    ) -> Iterator[Tuple[Path, List[str], List[str]]]:
        """
        Walk a directory tree top-down.

        Unreadable subtrees are reported to ``on_error`` and skipped.
        Symlinked directories are listed but never descended into.
        """
        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
            yield Path(dirpath), dirnames, filenames

    def exists(self, path: Path) -> bool:
        """
        Check whether anything exists at ``path``.

        Only a missing entry counts as "does not exist"; any other error
        (permission denied, I/O failure) propagates to the caller.
        """
        try:
            os.lstat(path)
        except FileNotFoundError:
            return False
        except NotADirectoryError:
            return False
        return True

    def is_dir(self, path: Path) -> bool:
        return os.path.isdir(path)

    def is_link(self, path: Path) -> bool:
        return os.path.islink(path)

    def move(self, source: Path, destination: Path) -> None:
        """
        Move a file, refusing to replace an existing destination.

        On one volume the file is hard-linked into place, which fails
        atomically with FileExistsError if the name was taken after the
        caller checked it. Where hard links are unavailable (another
        volume, a symlink source, an unsupported filesystem) the existence
        check and the move are separate steps, so a file created in
        between can still be replaced.

        Raises:
            FileExistsError: If ``destination`` already exists
        """
        if not os.path.islink(source):
            try:
                os.link(source, destination)
            except FileExistsError:
                raise
            except OSError as e:
                if e.errno not in LINK_UNAVAILABLE:
                    raise
            else:
                os.unlink(source)
                return

        if os.path.lexists(destination):
            raise FileExistsError(errno.EEXIST, "Destination already exists", str(destination))
        shutil.move(str(source), str(destination))

    def replace(self, source: Path, destination: Path) -> None:
        """Move a file, replacing whatever is at ``destination``."""
        try:
            os.replace(source, destination)
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise
            # Different volume: copy over the target, then drop the source
            shutil.copy2(source, destination)
            os.unlink(source)

    def is_empty_dir(self, path: Path) -> bool:
        with os.scandir(path) as entries:
            return next(entries, None) is None

    def remove_dir(self, path: Path) -> None:
        """Remove an empty directory."""
        os.rmdir(path)
