"""File and directory analysis models."""

from pathlib import Path
from dataclasses import dataclass
from typing import Tuple

NO_EXTENSION = "(no extension)"


@dataclass(frozen=True)
class FileRef:
    """A file discovered while walking the target tree."""

    full_path: Path
    name: str
    extension: str
    directory: Path

    @classmethod
    def from_path(cls, path: Path) -> "FileRef":
        """Build a reference from a file path."""
        return cls(
            full_path=path,
            name=path.name,
            extension=path.suffix,
            directory=path.parent,
        )

    @property
    def extension_key(self) -> str:
        """Lower-cased extension used for histograms and filtering."""
        return self.extension.lower() or NO_EXTENSION

    def matches(self, extensions) -> bool:
        """Check the extension against a set of lower-cased extensions.

        An empty set matches every file. The empty string selects files
        without an extension.
        """
        if not extensions:
            return True
        return self.extension.lower() in extensions


@dataclass(frozen=True)
class DirectoryAnalysis:
    """Snapshot of a directory tree taken before consolidation."""

    root: Path
    subdirectory_count: int = 0
    total_file_count: int = 0
    root_file_count: int = 0
    subdir_file_count: int = 0
    extension_histogram: Tuple[Tuple[str, int], ...] = ()
    subdir_files: Tuple[FileRef, ...] = ()
    root_files: Tuple[FileRef, ...] = ()
    scan_errors: int = 0

    @property
    def has_subdir_files(self) -> bool:
        return self.subdir_file_count > 0
