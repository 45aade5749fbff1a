"""Single-pass analysis of the directory tree to consolidate."""

from collections import Counter
from pathlib import Path
from typing import List, Optional
import logging

from ..exceptions import ConfigurationError, ScanError
from ..infrastructure.adapters.filesystem_adapter import FilesystemAdapter
from ..models.file_ref import DirectoryAnalysis, FileRef
from ..progress_tracker import ProgressCallback, ProgressEvent, ProgressStage, emit_progress

logger = logging.getLogger(__name__)


class DirectoryAnalyzer:
    """Walks a target directory once and classifies what it finds."""

    def __init__(self, filesystem: Optional[FilesystemAdapter] = None,
                 progress: Optional[ProgressCallback] = None):
        self.filesystem = filesystem or FilesystemAdapter()
        self.progress = progress

    def analyze(self, root: Path) -> DirectoryAnalysis:
        """Analyze ``root``.

        Unreadable subtrees are skipped with a warning and counted in
        ``scan_errors``; only a failure to read ``root`` itself is fatal.
        """
        root = Path(root)
        if not self.filesystem.is_dir(root):
            raise ConfigurationError(f"Target directory does not exist or is not a directory: {root}")

        errors: List[OSError] = []
        root_failed = False

        def on_error(error: OSError) -> None:
            nonlocal root_failed
            if error.filename is not None and Path(error.filename) == root:
                root_failed = True
            else:
                logger.warning(f"Skipping unreadable entry {error.filename}: {error.strerror or error}")
            errors.append(error)

        root_files: List[FileRef] = []
        subdir_files: List[FileRef] = []
        subdirectory_count = 0

        for dirpath, dirnames, filenames in self.filesystem.walk(root, on_error=on_error):
            subdirectory_count += len(dirnames)
            is_root = dirpath == root
            for filename in sorted(filenames):
                ref = FileRef.from_path(dirpath / filename)
                if is_root:
                    root_files.append(ref)
                else:
                    subdir_files.append(ref)
                    logger.debug(f"Found {ref.full_path}")

            emit_progress(self.progress, ProgressEvent(
                phase=ProgressStage.ANALYSIS,
                current=len(root_files) + len(subdir_files),
                total=0,
                detail=str(dirpath),
            ))
            # Stable ordering between runs
            dirnames.sort()

        if root_failed:
            raise ScanError(f"Cannot read target directory: {root}")

        histogram = Counter(ref.extension_key for ref in subdir_files)
        ordered = tuple(sorted(histogram.items(), key=lambda item: (-item[1], item[0])))

        analysis = DirectoryAnalysis(
            root=root,
            subdirectory_count=subdirectory_count,
            total_file_count=len(root_files) + len(subdir_files),
            root_file_count=len(root_files),
            subdir_file_count=len(subdir_files),
            extension_histogram=ordered,
            subdir_files=tuple(subdir_files),
            root_files=tuple(root_files),
            scan_errors=len(errors),
        )

        logger.info(
            f"Analyzed {root}: {analysis.subdirectory_count} subdirectories, "
            f"{analysis.root_file_count} root files, {analysis.subdir_file_count} files in subdirectories"
        )
        return analysis
