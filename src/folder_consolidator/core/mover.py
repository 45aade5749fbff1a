"""Moves files from subdirectories into the target root."""

from pathlib import Path
from typing import Callable, AbstractSet, Iterable, List, Optional, Sequence
import logging

from ..exceptions import ConfigurationError, FileOperationError, TargetUnavailableError
from ..infrastructure.adapters.filesystem_adapter import FilesystemAdapter
from ..models.conflict import (
    ConflictChoice,
    ConflictStrategy,
    MoveOutcome,
    MoveSummary,
    OutcomeStatus,
    ResolutionAction,
    RunState,
)
from ..models.file_ref import FileRef
from ..progress_tracker import ProgressCallback, ProgressEvent, ProgressStage, emit_progress
from .conflict_resolver import ConflictResolver

logger = logging.getLogger(__name__)

ConflictChooser = Callable[[FileRef, Path], ConflictChoice]


def filter_by_extension(files: Iterable[FileRef], extensions: AbstractSet[str]) -> List[FileRef]:
    """Keep files whose lower-cased extension is in ``extensions``.

    An empty set keeps everything. Order is preserved.
    """
    return [f for f in files if f.matches(extensions)]


class BatchMover:
    """Applies the conflict resolver to a list of files, one at a time."""

    def __init__(self,
                 resolver: Optional[ConflictResolver] = None,
                 filesystem: Optional[FilesystemAdapter] = None,
                 chooser: Optional[ConflictChooser] = None,
                 progress: Optional[ProgressCallback] = None):
        self.filesystem = filesystem or FilesystemAdapter()
        self.resolver = resolver or ConflictResolver(self.filesystem)
        self.chooser = chooser
        self.progress = progress

    def move_all(
        self,
        root: Path,
        files: Sequence[FileRef],
        extension_filter: AbstractSet[str],
        strategy: ConflictStrategy
    ) -> MoveSummary:
        """
        Move every selected file into ``root``.

        Args:
            root: Target directory receiving the files
            files: Candidate files, processed in the given order
            extension_filter: Lower-cased extensions to keep; empty keeps all
            strategy: Configured conflict strategy

        Returns:
            Aggregated counts. ``nothing_to_move`` is set when the filter
            left no files, in which case the filesystem is not touched.
        """
        root = Path(root)
        selected = filter_by_extension(files, extension_filter)
        if not selected:
            logger.info("Nothing to move")
            return MoveSummary.empty()

        if strategy is ConflictStrategy.ASK and self.chooser is None:
            raise ConfigurationError("The 'ask' conflict action needs an operator prompt")

        state = RunState()
        total = len(selected)
        logger.info(f"Moving {total} files into {root} (on conflict: {strategy.value})")

        for index, file_ref in enumerate(selected, start=1):
            outcome = self._process_file(root, file_ref, strategy, state)
            state.record(outcome)

            emit_progress(self.progress, ProgressEvent(
                phase=ProgressStage.MOVE,
                current=index,
                total=total,
                detail=file_ref.name,
                error=outcome.status is OutcomeStatus.FAILED,
            ))

        summary = MoveSummary.from_state(state)
        logger.info(f"Moved {summary.moved}, skipped {summary.skipped}, errors {summary.errors}")
        return summary

    def _process_file(self, root: Path, file_ref: FileRef,
                      configured: ConflictStrategy, state: RunState) -> MoveOutcome:
        """Resolve and move a single file; failures become FAILED outcomes."""
        source = file_ref.full_path
        destination = root / file_ref.name

        try:
            strategy = state.effective_strategy(configured)
            if strategy is ConflictStrategy.ASK and self.resolver.has_conflict(destination, state.claimed):
                choice = self.chooser(file_ref, destination)
                strategy = state.apply_choice(choice)
                if choice.apply_to_all:
                    logger.info(f"Using '{strategy.value}' for all remaining conflicts")

            resolution = self.resolver.resolve(source, destination, strategy, state.claimed)

            if resolution.action is ResolutionAction.SKIP:
                logger.info(f"Skipped {source}: {destination.name} already exists")
                return MoveOutcome(source, None, OutcomeStatus.SKIPPED, "destination exists")

            target = resolution.destination
            if resolution.action is ResolutionAction.OVERWRITE:
                self.filesystem.replace(source, target)
                logger.info(f"Overwrote {target} with {source}")
                return MoveOutcome(source, target, OutcomeStatus.OVERWRITTEN)

            self.filesystem.move(source, target)
            if target != destination:
                logger.info(f"Moved {source} -> {target} (renamed)")
                return MoveOutcome(source, target, OutcomeStatus.RENAMED)

            logger.info(f"Moved {source} -> {target}")
            return MoveOutcome(source, target, OutcomeStatus.MOVED)

        except (OSError, FileOperationError) as e:
            self._check_root(root)
            logger.warning(f"Failed to move {source}: {e}")
            return MoveOutcome(source, None, OutcomeStatus.FAILED, str(e))

    def _check_root(self, root: Path) -> None:
        """Escalate when the failure was caused by losing the target itself."""
        if not self.filesystem.is_dir(root):
            raise TargetUnavailableError(f"Target directory is no longer accessible: {root}")
