"""Main orchestration logic for a consolidation run."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import logging

from ..models.config import Config
from ..models.conflict import ConflictStrategy, MoveSummary
from ..models.file_ref import DirectoryAnalysis
from ..progress_tracker import ProgressCallback
from ..ui.prompts import ConsoleOperatorPrompt, UnattendedOperatorPrompt
from .analyzer import DirectoryAnalyzer
from .mover import BatchMover, filter_by_extension
from .reaper import EmptyDirectoryReaper

logger = logging.getLogger(__name__)


class RunStatus(Enum):
    """How a run ended. None of these is an error."""
    COMPLETED = "completed"
    NOTHING_TO_MOVE = "nothing_to_move"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ConsolidationResult:
    """Everything the caller needs to report on a run."""
    status: RunStatus
    analysis: Optional[DirectoryAnalysis] = None
    summary: MoveSummary = field(default_factory=MoveSummary)
    directories_removed: int = 0
    cleanup_errors: int = 0


class Consolidator:
    """Runs analysis, batch move and cleanup for one configuration."""

    def __init__(self,
                 config: Config,
                 prompt=None,
                 analyzer: Optional[DirectoryAnalyzer] = None,
                 mover: Optional[BatchMover] = None,
                 reaper: Optional[EmptyDirectoryReaper] = None,
                 progress: Optional[ProgressCallback] = None):
        self.config = config
        if config.force_no_prompt:
            self.prompt = UnattendedOperatorPrompt(config.unattended_conflict_action)
        else:
            self.prompt = prompt or ConsoleOperatorPrompt()
        self.analyzer = analyzer or DirectoryAnalyzer(progress=progress)
        self.mover = mover or BatchMover(progress=progress)
        self.reaper = reaper or EmptyDirectoryReaper(progress=progress)

    def run(self) -> ConsolidationResult:
        """Execute the run.

        Raises:
            ConfigurationError: If the target is invalid
            ScanError: If the target cannot be read
            TargetUnavailableError: If the target disappears mid-run
        """
        config = self.config
        config.validate()
        target = config.target_directory

        analysis = self.analyzer.analyze(target)
        if not analysis.has_subdir_files:
            logger.info(f"No files found in subdirectories of {target}")
            return ConsolidationResult(RunStatus.NOTHING_TO_MOVE, analysis, MoveSummary.empty())

        extensions = config.extension_filter
        if not extensions and not config.force_no_prompt:
            extensions = self.prompt.select_extensions(analysis)

        selected = filter_by_extension(analysis.subdir_files, extensions)
        if not selected:
            logger.info("No files match the extension filter")
            return ConsolidationResult(RunStatus.NOTHING_TO_MOVE, analysis, MoveSummary.empty())

        if not config.force_no_prompt:
            if not self.prompt.confirm(f"Move {len(selected)} files into {target}?", default=True):
                logger.info("Run cancelled by user")
                return ConsolidationResult(RunStatus.CANCELLED, analysis, MoveSummary())

        if config.conflict_action is ConflictStrategy.ASK:
            self.mover.chooser = self.prompt.choose_conflict

        summary = self.mover.move_all(target, analysis.subdir_files, extensions, config.conflict_action)

        removed = 0
        cleanup_errors = 0
        if summary.moved > 0 and config.remove_empty_directories:
            self.reaper.confirm = self.prompt.confirm
            removed = self.reaper.remove_empty(target, auto_confirm=config.force_no_prompt)
            cleanup_errors = self.reaper.errors

        return ConsolidationResult(
            status=RunStatus.COMPLETED,
            analysis=analysis,
            summary=summary,
            directories_removed=removed,
            cleanup_errors=cleanup_errors,
        )
