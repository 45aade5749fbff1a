"""Folder Consolidator

Moves files out of nested subdirectories into a single target directory,
resolving name collisions and optionally removing folders left empty.
"""

__version__ = "0.1.0"

from .core.analyzer import DirectoryAnalyzer
from .core.conflict_resolver import ConflictResolver
from .core.mover import BatchMover, filter_by_extension
from .core.reaper import EmptyDirectoryReaper
from .core.consolidator import Consolidator, ConsolidationResult, RunStatus

from .models.config import Config, load_config, save_config
from .models.conflict import (
    ConflictStrategy,
    ConflictChoice,
    Resolution,
    ResolutionAction,
    RunState,
    MoveSummary,
    MoveOutcome,
    OutcomeStatus
)
from .models.file_ref import FileRef, DirectoryAnalysis

__all__ = [
    # Core components
    "DirectoryAnalyzer",
    "ConflictResolver",
    "BatchMover",
    "EmptyDirectoryReaper",
    "Consolidator",

    # Types and enums
    "ConsolidationResult",
    "RunStatus",
    "Config",
    "ConflictStrategy",
    "ConflictChoice",
    "Resolution",
    "ResolutionAction",
    "RunState",
    "MoveSummary",
    "MoveOutcome",
    "OutcomeStatus",
    "FileRef",
    "DirectoryAnalysis",

    # Utilities
    "filter_by_extension",
    "load_config",
    "save_config"
]
