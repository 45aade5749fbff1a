"""Data models for folder consolidator."""

from .file_ref import FileRef, DirectoryAnalysis, NO_EXTENSION
from .conflict import (
    ConflictStrategy,
    ConflictChoice,
    ResolutionAction,
    Resolution,
    RunState,
    OutcomeStatus,
    MoveOutcome,
    MoveSummary,
)
from .config import Config, load_config, save_config, normalize_extensions

__all__ = [
    "FileRef",
    "DirectoryAnalysis",
    "NO_EXTENSION",
    "ConflictStrategy",
    "ConflictChoice",
    "ResolutionAction",
    "Resolution",
    "RunState",
    "OutcomeStatus",
    "MoveOutcome",
    "MoveSummary",
    "Config",
    "load_config",
    "save_config",
    "normalize_extensions",
]
