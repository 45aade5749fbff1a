"""Core consolidation modules."""

from .analyzer import DirectoryAnalyzer
from .conflict_resolver import ConflictResolver
from .mover import BatchMover, filter_by_extension
from .reaper import EmptyDirectoryReaper
from .consolidator import Consolidator, ConsolidationResult, RunStatus

__all__ = [
    'DirectoryAnalyzer',
    'ConflictResolver',
    'BatchMover',
    'filter_by_extension',
    'EmptyDirectoryReaper',
    'Consolidator',
    'ConsolidationResult',
    'RunStatus',
]
