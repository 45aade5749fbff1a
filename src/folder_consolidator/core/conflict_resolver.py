"""Decides what happens to a file whose destination name may be taken.

The resolver is a pure decision step. It never prompts: an ``ask``
strategy has to be narrowed to a concrete one by the caller before a
conflicting file is resolved.
"""

from pathlib import Path
from typing import AbstractSet, Optional
import logging

from ..exceptions import FileOperationError
from ..infrastructure.adapters.filesystem_adapter import FilesystemAdapter
from ..models.conflict import ConflictStrategy, Resolution, ResolutionAction

logger = logging.getLogger(__name__)


class ConflictResolver:
    """Turns a (source, destination, strategy) triple into a Resolution."""

    def __init__(self, filesystem: Optional[FilesystemAdapter] = None):
        self.filesystem = filesystem or FilesystemAdapter()

    def is_taken(self, path: Path, claimed: AbstractSet[Path] = frozenset()) -> bool:
        """Check whether ``path`` exists or was already used in this batch."""
        if path in claimed:
            return True
        try:
            return self.filesystem.exists(path)
        except OSError as e:
            raise FileOperationError(f"Cannot check whether {path} exists: {e}") from e

    def has_conflict(self, destination: Path, claimed: AbstractSet[Path] = frozenset()) -> bool:
        return self.is_taken(destination, claimed)

    def resolve(
        self,
        source: Path,
        destination: Path,
        strategy: ConflictStrategy,
        claimed: AbstractSet[Path] = frozenset()
    ) -> Resolution:
        """
        Decide how to move ``source`` to ``destination``.

        Args:
            source: File being relocated
            destination: Intended destination path
            strategy: Concrete strategy to apply on conflict
            claimed: Destinations already used earlier in the same batch

        Returns:
            The resolution for this file

        Raises:
            FileOperationError: If an existence check fails
            ValueError: If a conflict exists and ``strategy`` is still ``ask``
        """
        if not self.is_taken(destination, claimed):
            return Resolution(ResolutionAction.MOVE, destination)

        if strategy is ConflictStrategy.RENAME:
            candidate = self.next_free_name(destination, claimed)
            logger.debug(f"{destination.name} is taken, {source.name} will become {candidate.name}")
            return Resolution(ResolutionAction.MOVE, candidate)

        if strategy is ConflictStrategy.OVERWRITE:
            return Resolution(ResolutionAction.OVERWRITE, destination)

        if strategy is ConflictStrategy.SKIP:
            return Resolution(ResolutionAction.SKIP, None)

        raise ValueError(f"Conflict for {destination} needs a concrete strategy, got {strategy.value}")

    def next_free_name(self, destination: Path, claimed: AbstractSet[Path] = frozenset()) -> Path:
        """
        Find ``{stem}_{n}{suffix}`` with the smallest n >= 1 that is free.

        The search has no upper bound; it ends once a free name is found.
        """
        base = destination.stem
        ext = destination.suffix
        parent = destination.parent
        counter = 1

        while True:
            candidate = parent / f"{base}_{counter}{ext}"
            if not self.is_taken(candidate, claimed):
                return candidate
            counter += 1
