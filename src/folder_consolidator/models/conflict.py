"""Conflict handling and move result models."""

from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple
from enum import Enum

from ..exceptions import ConfigurationError


class ConflictStrategy(Enum):
    """How to handle a destination name that is already taken."""
    RENAME = "rename"
    OVERWRITE = "overwrite"
    SKIP = "skip"
    ASK = "ask"

    @classmethod
    def parse(cls, value) -> "ConflictStrategy":
        """Parse a strategy name in any case."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ConfigurationError(
                f"Unknown conflict action '{value}' (expected one of: {choices})"
            )


class ResolutionAction(Enum):
    """What the mover should do with a single file."""
    MOVE = "move"
    OVERWRITE = "overwrite"
    SKIP = "skip"


@dataclass(frozen=True)
class Resolution:
    """Decision for one file."""
    action: ResolutionAction
    destination: Optional[Path] = None


@dataclass(frozen=True)
class ConflictChoice:
    """Answer obtained from the operator for a conflict."""
    strategy: ConflictStrategy
    apply_to_all: bool = False

    def __post_init__(self):
        if self.strategy is ConflictStrategy.ASK:
            raise ValueError("A conflict choice must name a concrete strategy")


class OutcomeStatus(Enum):
    """Per-file outcome reported by the batch mover."""
    MOVED = "moved"
    RENAMED = "renamed"
    OVERWRITTEN = "overwritten"
    SKIPPED = "skipped"
    FAILED = "failed"

    @property
    def counts_as_moved(self) -> bool:
        return self in (OutcomeStatus.MOVED, OutcomeStatus.RENAMED, OutcomeStatus.OVERWRITTEN)


@dataclass(frozen=True)
class MoveOutcome:
    """Result of processing one file."""
    source: Path
    destination: Optional[Path]
    status: OutcomeStatus
    message: str = ""


@dataclass
class RunState:
    """Mutable state for a single batch.

    A new instance is created for every batch so sticky answers and
    claimed destinations never carry over to the next run.
    """
    sticky_strategy: Optional[ConflictStrategy] = None
    moved: int = 0
    skipped: int = 0
    errors: int = 0
    claimed: Set[Path] = field(default_factory=set)
    outcomes: List[MoveOutcome] = field(default_factory=list)

    def effective_strategy(self, configured: ConflictStrategy) -> ConflictStrategy:
        """Return the sticky strategy if one was chosen, else the configured one."""
        return self.sticky_strategy or configured

    def apply_choice(self, choice: ConflictChoice) -> ConflictStrategy:
        """Record an operator answer and return the strategy to use now."""
        if choice.apply_to_all:
            self.sticky_strategy = choice.strategy
        return choice.strategy

    def record(self, outcome: MoveOutcome) -> None:
        """Add an outcome and bump the matching counter."""
        self.outcomes.append(outcome)
        if outcome.status.counts_as_moved:
            self.moved += 1
            if outcome.destination is not None:
                self.claimed.add(outcome.destination)
        elif outcome.status is OutcomeStatus.SKIPPED:
            self.skipped += 1
        else:
            self.errors += 1


@dataclass(frozen=True)
class MoveSummary:
    """Aggregated counts of a finished batch."""
    moved: int = 0
    skipped: int = 0
    errors: int = 0
    outcomes: Tuple[MoveOutcome, ...] = ()
    nothing_to_move: bool = False

    @classmethod
    def from_state(cls, state: RunState) -> "MoveSummary":
        return cls(
            moved=state.moved,
            skipped=state.skipped,
            errors=state.errors,
            outcomes=tuple(state.outcomes),
        )

    @classmethod
    def empty(cls) -> "MoveSummary":
        """Summary for a batch that had no files to process."""
        return cls(nothing_to_move=True)

    @property
    def total(self) -> int:
        return self.moved + self.skipped + self.errors

    def failures(self) -> List[MoveOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.FAILED]
