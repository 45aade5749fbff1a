"""
Progress events emitted by the consolidation core.
The core only emits events; rendering is left to registered callbacks.
"""
import time
import logging
from typing import Callable, Dict, List, Optional
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class ProgressStage(Enum):
    """Phases of a consolidation run."""
    ANALYSIS = "analysis"
    MOVE = "move"
    CLEANUP = "cleanup"


@dataclass(frozen=True)
class ProgressEvent:
    """One progress signal: ``current`` of ``total`` items in ``phase`` done."""
    phase: ProgressStage
    current: int
    total: int
    detail: str = ""
    error: bool = False


ProgressCallback = Callable[[ProgressEvent], None]


@dataclass
class StageProgress:
    """Progress information for a specific stage."""
    stage: ProgressStage
    completed: int = 0
    total: int = 0
    errors: int = 0


class ProgressTracker:
    """
    Collects progress events and forwards them to render callbacks.
    """

    def __init__(self):
        self.stages: Dict[ProgressStage, StageProgress] = {}
        self.current_stage: Optional[ProgressStage] = None
        self.render_callbacks: List[ProgressCallback] = []
        self.start_time = time.time()

    def add_render_callback(self, callback: ProgressCallback):
        """Add a callback for rendering progress updates."""
        self.render_callbacks.append(callback)

    def __call__(self, event: ProgressEvent):
        self.emit(event)

    def emit(self, event: ProgressEvent):
        """Record an event and pass it on to all callbacks."""
        stage = self.stages.get(event.phase)
        if stage is None:
            stage = StageProgress(stage=event.phase, total=event.total)
            self.stages[event.phase] = stage

        stage.total = event.total
        stage.completed = event.current
        if event.error:
            stage.errors += 1
        self.current_stage = event.phase

        for callback in self.render_callbacks:
            try:
                callback(event)
            except Exception as e:
                # Rendering must never break file processing
                logger.debug(f"Progress callback failed: {e}")

    @property
    def elapsed(self) -> float:
        return time.time() - self.start_time


def emit_progress(callback: Optional[ProgressCallback], event: ProgressEvent) -> None:
    """Send an event to an optional callback."""
    if callback is not None:
        callback(event)
