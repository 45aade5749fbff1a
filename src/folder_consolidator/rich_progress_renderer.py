"""Rich progress renderer for the consolidate CLI."""

from typing import Dict, Optional
from rich.progress import Progress, TaskID, BarColumn, TextColumn, MofNCompleteColumn, \
    TimeElapsedColumn, SpinnerColumn
from rich.console import Console
from rich.panel import Panel

from .progress_tracker import ProgressEvent, ProgressStage

STAGE_DESCRIPTIONS = {
    ProgressStage.ANALYSIS: "Analyzing",
    ProgressStage.MOVE: "Moving files",
    ProgressStage.CLEANUP: "Removing empty folders",
}


class RichProgressRenderer:
    """Renders progress events using Rich library."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.progress: Optional[Progress] = None
        self.stage_tasks: Dict[ProgressStage, TaskID] = {}

    def render(self, event: ProgressEvent):
        """Render one progress event."""
        if not self.progress:
            self.progress = Progress(
                SpinnerColumn(),
                TextColumn("[bold blue]{task.description}"),
                BarColumn(),
                MofNCompleteColumn(),
                TextColumn("•"),
                TimeElapsedColumn(),
                console=self.console,
                transient=True
            )
            self.progress.start()

        total = event.total or None
        task_id = self.stage_tasks.get(event.phase)
        if task_id is None:
            task_id = self.progress.add_task(STAGE_DESCRIPTIONS[event.phase], total=total)
            self.stage_tasks[event.phase] = task_id

        description = STAGE_DESCRIPTIONS[event.phase]
        if event.detail and event.phase is ProgressStage.MOVE:
            description = f"{description} ({event.detail})"
        self.progress.update(task_id, completed=event.current, total=total, description=description)

    def clear(self):
        """Stop and clear the progress display."""
        if self.progress:
            self.progress.stop()
            self.progress = None
            self.stage_tasks = {}

    def finish(self, moved: int, skipped: int, errors: int, directories_removed: int = 0,
               elapsed: Optional[float] = None):
        """Display the final summary panel."""
        self.clear()

        lines = [
            f"[bold]Moved:[/bold] {moved:,}",
            f"[bold]Skipped:[/bold] {skipped:,}",
        ]
        if errors:
            lines.append(f"[bold red]Errors:[/bold red] {errors:,}")
        else:
            lines.append("[bold]Errors:[/bold] 0")
        if directories_removed:
            lines.append(f"[bold]Empty folders removed:[/bold] {directories_removed:,}")
        if elapsed is not None:
            lines.append(f"[bold]Duration:[/bold] {self._format_duration(elapsed)}")

        style = "red" if errors else "green"
        panel = Panel(
            "\n".join(lines),
            title=f"[bold {style}]Consolidation Complete[/bold {style}]",
            border_style=style,
            padding=(1, 2)
        )
        self.console.print(panel)

    def _format_duration(self, seconds: float) -> str:
        """Format duration as human-readable string."""
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        secs = int(seconds % 60)

        if hours > 0:
            return f"{hours}h {minutes:02d}m {secs:02d}s"
        elif minutes > 0:
            return f"{minutes:02d}m {secs:02d}s"
        else:
            return f"{secs:02d}s"
