"""Operator prompts used when a run needs a decision."""

from pathlib import Path
from typing import Callable, Dict, Optional, Set, Tuple

from rich.console import Console
from rich.prompt import Prompt, Confirm
from rich.table import Table

from ..models.config import normalize_extensions
from ..models.conflict import ConflictChoice, ConflictStrategy
from ..models.file_ref import DirectoryAnalysis, FileRef

# key -> (strategy, apply to all, label)
CONFLICT_MENU: Dict[str, Tuple[ConflictStrategy, bool, str]] = {
    "1": (ConflictStrategy.RENAME, False, "Rename the incoming file"),
    "2": (ConflictStrategy.OVERWRITE, False, "Overwrite the existing file"),
    "3": (ConflictStrategy.SKIP, False, "Skip this file"),
    "4": (ConflictStrategy.RENAME, True, "Rename for all remaining conflicts"),
    "5": (ConflictStrategy.OVERWRITE, True, "Overwrite for all remaining conflicts"),
    "6": (ConflictStrategy.SKIP, True, "Skip all remaining conflicts"),
}


class ConsoleOperatorPrompt:
    """Interactive prompts on the terminal via rich."""

    def __init__(self, console: Optional[Console] = None,
                 on_prompt: Optional[Callable[[], None]] = None):
        self.console = console or Console()
        # Called before asking, e.g. to stop a live progress display
        self.on_prompt = on_prompt

    def _before_prompt(self) -> None:
        if self.on_prompt is not None:
            self.on_prompt()

    def confirm(self, message: str, default: bool = False) -> bool:
        self._before_prompt()
        return Confirm.ask(message, default=default, console=self.console)

    def choose_conflict(self, file_ref: FileRef, destination: Path) -> ConflictChoice:
        """Ask what to do with a file whose name is already taken."""
        self._before_prompt()
        self.console.print(
            f"\n[yellow]Conflict:[/yellow] [bold]{destination.name}[/bold] already exists in {destination.parent}"
        )
        self.console.print(f"[dim]Incoming: {file_ref.full_path}[/dim]")

        table = Table(show_header=False, box=None)
        table.add_column("Key", style="cyan")
        table.add_column("Action")
        for key, (_, _, label) in CONFLICT_MENU.items():
            table.add_row(key, label)
        self.console.print(table)

        answer = Prompt.ask(
            "Choose an action",
            choices=list(CONFLICT_MENU),
            default="1",
            console=self.console,
        )
        strategy, apply_to_all, _ = CONFLICT_MENU[answer]
        return ConflictChoice(strategy, apply_to_all)

    def select_extensions(self, analysis: DirectoryAnalysis) -> Set[str]:
        """Let the operator pick which extensions to move; blank means all."""
        self._before_prompt()
        table = Table(title="File types in subdirectories")
        table.add_column("Extension", style="cyan")
        table.add_column("Files", justify="right")
        for ext, count in analysis.extension_histogram:
            table.add_row(ext, str(count))
        self.console.print(table)

        answer = Prompt.ask(
            "Extensions to move (comma separated, blank for all)",
            default="",
            show_default=False,
            console=self.console,
        )
        return normalize_extensions([answer])


class UnattendedOperatorPrompt:
    """Preset answers for runs that must never block on input."""

    def __init__(self,
                 conflict_answer: ConflictStrategy = ConflictStrategy.SKIP,
                 confirm_answer: bool = True,
                 extensions: Optional[Set[str]] = None):
        self.choice = ConflictChoice(conflict_answer, apply_to_all=True)
        self.confirm_answer = confirm_answer
        self.extensions = set(extensions or ())

    def confirm(self, message: str, default: bool = False) -> bool:
        return self.confirm_answer

    def choose_conflict(self, file_ref: FileRef, destination: Path) -> ConflictChoice:
        return self.choice

    def select_extensions(self, analysis: DirectoryAnalysis) -> Set[str]:
        return set(self.extensions)
