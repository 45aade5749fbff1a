"""Command line interface for folder consolidator."""

import sys
from enum import IntEnum
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from . import __version__
from .core.analyzer import DirectoryAnalyzer
from .core.consolidator import Consolidator, ConsolidationResult, RunStatus
from .exceptions import ConfigurationError, ConsolidatorError
from .logging_config import configure_logging
from .models.config import Config, load_config, normalize_extensions
from .models.conflict import ConflictStrategy
from .models.file_ref import DirectoryAnalysis
from .progress_tracker import ProgressTracker
from .rich_progress_renderer import RichProgressRenderer
from .ui.prompts import ConsoleOperatorPrompt

console = Console()

STRATEGY_CHOICES = [s.value for s in ConflictStrategy]
UNATTENDED_CHOICES = [s.value for s in ConflictStrategy if s is not ConflictStrategy.ASK]


class ExitCode(IntEnum):
    """Process exit status."""
    OK = 0
    FATAL = 1
    CONFIGURATION_ERROR = 2


@click.group()
@click.version_option(version=__version__)
def cli():
    """Move files out of nested subdirectories into one folder."""
    pass


def build_config(
    target: Optional[Path],
    config_path: Optional[Path],
    extensions: Tuple[str, ...],
    on_conflict: Optional[str],
    unattended_answer: Optional[str],
    remove_empty: Optional[bool],
    force: bool,
    log_file: Optional[Path],
) -> Config:
    """Merge a config file (if any) with command line overrides."""
    if config_path:
        cfg = load_config(config_path)
        if target is not None:
            cfg.target_directory = target
    elif target is not None:
        cfg = Config(target_directory=target)
    else:
        raise ConfigurationError("A target directory or --config file is required")

    if extensions:
        cfg.extension_filter = normalize_extensions(extensions)
    if on_conflict is not None:
        cfg.conflict_action = ConflictStrategy.parse(on_conflict)
    if unattended_answer is not None:
        cfg.unattended_conflict_action = ConflictStrategy.parse(unattended_answer)
    if remove_empty is not None:
        cfg.remove_empty_directories = remove_empty
    if force:
        cfg.force_no_prompt = True
    if log_file is not None:
        cfg.log_file = log_file
    return cfg


@cli.command()
@click.argument('target', required=False, type=click.Path(path_type=Path))
@click.option(
    '--config', 'config_path',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='JSON configuration file'
)
@click.option(
    '--ext', 'extensions',
    multiple=True,
    help='Extension to move (repeatable, or comma separated). Default: ask, or all with --force'
)
@click.option(
    '--on-conflict',
    type=click.Choice(STRATEGY_CHOICES, case_sensitive=False),
    default=None,
    help='What to do when a file name is already taken (default: ask)'
)
@click.option(
    '--unattended-answer',
    type=click.Choice(UNATTENDED_CHOICES, case_sensitive=False),
    default=None,
    help='Answer used for "ask" conflicts when running with --force (default: skip)'
)
@click.option(
    '--remove-empty/--keep-empty',
    default=None,
    help='Delete subdirectories left empty after moving'
)
@click.option(
    '--force',
    is_flag=True,
    help='Never prompt'
)
@click.option(
    '--log-file',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Write a detailed log to this file'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Verbose output'
)
def consolidate(
    target: Optional[Path],
    config_path: Optional[Path],
    extensions: Tuple[str, ...],
    on_conflict: Optional[str],
    unattended_answer: Optional[str],
    remove_empty: Optional[bool],
    force: bool,
    log_file: Optional[Path],
    verbose: bool
):
    """Move files from the subdirectories of TARGET into TARGET itself."""
    try:
        cfg = build_config(target, config_path, extensions, on_conflict,
                           unattended_answer, remove_empty, force, log_file)
        configure_logging(verbose=verbose, log_file=cfg.log_file)
        cfg.validate()

        _print_welcome(cfg)

        tracker = ProgressTracker()
        renderer = RichProgressRenderer(console)
        tracker.add_render_callback(renderer.render)
        prompt = ConsoleOperatorPrompt(console, on_prompt=renderer.clear)

        consolidator = Consolidator(cfg, prompt=prompt, progress=tracker)
        try:
            result = consolidator.run()
        finally:
            renderer.clear()

        if result.analysis is not None:
            _print_analysis(result.analysis)

        if result.status is RunStatus.NOTHING_TO_MOVE:
            console.print("[yellow]Nothing to move.[/yellow]")
            return

        if result.status is RunStatus.CANCELLED:
            console.print("[yellow]Cancelled[/yellow]")
            return

        renderer.finish(
            result.summary.moved,
            result.summary.skipped,
            result.summary.errors,
            result.directories_removed,
            elapsed=tracker.elapsed,
        )
        _print_failures(result)

    except ConfigurationError as e:
        console.print(f"\n[red]Configuration error: {e}[/red]")
        sys.exit(ExitCode.CONFIGURATION_ERROR)
    except ConsolidatorError as e:
        console.print(f"\n[red]Error: {e}[/red]")
        sys.exit(ExitCode.FATAL)
    except (click.exceptions.Abort, KeyboardInterrupt):
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(ExitCode.FATAL)
    except Exception as e:
        console.print(f"\n[red]Unexpected error: {e}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(ExitCode.FATAL)


@cli.command()
@click.argument('target', type=click.Path(path_type=Path))
@click.option(
    '--verbose',
    is_flag=True,
    help='Verbose output'
)
def analyze(target: Path, verbose: bool):
    """Show what TARGET contains without changing anything."""
    configure_logging(verbose=verbose)
    try:
        analysis = DirectoryAnalyzer().analyze(target)
    except ConfigurationError as e:
        console.print(f"\n[red]Configuration error: {e}[/red]")
        sys.exit(ExitCode.CONFIGURATION_ERROR)
    except ConsolidatorError as e:
        console.print(f"\n[red]Error: {e}[/red]")
        sys.exit(ExitCode.FATAL)

    _print_analysis(analysis)
    if analysis.extension_histogram:
        console.print("\n[bold]File Types:[/bold]")
        for ext, count in analysis.extension_histogram:
            console.print(f"  {ext}: {count}")


def _print_welcome(cfg: Config):
    extensions = ", ".join(sorted(e or "(no extension)" for e in cfg.extension_filter)) or "all"
    lines = [
        f"Target: {cfg.target_directory}",
        f"Extensions: {extensions}",
        f"On conflict: {cfg.conflict_action.value}",
        f"Remove empty folders: {'Yes' if cfg.remove_empty_directories else 'No'}",
        f"Prompts: {'Off' if cfg.force_no_prompt else 'On'}",
    ]
    console.print(Panel("\n".join(lines), title="[bold cyan]Folder Consolidator[/bold cyan]",
                        border_style="cyan"))


def _print_analysis(analysis: DirectoryAnalysis):
    table = Table(title="Directory Analysis")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Subdirectories", str(analysis.subdirectory_count))
    table.add_row("Total files", str(analysis.total_file_count))
    table.add_row("Files in root", str(analysis.root_file_count))
    table.add_row("Files in subdirectories", str(analysis.subdir_file_count))
    if analysis.scan_errors:
        table.add_row("Unreadable entries", f"[red]{analysis.scan_errors}[/red]")

    console.print(table)


def _print_failures(result: ConsolidationResult):
    failures = result.summary.failures()
    if failures:
        console.print("\n[red]Errors encountered:[/red]")
        for outcome in failures[:10]:  # Show first 10 errors
            console.print(f"  • {outcome.source}: {outcome.message}")
        if len(failures) > 10:
            console.print(f"  ... and {len(failures) - 10} more errors")

    if result.cleanup_errors:
        console.print(f"\n[yellow]{result.cleanup_errors} empty folders could not be removed[/yellow]")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
