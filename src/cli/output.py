"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich for colored status lines, a progress bar for batch conversion,
and the end-of-run summary. Supports verbosity levels and --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator, Tuple

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
)

from src.cli.models import BatchConversionResult


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Converted page.json -> page.md")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green.

        Args:
            message: Success message to display
        """
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red.

        Args:
            message: Error message to display
        """
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message, markup=False)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, message: str) -> None:
        """Display message without Rich markup processing.

        Used for converted documents written to stdout, whose brackets and
        :name: sequences must come through verbatim.
        """
        self.console.print(message, markup=False, emoji=False, soft_wrap=True)

    @contextmanager
    def progress_bar(self, total: int, description: str = "Converting") -> Iterator[Tuple[Progress, TaskID]]:
        """Display progress bar for batch conversion.

        Args:
            total: Total number of files to convert
            description: Description text for progress bar

        Yields:
            Progress instance and the ID of its task, already sized to total
        """
        progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=self.console,
            disable=self.verbosity >= 2,
        )
        with progress:
            task = progress.add_task(description, total=total)
            yield progress, task

    def print_summary(self, result: BatchConversionResult) -> None:
        """Display batch conversion summary with color coding.

        Args:
            result: Outcome of a directory conversion
        """
        self.console.print("\n[bold]Conversion Summary:[/bold]")

        if result.converted:
            self.console.print(f"  [green]✓[/green] Converted: {len(result.converted)} file(s)")

        if result.failed:
            self.console.print(f"  [red]✗[/red] Failed: {len(result.failed)} file(s)")
            for item in result.failed:
                self.console.print(f"    • {item.source}: {item.error}", markup=False)

        if result.total == 0:
            self.console.print("\n[yellow]No files to convert[/yellow]")
        elif result.failed:
            self.console.print("\n[red]Conversion completed with errors[/red]")
        else:
            self.console.print("\n[green]Conversion completed successfully[/green]")
