"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich library for tables, spinners, colored output, and formatted
text. Supports verbosity levels and --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner
from rich.table import Table
from rich.tree import Tree

from src.content_tree.models import ContentRecord, TocEntry


class OutputHandler:
    """Handles all terminal output using Rich library.

    Provides methods for displaying messages, spinners, record tables and
    tables of contents, with color coding and verbosity level control.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Listed 3 documents")
        >>> with handler.spinner("Fetching tree..."):
        ...     # Do work
        ...     pass
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
        self.err_console = Console(
            stderr=True,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red on stderr."""
        self.err_console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow on stderr."""
        self.err_console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.err_console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.err_console.print(f"[dim]{message}[/dim]")

    def print(self, message: str) -> None:
        """Display message without markup processing."""
        self.console.print(message, markup=False)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for single operations.

        Args:
            message: Message to display with spinner

        Example:
            >>> with handler.spinner("Listing documents..."):
            ...     # Do work
            ...     pass
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.err_console, refresh_per_second=10, transient=True):
            yield

    def print_records(self, records: List[ContentRecord], sort_by: str = "created") -> None:
        """Display records as a table.

        Args:
            records: Records in display order
            sort_by: Date field the records are ordered by (highlighted)
        """
        if not records:
            self.console.print("[yellow]No documents found[/yellow]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Path")
        table.add_column("Title")
        table.add_column("Created", style="bold" if sort_by == "created" else None)
        table.add_column("Updated", style="bold" if sort_by == "updated" else None)
        table.add_column("Read", justify="right")
        table.add_column("Sha", style="dim")

        for record in records:
            table.add_row(
                escape(record.full_path or "-"),
                escape(record.title) if record.title else "[dim]untitled[/dim]",
                _short_date(record.created),
                _short_date(record.updated),
                f"{record.reading_time} min",
                record.id[:7],
            )

        self.console.print(table)
        self.console.print(f"\n[bold]{len(records)}[/bold] document(s)")

    def print_record(self, record: ContentRecord) -> None:
        """Display one record's metadata and table of contents."""
        self.console.print(f"[bold]{escape(record.title or record.full_path or record.id)}[/bold]")
        self.console.print(f"  Path: {record.full_path or '-'}", markup=False)
        self.console.print(f"  Sha: {record.id}", markup=False)
        self.console.print(f"  Created: {record.created or '-'}", markup=False)
        self.console.print(f"  Updated: {record.updated or '-'}", markup=False)
        self.console.print(f"  Reading time: {record.reading_time} min", markup=False)
        self.console.print(f"  Frontmatter: {record.frontmatter}", markup=False)

        if record.toc:
            tree = Tree("[bold]Contents[/bold]")
            self._add_toc(tree, record.toc)
            self.console.print(tree)

    def _add_toc(self, parent: Tree, entries: List[TocEntry]) -> None:
        for entry in entries:
            branch = parent.add(f"{escape(entry.title)} [dim]{escape(entry.anchor)}[/dim]")
            self._add_toc(branch, entry.children)


def _short_date(value: Optional[str]) -> str:
    """Date part of an ISO 8601 timestamp for table cells."""
    return value[:10] if value else "-"
