"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Storage responses are printed as JSON; status messages are color coded and
filtered by verbosity level. Supports the --no-color flag.
"""

from typing import Any, Dict

from rich.console import Console
from rich.markup import escape


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        no_color: Whether color and JSON highlighting are disabled
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Document stored")
        >>> handler.print_json({"id": "Blog.Hello"})
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.no_color = no_color
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print_json(self, data: Dict[str, Any]) -> None:
        """Display a storage response as indented JSON.

        Args:
            data: JSON-serializable mapping (a response's to_dict())
        """
        self.console.print_json(data=data, highlight=not self.no_color)

    def print_list_summary(self, total_rows: int, space: str) -> None:
        """Display the number of documents found in a space."""
        if total_rows == 0:
            self.console.print(f"[yellow]No documents in space {escape(space)}[/yellow]")
        else:
            self.info(f"{total_rows} document(s) in space {space}")
