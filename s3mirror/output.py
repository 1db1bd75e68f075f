"""Console output formatting for the s3mirror CLI."""

import json
from typing import Any

from rich.console import Console

from .utils import format_size


class OutputFormatter:
    """Formats messages for the terminal, or as JSON for scripting."""

    def __init__(self, json_output: bool = False, quiet: bool = False):
        """Initialize the output formatter.

        Args:
            json_output: Emit machine-readable JSON instead of text
            quiet: Suppress informational messages
        """
        self.json_output = json_output
        self.quiet = quiet
        self.console = Console(highlight=False)
        self.err_console = Console(stderr=True, highlight=False)

    def print(self, message: str) -> None:
        """Print a plain message, unless JSON output is active."""
        if not self.json_output:
            self.console.print(message, markup=False, soft_wrap=True)

    def info(self, message: str) -> None:
        """Print an informational message."""
        if not self.quiet and not self.json_output:
            self.console.print(message, markup=False, soft_wrap=True)

    def success(self, message: str) -> None:
        """Print a success message in green."""
        if not self.quiet and not self.json_output:
            self.console.print(
                message, style="green", markup=False, soft_wrap=True
            )

    def warning(self, message: str) -> None:
        """Print a warning to stderr in yellow."""
        self.err_console.print(
            f"Warning: {message}", style="yellow", markup=False, soft_wrap=True
        )

    def error(self, message: str) -> None:
        """Print an error to stderr in red."""
        self.err_console.print(
            f"Error: {message}", style="bold red", markup=False, soft_wrap=True
        )

    def output_json(self, data: Any) -> None:
        """Print data as indented JSON."""
        self.console.print_json(json.dumps(data, default=str))

    def format_size(self, size_bytes: int) -> str:
        """Format a byte count for display."""
        return format_size(size_bytes)
