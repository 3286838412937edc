"""Shared utilities for CLI commands."""

from __future__ import annotations

import sys
import traceback
from typing import TYPE_CHECKING

from storm_yarn.exceptions import StormYarnError

if TYPE_CHECKING:
    from rich.console import Console

__all__ = ["format_error", "print_error", "get_error_console"]

# Module-level console for error output, created lazily
_error_console: Console | None = None


def get_error_console() -> Console:
    """Get or create the Rich console for error output.

    The console writes to stderr and is cached for reuse.
    """
    global _error_console
    if _error_console is None:
        from rich.console import Console

        _error_console = Console(stderr=True, force_terminal=None)
    return _error_console


def print_error(
    e: Exception,
    verbose: bool = False,
    use_rich: bool | None = None,
) -> None:
    """
    Print an exception, with Rich formatting on a terminal.

    Args:
        e: The exception to print
        verbose: If True, include full stack trace
        use_rich: Override automatic TTY detection (None = auto-detect)
    """
    if verbose:
        # Always use plain text for stack traces
        print(traceback.format_exc(), file=sys.stderr)
        return

    console = get_error_console()
    if use_rich is None:
        use_rich = console.is_terminal

    if use_rich and isinstance(e, StormYarnError):
        _print_rich_error(console, e)
    else:
        print(format_error(e), file=sys.stderr)


def _print_rich_error(console: Console, e: StormYarnError) -> None:
    from rich.markup import escape

    console.print(f"[bold red]Error:[/bold red] {escape(e.message)}")
    if e.context:
        console.print("\n[bold]Context:[/bold]")
        for key, value in e.context.items():
            console.print(f"  [cyan]{escape(str(key))}[/cyan]: {escape(str(value))}")
    if e.suggestions:
        console.print("\n[bold]Suggestions:[/bold]")
        for suggestion in e.suggestions:
            console.print(f"  - {escape(suggestion)}")


def format_error(e: Exception) -> str:
    """Format an exception for user-friendly display (plain text)."""
    if isinstance(e, StormYarnError):
        return f"Error: {e}"

    # For other exceptions, show type and message
    return f"Error: {type(e).__name__}: {e}"
