"""Command protocol for the storm-yarn CLI.

Defines the interface every command handler must implement. A command owns
its option declarations and its execution logic. It does not know the name it
is registered under; the registry keeps that.

Usage:
    from storm_yarn.cli.command_protocol import Command

    class MyCommand:
        help = "storm-yarn my-command"

        def add_arguments(self, parser: argparse.ArgumentParser) -> None:
            parser.add_argument("--appId", dest="app_id", help="The app ID")

        def run(self, args: argparse.Namespace) -> int:
            print(f"Working on {args.app_id}")
            return 0
"""

import argparse
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class Command(Protocol):
    """Protocol for CLI command handlers.

    Attributes:
        help: Header description shown above the command's usage.

    Methods:
        add_arguments: Declare the command's options on a parser.
        run: Execute the command with the parsed argument namespace.
    """

    help: str

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add command-specific options to the parser.

        Called on a fresh parser for every dispatch and every help render,
        so implementations must not cache the parser.

        Args:
            parser: The argparse parser for this command.
        """
        ...

    def run(self, args: argparse.Namespace) -> Optional[int]:
        """Execute the command.

        Args:
            args: Parsed arguments. Options added in add_arguments() are
                  attributes; unmatched positional tokens are in
                  ``args.positionals``.

        Returns:
            Exit code (0 or None for success, non-zero for errors).

        Raises:
            StormYarnError: On any failure the command cannot report as an
                exit code.
        """
        ...
