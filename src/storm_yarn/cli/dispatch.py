"""
Command dispatch for the storm-yarn CLI.

Resolves the command name from the argument list, parses the remaining
tokens against that command's options, and either renders help or runs
the command. The dispatcher never exits the process; it returns a
DispatchResult and leaves the exit code to the caller.
"""

from __future__ import annotations

import contextlib
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, TextIO

from storm_yarn.cli.help import render_help
from storm_yarn.cli.parsing import build_option_parser, parse_command_args
from storm_yarn.exceptions import OptionParseError, UnknownCommandError

if TYPE_CHECKING:
    from storm_yarn.cli.registry import CommandRegistry

logger = logging.getLogger(__name__)

HELP_COMMAND = "help"

EXIT_OK = 0
EXIT_UNKNOWN_COMMAND = 1
EXIT_PARSE_ERROR = 2


class Outcome(Enum):
    """How a single dispatch ended."""

    HELP_DISPLAYED = "help_displayed"
    EXECUTED = "executed"
    FAILED = "failed"
    UNKNOWN_COMMAND = "unknown_command"
    PARSE_ERROR = "parse_error"


@dataclass(frozen=True)
class DispatchResult:
    """Result of one dispatch."""

    outcome: Outcome
    command: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == EXIT_OK


class Dispatcher:
    """Route one argument list to help or to a registered command.

    Diagnostics, help text and anything a command prints go to ``out`` and
    ``err`` (default: the process streams at call time).
    """

    def __init__(
        self,
        registry: CommandRegistry,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ):
        self.registry = registry
        self._out = out
        self._err = err

    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err or sys.stderr

    def dispatch(self, argv: Sequence[str]) -> DispatchResult:
        """Dispatch one invocation.

        Args:
            argv: Arguments after the program name. The first token is the
                command name; no tokens means ``help``.

        Returns:
            DispatchResult describing what happened.

        Raises:
            Exception: Whatever the command's run() raises is propagated.
        """
        if not argv:
            name, tokens = HELP_COMMAND, []
        else:
            name, tokens = argv[0], list(argv[1:])

        try:
            command = self.registry.require(name)
        except UnknownCommandError as e:
            print(f"Error: {e.message}", file=self.err)
            render_help(self.registry, out=self.err, err=self.err)
            logger.debug("Unknown command %r", e.command)
            return DispatchResult(Outcome.UNKNOWN_COMMAND, name, EXIT_UNKNOWN_COMMAND)

        parser = build_option_parser(name, command)
        try:
            args = parse_command_args(parser, tokens)
        except OptionParseError as e:
            print(f"Error: {e.message}", file=self.err)
            print(parser.format_usage(), end="", file=self.err)
            logger.debug("Option parse error for %s at %r", name, e.token)
            return DispatchResult(Outcome.PARSE_ERROR, name, EXIT_PARSE_ERROR)

        if getattr(args, "help", False) is True:
            render_help(self.registry, [name], out=self.out, err=self.err)
            return DispatchResult(Outcome.HELP_DISPLAYED, name, EXIT_OK)

        logger.debug("Running %s with %d argument(s)", name, len(tokens))
        # Commands print to sys.stdout; point it at this dispatcher's streams.
        with contextlib.redirect_stdout(self.out), contextlib.redirect_stderr(self.err):
            exit_code = command.run(args) or EXIT_OK
        if exit_code != EXIT_OK:
            return DispatchResult(Outcome.FAILED, name, exit_code)
        return DispatchResult(Outcome.EXECUTED, name, EXIT_OK)
