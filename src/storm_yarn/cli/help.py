"""Help rendering for storm-yarn commands."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import TYPE_CHECKING, TextIO

from storm_yarn.cli.parsing import build_option_parser

if TYPE_CHECKING:
    from storm_yarn.cli.registry import CommandRegistry

logger = logging.getLogger(__name__)


def render_help(
    registry: CommandRegistry,
    names: Sequence[str] | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> list[str]:
    """Print usage for the named commands.

    Each resolvable name gets a usage block: the usage line, the command's
    header description, then one line per option. A name that does not
    resolve gets an error line on ``err`` and rendering carries on with the
    next name.

    Args:
        registry: Registry to resolve names against.
        names: Commands to describe. Empty or None means all of them, in
            registration order.
        out: Stream for usage text (default: stdout).
        err: Stream for unresolved-name errors (default: stderr).

    Returns:
        The names that could not be resolved.
    """
    out = out or sys.stdout
    err = err or sys.stderr
    if not names:
        names = registry.names()

    unresolved: list[str] = []
    for name in names:
        command = registry.get(name)
        if command is None:
            print(f"Error: {name} is not a supported command.", file=err)
            unresolved.append(name)
            continue
        parser = build_option_parser(name, command)
        out.write(parser.format_help())
        out.write("\n")

    if unresolved:
        logger.debug("Help requested for unknown commands: %s", ", ".join(unresolved))
    return unresolved


class HelpCommand:
    """Describe one, several, or all registered commands.

    Holds a read-only reference to the registry it is registered in; it
    looks other commands up by name but never creates them.
    """

    help = "storm-yarn help"

    def __init__(self, registry: CommandRegistry):
        self._registry = registry

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        # Command names are collected as leftover positionals.
        pass

    def run(self, args: argparse.Namespace) -> int:
        render_help(self._registry, args.positionals)
        return 0
