"""Per-invocation option parsing for storm-yarn commands.

Every dispatch and every help render builds its own parser from the
command's option declarations, so the injected help flag never leaks into
the registered command or into the next invocation.
"""

from __future__ import annotations

import argparse
import re
from typing import NoReturn

from storm_yarn.cli.command_protocol import Command
from storm_yarn.exceptions import OptionParseError

PROG = "storm-yarn"

HELP_SHORT = "-h"
HELP_LONG = "--help"
HELP_DESCRIPTION = "print out a help message"

_ARGUMENT_RE = re.compile(r"^argument ([^:]+):")


class CommandArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises OptionParseError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        token = None
        match = _ARGUMENT_RE.match(message)
        if match:
            token = match.group(1)
        raise OptionParseError(message, token=token, context={"usage": self.format_usage().strip()})

    def _get_option_tuples(self, option_string):
        # allow_abbrev only covers "--" options; single-dash prefixes such as
        # "-a" for "-appId" must not match either. A declared short option
        # with its value attached ("-ofile") still does.
        short = option_string[:2]
        return [t for t in super()._get_option_tuples(option_string) if t[1] == short]


def build_option_parser(name: str, command: Command) -> CommandArgumentParser:
    """Build the option parser for one invocation of ``command``.

    The help flag is added unless the command already declares ``-h``.

    Args:
        name: Name the command was invoked under (used in usage text).
        command: The command whose options are declared on the parser.

    Returns:
        A fresh parser.
    """
    parser = CommandArgumentParser(
        prog=f"{PROG} {name}",
        description=command.help,
        add_help=False,
        allow_abbrev=False,
    )
    command.add_arguments(parser)

    if HELP_SHORT not in parser._option_string_actions:
        flags = [HELP_SHORT]
        if HELP_LONG not in parser._option_string_actions:
            flags.append(HELP_LONG)
        parser.add_argument(*flags, dest="help", action="store_true", help=HELP_DESCRIPTION)
    return parser


def parse_command_args(parser: argparse.ArgumentParser, tokens: list[str]) -> argparse.Namespace:
    """Parse ``tokens`` against ``parser``.

    Tokens the parser does not consume are kept, in order, in
    ``args.positionals``. A leftover token that looks like an option is an
    error. Everything after a bare ``--`` is positional.

    Raises:
        OptionParseError: On an unrecognized option or a missing value.
    """
    literal: list[str] = []
    if "--" in tokens:
        split = tokens.index("--")
        tokens, literal = tokens[:split], tokens[split + 1 :]

    args, extras = parser.parse_known_args(tokens)

    positionals: list[str] = []
    for token in extras:
        if token.startswith("-") and token != "-":
            raise OptionParseError(
                f"unrecognized option: {token}",
                token=token,
                context={"usage": parser.format_usage().strip()},
            )
        else:
            positionals.append(token)

    args.positionals = positionals + literal
    return args
