"""Command registry for the storm-yarn CLI.

Maps command names to command instances. Names live only in the registry;
commands do not know what they are called.

Usage:
    from storm_yarn.cli.registry import build_registry

    registry = build_registry()
    command = registry.require("launch")
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from storm_yarn.exceptions import UnknownCommandError

if TYPE_CHECKING:
    from storm_yarn.cli.command_protocol import Command
    from storm_yarn.cluster import ClusterBackend
    from storm_yarn.config import Config


class CommandRegistry:
    """Ordered, name-keyed mapping from command name to command instance.

    Lookup is by exact, case-sensitive name. Insertion order is kept only so
    the full help listing is stable.
    """

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(self, name: str, command: Command) -> None:
        """Insert or overwrite the command registered under ``name``."""
        self._commands[name] = command

    def get(self, name: str) -> Command | None:
        """Return the command registered under ``name``, or None."""
        return self._commands.get(name)

    def require(self, name: str) -> Command:
        """Return the command registered under ``name``.

        Raises:
            UnknownCommandError: If nothing is registered under ``name``.
        """
        command = self._commands.get(name)
        if command is None:
            raise UnknownCommandError(
                name,
                suggestions=[f"Run 'storm-yarn help' to list the {len(self)} supported commands"],
            )
        return command

    def names(self) -> list[str]:
        """Registered names in insertion order."""
        return list(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)


def build_registry(
    backend: ClusterBackend | None = None, config: Config | None = None
) -> CommandRegistry:
    """Build the registry of every storm-yarn command.

    ``help`` is registered first; it keeps a reference to this same registry
    so it can describe the commands registered after it.

    Args:
        backend: Transport used by launch and the storm master commands.
            Defaults to UnavailableBackend.
        config: Configuration already loaded by the caller. When None,
            commands that read config load it themselves when they run.

    Returns:
        The populated registry.
    """
    from storm_yarn.cli.commands import (
        LaunchCommand,
        MasterCommand,
        StormMasterCommand,
        VersionCommand,
    )
    from storm_yarn.cli.help import HelpCommand
    from storm_yarn.cluster import UnavailableBackend

    if backend is None:
        backend = UnavailableBackend()

    registry = CommandRegistry()
    registry.register("help", HelpCommand(registry))
    registry.register("launch", LaunchCommand(backend, config))
    for kind in MasterCommand:
        registry.register(kind.value, StormMasterCommand(kind, backend, config))
    registry.register("version", VersionCommand())
    return registry
