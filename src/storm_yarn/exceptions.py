"""
Custom exception hierarchy for storm-yarn.

Provides consistent error handling with context, suggestions, and actionable guidance.
All exceptions include:
- Context information (command name, file paths, application ids, etc.)
- Suggestions for how to fix the issue
- Clear, formatted error messages

Example::

    from storm_yarn.exceptions import ExecutionError

    raise ExecutionError(
        "--appId is required",
        context={"command": "startNimbus"},
        suggestions=["Pass --appId=<application id>", "Set master.app_id in .storm-yarn.toml"],
    )
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class StormYarnError(Exception):
    """
    Base exception for all storm-yarn errors.

    Provides consistent formatting with context and suggestions.

    Attributes:
        context: Dictionary of contextual information (command, file, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class UnknownCommandError(StormYarnError):
    """
    The requested command name has no registry entry.

    The attempted name is always kept in ``context["command"]`` so the
    diagnostic echoes what the user typed.

    Example::

        raise UnknownCommandError("bogus")
    """

    def __init__(
        self,
        command: str,
        suggestions: Optional[List[str]] = None,
    ):
        self.command = command
        super().__init__(
            f"{command} is not a supported command.",
            context={"command": command},
            suggestions=suggestions,
        )


class OptionParseError(StormYarnError):
    """
    Option syntax for a known command could not be parsed.

    Raised for unrecognized options and options missing their value.

    Example::

        raise OptionParseError(
            "unrecognized arguments: --bogus",
            token="--bogus",
        )

    Attributes:
        token: The offending argument token, when it is known
    """

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.token = token
        ctx = context or {}
        if token is not None and "token" not in ctx:
            ctx["token"] = token
        super().__init__(message, ctx, suggestions)


class ExecutionError(StormYarnError):
    """
    A command failed while executing.

    Example::

        raise ExecutionError(
            "--supervisors must be a positive integer",
            context={"command": "addSupervisors", "supervisors": 0},
        )
    """

    pass


class BackendUnavailableError(ExecutionError):
    """
    No transport to YARN or the Storm master is available.

    Example::

        raise BackendUnavailableError(
            "Cannot connect to the storm master",
            context={"app_id": "application_1372171_0001"},
            suggestions=["Build the registry with a ClusterBackend implementation"],
        )
    """

    pass


class ConfigurationError(StormYarnError):
    """
    Configuration or settings error.

    Raised when a config file or a storm/master YAML file is invalid,
    missing, or of the wrong shape.

    Example::

        raise ConfigurationError(
            "storm.yaml must contain a mapping",
            context={"file": "storm.yaml", "got": "list"},
        )
    """

    pass


__all__ = [
    "StormYarnError",
    "UnknownCommandError",
    "OptionParseError",
    "ExecutionError",
    "BackendUnavailableError",
    "ConfigurationError",
]
