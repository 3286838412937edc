"""Tests for the storm-yarn command dispatcher.

Tests cover:
1. Name resolution (empty argv, known, unknown commands)
2. Per-command help flag injection
3. Option parse errors
4. Execution outcomes and exception propagation
"""

import io

import pytest

from conftest import RecordingCommand
from storm_yarn.cli.dispatch import Dispatcher, Outcome
from storm_yarn.cli.help import HelpCommand
from storm_yarn.cli.registry import CommandRegistry
from storm_yarn.exceptions import ExecutionError


def make_registry(**commands) -> CommandRegistry:
    registry = CommandRegistry()
    registry.register("help", HelpCommand(registry))
    for name, command in commands.items():
        registry.register(name, command)
    return registry


class TestNameResolution:
    """Tests for resolving the command name."""

    def test_empty_argv_lists_all_commands(self, registry, capsys):
        """No arguments behaves like help and lists every command."""
        result = Dispatcher(registry).dispatch([])

        assert result.outcome is Outcome.EXECUTED
        assert result.command == "help"
        assert result.exit_code == 0
        captured = capsys.readouterr()
        for name in registry.names():
            assert f"storm-yarn {name}" in captured.out

    def test_empty_argv_writes_to_given_stream(self, registry, capsys):
        """The full listing goes to the dispatcher's own output stream."""
        out = io.StringIO()

        result = Dispatcher(registry, out=out, err=io.StringIO()).dispatch([])

        assert result.outcome is Outcome.EXECUTED
        assert "usage: storm-yarn launch" in out.getvalue()
        assert "usage: storm-yarn version" in out.getvalue()
        assert capsys.readouterr().out == ""

    def test_empty_argv_matches_explicit_help(self, registry, capsys):
        """[] and ["help"] produce the same listing."""
        Dispatcher(registry).dispatch([])
        implicit = capsys.readouterr().out

        Dispatcher(registry).dispatch(["help"])
        explicit = capsys.readouterr().out

        assert implicit == explicit

    def test_help_for_single_command(self, registry, capsys):
        """help launch describes launch only."""
        result = Dispatcher(registry).dispatch(["help", "launch"])

        assert result.outcome is Outcome.EXECUTED
        out = capsys.readouterr().out
        assert "usage: storm-yarn launch" in out
        assert "storm-yarn version" not in out
        assert "storm-yarn shutdown" not in out

    def test_unknown_command(self, capsys):
        """An unknown name runs nothing and echoes the attempted name."""
        version = RecordingCommand()
        registry = make_registry(version=version)

        result = Dispatcher(registry).dispatch(["bogus"])

        assert result.outcome is Outcome.UNKNOWN_COMMAND
        assert result.exit_code != 0
        assert version.runs == []
        err = capsys.readouterr().err
        assert "Error: bogus is not a supported command." in err
        # The full listing follows the error
        assert "usage: storm-yarn version" in err

    def test_lookup_is_case_sensitive(self, capsys):
        """Command names must match exactly."""
        registry = make_registry(version=RecordingCommand())

        result = Dispatcher(registry).dispatch(["Version"])

        assert result.outcome is Outcome.UNKNOWN_COMMAND
        assert "Version" in capsys.readouterr().err


class TestHelpFlag:
    """Tests for the injected -h/--help flag."""

    @pytest.mark.parametrize("flag", ["-h", "--help"])
    def test_help_flag_renders_help_without_running(self, flag, capsys):
        """version -h / --help shows help for version only."""
        version = RecordingCommand(help="storm-yarn version")
        registry = make_registry(version=version, other=RecordingCommand(help="other"))

        result = Dispatcher(registry).dispatch(["version", flag])

        assert result.outcome is Outcome.HELP_DISPLAYED
        assert result.exit_code == 0
        assert version.runs == []
        out = capsys.readouterr().out
        assert "usage: storm-yarn version [-h]" in out
        assert "print out a help message" in out
        assert "storm-yarn other" not in out

    def test_no_help_flag_runs_once(self, capsys):
        """A plain invocation runs the command exactly once and shows no help."""
        version = RecordingCommand()
        registry = make_registry(version=version)

        result = Dispatcher(registry).dispatch(["version"])

        assert result.outcome is Outcome.EXECUTED
        assert len(version.runs) == 1
        assert version.runs[0].help is False
        assert "usage:" not in capsys.readouterr().out

    def test_existing_short_h_is_not_augmented(self, capsys):
        """A command that declares -h for itself keeps it."""
        command = RecordingCommand(
            options=[(("-h", "--host"), {"dest": "host", "help": "Nimbus host"})]
        )
        registry = make_registry(ping=command)

        result = Dispatcher(registry).dispatch(["ping", "-h", "nimbus1"])

        assert result.outcome is Outcome.EXECUTED
        assert command.runs[0].host == "nimbus1"
        assert not hasattr(command.runs[0], "help")

    def test_existing_long_help_keeps_short_flag(self, capsys):
        """Only -h is injected when --help is already taken."""
        command = RecordingCommand(
            options=[(("--help",), {"dest": "topic", "help": "Help topic"})]
        )
        registry = make_registry(doc=command)

        result = Dispatcher(registry).dispatch(["doc", "-h"])

        assert result.outcome is Outcome.HELP_DISPLAYED
        assert command.runs == []

    def test_help_flag_not_persisted(self):
        """Repeated dispatches build fresh parsers each time."""
        version = RecordingCommand()
        registry = make_registry(version=version)
        dispatcher = Dispatcher(registry)

        first = dispatcher.dispatch(["version", "-h"])
        second = dispatcher.dispatch(["version"])
        third = dispatcher.dispatch(["version"])

        assert first.outcome is Outcome.HELP_DISPLAYED
        assert second.outcome is third.outcome is Outcome.EXECUTED
        assert len(version.runs) == 2
        assert version.runs[0] is not version.runs[1]


class TestParseErrors:
    """Tests for option parse failures on known commands."""

    def test_unrecognized_option(self, capsys):
        """An unknown option aborts and names the bad token."""
        version = RecordingCommand()
        registry = make_registry(version=version)

        result = Dispatcher(registry).dispatch(["version", "--bogus"])

        assert result.outcome is Outcome.PARSE_ERROR
        assert result.exit_code == 2
        assert version.runs == []
        err = capsys.readouterr().err
        assert "--bogus" in err
        assert "not a supported command" not in err
        assert "usage: storm-yarn version" in err

    def test_missing_option_value(self, capsys):
        """An option without its value aborts before running."""
        command = RecordingCommand(options=[(("--appId",), {"dest": "app_id"})])
        registry = make_registry(start=command)

        result = Dispatcher(registry).dispatch(["start", "--appId"])

        assert result.outcome is Outcome.PARSE_ERROR
        assert command.runs == []
        assert "--appId" in capsys.readouterr().err

    def test_positionals_are_collected(self):
        """Unmatched positional tokens are kept in order."""
        command = RecordingCommand()
        registry = make_registry(run=command)

        Dispatcher(registry).dispatch(["run", "b", "a"])

        assert command.runs[0].positionals == ["b", "a"]

    def test_abbreviated_single_dash_option_rejected(self, registry, backend, capsys):
        """A prefix of a single-dash option is not accepted as that option."""
        result = Dispatcher(registry).dispatch(["startNimbus", "-a", "application_1_0001"])

        assert result.outcome is Outcome.PARSE_ERROR
        assert result.exit_code == 2
        assert backend.connected == []
        assert "unrecognized option: -a" in capsys.readouterr().err

    def test_attached_short_option_value(self):
        """A declared short option may carry its value in the same token."""
        command = RecordingCommand(options=[(("-o", "--output"), {})])
        registry = make_registry(run=command)

        result = Dispatcher(registry).dispatch(["run", "-ofile.txt"])

        assert result.outcome is Outcome.EXECUTED
        assert command.runs[0].output == "file.txt"

    def test_double_dash_makes_rest_positional(self):
        """Tokens after a bare -- are positionals even if they look like options."""
        command = RecordingCommand(options=[(("--queue",), {})])
        registry = make_registry(run=command)

        result = Dispatcher(registry).dispatch(["run", "b", "--queue", "q", "--", "-x", "--queue"])

        assert result.outcome is Outcome.EXECUTED
        args = command.runs[0]
        assert args.queue == "q"
        assert args.positionals == ["b", "-x", "--queue"]


class TestExecution:
    """Tests for running the resolved command."""

    def test_nonzero_exit_code_is_failure(self):
        """A non-zero return from run() is a failed outcome."""
        registry = make_registry(broken=RecordingCommand(exit_code=3))

        result = Dispatcher(registry).dispatch(["broken"])

        assert result.outcome is Outcome.FAILED
        assert result.exit_code == 3
        assert not result.ok

    def test_none_return_is_success(self):
        """run() returning None counts as success."""
        registry = make_registry(quiet=RecordingCommand(exit_code=None))

        result = Dispatcher(registry).dispatch(["quiet"])

        assert result.outcome is Outcome.EXECUTED
        assert result.ok

    def test_execution_errors_propagate(self):
        """The dispatcher does not catch errors raised by run()."""

        class Exploding(RecordingCommand):
            def run(self, args):
                raise ExecutionError("boom")

        registry = make_registry(explode=Exploding())

        with pytest.raises(ExecutionError, match="boom"):
            Dispatcher(registry).dispatch(["explode"])

    def test_command_output_goes_to_given_streams(self, capsys):
        """What a command prints lands on the dispatcher's streams."""

        class Printing(RecordingCommand):
            def run(self, args):
                print("hello")
                return 0

        out = io.StringIO()
        Dispatcher(make_registry(greet=Printing()), out=out).dispatch(["greet"])

        assert out.getvalue() == "hello\n"
        assert capsys.readouterr().out == ""

    def test_outcome_is_stable_across_dispatches(self):
        """The same arguments classify the same way every time."""
        registry = make_registry(version=RecordingCommand())
        dispatcher = Dispatcher(registry)

        outcomes = {dispatcher.dispatch(["version"]).outcome for _ in range(3)}
        outcomes_bad = {dispatcher.dispatch(["nope"]).outcome for _ in range(3)}

        assert outcomes == {Outcome.EXECUTED}
        assert outcomes_bad == {Outcome.UNKNOWN_COMMAND}
