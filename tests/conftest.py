"""Pytest fixtures for storm-yarn tests."""

import argparse
from pathlib import Path

import pytest

from storm_yarn.cli.registry import CommandRegistry, build_registry
from storm_yarn.cluster import LaunchRequest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch) -> Path:
    """Run every test in an empty project directory with no user config."""
    project = tmp_path / "project"
    project.mkdir()
    (project / ".git").mkdir()
    monkeypatch.chdir(project)
    monkeypatch.setattr(
        "storm_yarn.config.USER_CONFIG_PATH", tmp_path / "user" / "config.toml"
    )
    return project


class FakeMasterClient:
    """MasterClient that records every call."""

    def __init__(self, storm_conf=None):
        self.storm_conf = storm_conf if storm_conf is not None else {"nimbus.host": "node1"}
        self.calls: list[tuple] = []
        self.closed = False

    def get_storm_conf(self):
        self.calls.append(("get_storm_conf",))
        return self.storm_conf

    def set_storm_conf(self, conf):
        self.calls.append(("set_storm_conf", conf))
        self.storm_conf = conf

    def add_supervisors(self, count):
        self.calls.append(("add_supervisors", count))

    def start_nimbus(self):
        self.calls.append(("start_nimbus",))

    def stop_nimbus(self):
        self.calls.append(("stop_nimbus",))

    def start_ui(self):
        self.calls.append(("start_ui",))

    def stop_ui(self):
        self.calls.append(("stop_ui",))

    def start_supervisors(self):
        self.calls.append(("start_supervisors",))

    def stop_supervisors(self):
        self.calls.append(("stop_supervisors",))

    def shutdown(self):
        self.calls.append(("shutdown",))

    def close(self):
        self.closed = True


class FakeBackend:
    """ClusterBackend that hands out one FakeMasterClient."""

    def __init__(self, app_id: str = "application_1372171160484_0001"):
        self.app_id = app_id
        self.client = FakeMasterClient()
        self.launched: list[LaunchRequest] = []
        self.connected: list[str] = []

    def launch(self, request: LaunchRequest) -> str:
        self.launched.append(request)
        return self.app_id

    def connect(self, app_id: str) -> FakeMasterClient:
        self.connected.append(app_id)
        return self.client


class RecordingCommand:
    """Command that records the arguments of every run."""

    def __init__(self, help: str = "a recording command", exit_code=0, options=None):
        self.help = help
        self.exit_code = exit_code
        self.options = options or []
        self.runs: list[argparse.Namespace] = []

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        for flags, kwargs in self.options:
            parser.add_argument(*flags, **kwargs)

    def run(self, args: argparse.Namespace):
        self.runs.append(args)
        return self.exit_code


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def registry(backend: FakeBackend) -> CommandRegistry:
    return build_registry(backend)
