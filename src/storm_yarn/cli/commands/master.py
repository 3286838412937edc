"""
Storm master commands for the storm-yarn CLI.

Each command connects to the Storm master of a running YARN application
and asks it to do one thing: read or replace the storm configuration, add
supervisors, or start and stop nimbus, the UI and the supervisors.

Usage:
    storm-yarn getStormConfig --appId ID [--output FILE]
    storm-yarn setStormConfig --appId ID --stormConf storm.yaml
    storm-yarn addSupervisors --appId ID --supervisors N
    storm-yarn startNimbus --appId ID
"""

import argparse
import logging
import sys
from enum import Enum
from pathlib import Path

from storm_yarn.cli.commands.options import add_option
from storm_yarn.cluster import ClusterBackend, MasterClient
from storm_yarn.config import Config
from storm_yarn.exceptions import ExecutionError
from storm_yarn.utils import dump_yaml, load_yaml_mapping, write_yaml

logger = logging.getLogger(__name__)


class MasterCommand(Enum):
    """Requests a Storm master understands, keyed by CLI command name."""

    SET_STORM_CONFIG = "setStormConfig"
    GET_STORM_CONFIG = "getStormConfig"
    ADD_SUPERVISORS = "addSupervisors"
    START_NIMBUS = "startNimbus"
    STOP_NIMBUS = "stopNimbus"
    START_UI = "startUI"
    STOP_UI = "stopUI"
    START_SUPERVISORS = "startSupervisors"
    STOP_SUPERVISORS = "stopSupervisors"
    SHUTDOWN = "shutdown"


_DESCRIPTIONS = {
    MasterCommand.SET_STORM_CONFIG: "Replace the storm configuration of a running cluster",
    MasterCommand.GET_STORM_CONFIG: "Fetch the storm configuration of a running cluster",
    MasterCommand.ADD_SUPERVISORS: "Add supervisors to a running cluster",
    MasterCommand.START_NIMBUS: "Start nimbus on a running cluster",
    MasterCommand.STOP_NIMBUS: "Stop nimbus on a running cluster",
    MasterCommand.START_UI: "Start the storm UI on a running cluster",
    MasterCommand.STOP_UI: "Stop the storm UI on a running cluster",
    MasterCommand.START_SUPERVISORS: "Start all supervisors of a running cluster",
    MasterCommand.STOP_SUPERVISORS: "Stop all supervisors of a running cluster",
    MasterCommand.SHUTDOWN: "Shut down a running cluster",
}

# MasterClient methods for the commands that take no further input
_SIMPLE_CALLS = {
    MasterCommand.START_NIMBUS: "start_nimbus",
    MasterCommand.STOP_NIMBUS: "stop_nimbus",
    MasterCommand.START_UI: "start_ui",
    MasterCommand.STOP_UI: "stop_ui",
    MasterCommand.START_SUPERVISORS: "start_supervisors",
    MasterCommand.STOP_SUPERVISORS: "stop_supervisors",
    MasterCommand.SHUTDOWN: "shutdown",
}


class StormMasterCommand:
    """Send one request to the Storm master of a YARN application."""

    def __init__(
        self, kind: MasterCommand, backend: ClusterBackend, config: Config | None = None
    ):
        self.kind = kind
        self.backend = backend
        self.config = config
        self.help = _DESCRIPTIONS[kind]

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        add_option(
            parser,
            "appId",
            dest="app_id",
            metavar="ID",
            help="(Required) The storm clusters app ID",
        )
        if self.kind is MasterCommand.GET_STORM_CONFIG:
            add_option(parser, "output", metavar="FILE", help="Output file (default: stdout)")
        elif self.kind is MasterCommand.SET_STORM_CONFIG:
            add_option(
                parser,
                "stormConf",
                dest="storm_conf",
                metavar="FILE",
                help="(Required) storm.yaml to send to the master",
            )
        elif self.kind is MasterCommand.ADD_SUPERVISORS:
            add_option(
                parser,
                "supervisors",
                type=int,
                metavar="N",
                help="(Required) The # of supervisors to be added",
            )

    def run(self, args: argparse.Namespace) -> int:
        app_id = args.app_id
        if not app_id:
            config = self.config if self.config is not None else Config.load()
            app_id = config.master.app_id
        if not app_id:
            raise ExecutionError(
                "-appId is required",
                context={"command": self.kind.value},
                suggestions=[
                    "Pass --appId=<application id>",
                    "Set app_id in the [master] section of .storm-yarn.toml",
                ],
            )

        # Validate local input before opening a connection
        storm_conf = None
        if self.kind is MasterCommand.SET_STORM_CONFIG:
            if not args.storm_conf:
                raise ExecutionError(
                    "-stormConf is required",
                    context={"command": self.kind.value},
                )
            storm_conf = load_yaml_mapping(Path(args.storm_conf))
        elif self.kind is MasterCommand.ADD_SUPERVISORS:
            if args.supervisors is None or args.supervisors < 1:
                raise ExecutionError(
                    "-supervisors must be a positive integer",
                    context={"command": self.kind.value, "supervisors": args.supervisors},
                )

        logger.debug("Sending %s to %s", self.kind.value, app_id)
        client = self.backend.connect(app_id)
        try:
            self._send(client, args, storm_conf)
        finally:
            client.close()
        return 0

    def _send(self, client: MasterClient, args: argparse.Namespace, storm_conf: dict | None) -> None:
        if self.kind is MasterCommand.GET_STORM_CONFIG:
            conf = client.get_storm_conf()
            if args.output:
                write_yaml(conf, Path(args.output))
            else:
                dump_yaml(conf, sys.stdout)
        elif self.kind is MasterCommand.SET_STORM_CONFIG:
            client.set_storm_conf(storm_conf)
        elif self.kind is MasterCommand.ADD_SUPERVISORS:
            client.add_supervisors(args.supervisors)
        else:
            getattr(client, _SIMPLE_CALLS[self.kind])()
