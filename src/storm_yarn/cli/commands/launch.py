"""
Launch command for the storm-yarn CLI.

Submits a Storm application master to YARN and reports its application id.

Usage:
    storm-yarn launch [master.yaml] [--appname NAME] [--queue QUEUE]
                      [--stormHome DIR] [--stormZip FILE]
                      [--output FILE] [--stormConfOutput FILE]
"""

import argparse
import logging
from pathlib import Path

from storm_yarn.cli.commands.options import add_option
from storm_yarn.cluster import ClusterBackend, LaunchRequest
from storm_yarn.config import Config
from storm_yarn.exceptions import ExecutionError
from storm_yarn.utils import ensure_parent_dir, load_yaml_mapping, write_yaml

logger = logging.getLogger(__name__)


class LaunchCommand:
    """Launch a new Storm cluster on YARN."""

    help = "storm-yarn launch <master.yaml>"

    def __init__(self, backend: ClusterBackend, config: Config | None = None):
        self.backend = backend
        self.config = config

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        add_option(
            parser,
            "appname",
            metavar="NAME",
            help="Application Name. Default value - Storm-on-Yarn",
        )
        add_option(
            parser,
            "queue",
            metavar="QUEUE",
            help="RM Queue in which this application is to be submitted",
        )
        add_option(parser, "stormHome", dest="storm_home", metavar="DIR", help="Storm Home Directory")
        add_option(parser, "output", metavar="FILE", help="Output file for the application id")
        add_option(
            parser,
            "stormConfOutput",
            dest="storm_conf_output",
            metavar="FILE",
            help="Write the cluster's storm.yaml to this file",
        )
        add_option(parser, "stormZip", dest="storm_zip", metavar="FILE", help="file path of storm.zip")

    def run(self, args: argparse.Namespace) -> int:
        config = self.config if self.config is not None else Config.load()

        if len(args.positionals) > 1:
            raise ExecutionError(
                "launch takes at most one master configuration file",
                context={"arguments": " ".join(args.positionals)},
                suggestions=["Pass a single master.yaml path"],
            )
        master_conf = {}
        if args.positionals:
            master_conf = load_yaml_mapping(Path(args.positionals[0]))

        storm_home = args.storm_home or config.launch.storm_home
        if storm_home and not Path(storm_home).is_dir():
            raise ExecutionError(
                f"Storm home directory not found: {storm_home}",
                context={"stormHome": storm_home},
            )

        storm_zip = args.storm_zip or config.launch.storm_zip
        if storm_zip and not Path(storm_zip).is_file():
            raise ExecutionError(
                f"storm.zip not found: {storm_zip}",
                context={"stormZip": storm_zip},
                suggestions=["Build storm.zip from your Storm distribution first"],
            )

        request = LaunchRequest(
            appname=args.appname or config.launch.appname,
            queue=args.queue or config.launch.queue,
            storm_home=storm_home,
            storm_zip=storm_zip,
            master_conf=master_conf,
        )
        logger.debug("Launching %s on queue %s", request.appname, request.queue)
        app_id = self.backend.launch(request)
        logger.info("Submitted application %s", app_id)

        if args.output:
            output = ensure_parent_dir(Path(args.output))
            output.write_text(f"{app_id}\n", encoding="utf-8")
        else:
            print(app_id)

        if args.storm_conf_output:
            client = self.backend.connect(app_id)
            try:
                storm_conf = client.get_storm_conf()
            finally:
                client.close()
            write_yaml(storm_conf, Path(args.storm_conf_output))

        return 0
