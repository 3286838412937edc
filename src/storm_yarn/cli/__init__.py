"""
Command-line interface for storm-yarn.

    storm-yarn help [<command>...]           - Show usage for commands
    storm-yarn launch [master.yaml]          - Launch a Storm cluster on YARN
    storm-yarn getStormConfig --appId ID     - Fetch the cluster's storm.yaml
    storm-yarn setStormConfig --appId ID     - Replace the cluster's storm.yaml
    storm-yarn addSupervisors --appId ID     - Add supervisors
    storm-yarn startNimbus / stopNimbus      - Start or stop nimbus
    storm-yarn startUI / stopUI              - Start or stop the storm UI
    storm-yarn startSupervisors / stopSupervisors
    storm-yarn shutdown --appId ID           - Shut the cluster down
    storm-yarn version                       - Print the client version

Every command accepts -h/--help.
"""

import logging
import sys
from typing import List, Optional

from storm_yarn.cli.dispatch import Dispatcher
from storm_yarn.cli.registry import build_registry
from storm_yarn.cli.utils import print_error
from storm_yarn.cluster import ClusterBackend
from storm_yarn.config import Config
from storm_yarn.exceptions import StormYarnError

__all__ = ["main"]

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None, backend: Optional[ClusterBackend] = None) -> int:
    """Main entry point for the storm-yarn CLI.

    Args:
        argv: Arguments after the program name (default: sys.argv[1:]).
        backend: Cluster transport for launch and the master commands.

    Returns:
        Process exit code.
    """
    if argv is None:
        argv = sys.argv[1:]

    # A broken config file must not block help; commands that read config
    # load it again and report the error themselves.
    config: Optional[Config] = None
    try:
        config = Config.load()
    except StormYarnError as e:
        print_error(e)

    verbose = config is not None and config.defaults.verbose
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    dispatcher = Dispatcher(build_registry(backend, config))
    try:
        result = dispatcher.dispatch(argv)
    except StormYarnError as e:
        logger.debug("Command failed", exc_info=True)
        print_error(e, verbose=verbose)
        return 1

    return result.exit_code
