"""Version command for the storm-yarn CLI."""

import argparse
import platform

from storm_yarn import __version__


class VersionCommand:
    """Print the storm-yarn client version."""

    help = "storm-yarn version"

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Also show the Python version and platform",
        )

    def run(self, args: argparse.Namespace) -> int:
        print(f"storm-yarn {__version__}")
        if args.verbose:
            print(f"Python {platform.python_version()} on {platform.platform()}")
        return 0
