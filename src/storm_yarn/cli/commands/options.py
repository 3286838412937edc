"""Option helpers shared by storm-yarn command handlers."""

import argparse
from typing import Any


def add_option(parser: argparse.ArgumentParser, name: str, **kwargs: Any) -> argparse.Action:
    """Add an option under both ``-name`` and ``--name``.

    storm-yarn has always accepted single-dash long options (``-appId``);
    the double-dash spelling is accepted as well.
    """
    return parser.add_argument(f"-{name}", f"--{name}", **kwargs)
