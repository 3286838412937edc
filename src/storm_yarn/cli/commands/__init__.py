"""Command handlers for the storm-yarn CLI.

This package contains one module per kind of handler:
- launch: submit a new Storm cluster to YARN
- master: commands sent to a running Storm master
- version: print the client version
"""

from .launch import LaunchCommand
from .master import MasterCommand, StormMasterCommand
from .options import add_option
from .version import VersionCommand

__all__ = [
    "LaunchCommand",
    "MasterCommand",
    "StormMasterCommand",
    "VersionCommand",
    "add_option",
]
