"""
storm-yarn: command-line client for Storm clusters running on YARN.

Modules:
    cli: Subcommand dispatcher and command handlers
    cluster: Interfaces to the YARN resource manager and the Storm master
    config: TOML configuration loading
    exceptions: Error hierarchy with context and suggestions

Quick Start::

    from storm_yarn.cli import main

    main(["help"])
    main(["version"])
"""

__version__ = "0.3.0"

__all__ = ["__version__"]
