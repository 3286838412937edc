"""Allow running storm-yarn as ``python -m storm_yarn``."""

import sys

from storm_yarn.cli import main

sys.exit(main())
