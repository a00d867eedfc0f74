"""Allow ``python -m disk_sim``."""

import sys

from disk_sim.cli import main

sys.exit(main())
