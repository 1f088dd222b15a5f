"""Allow ``python -m guidetiles``."""

import sys

from guidetiles.cli import main

sys.exit(main())
