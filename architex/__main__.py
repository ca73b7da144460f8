"""Allow ``python -m architex``."""

import sys

from architex.cli import main

sys.exit(main())
