"""Allow ``python -m king_of_hearts``."""

import sys

from .cli import main

sys.exit(main())
