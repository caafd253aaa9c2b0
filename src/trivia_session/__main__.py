"""Allow ``python -m trivia_session``."""

import sys

from .cli import main

sys.exit(main())
