"""Allow ``python -m notionlinks``."""

import sys

from notionlinks.cli import main

sys.exit(main())
