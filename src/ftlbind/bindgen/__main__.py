"""Allow ``python -m ftlbind.bindgen``."""

import sys

from .cli import main

sys.exit(main())
