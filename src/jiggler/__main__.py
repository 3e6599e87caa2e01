"""Allow ``python -m jiggler``."""

import sys

from jiggler.main import main

sys.exit(main())
