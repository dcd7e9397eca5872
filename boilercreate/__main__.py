"""Allow ``python -m boilercreate``."""

import sys

from boilercreate.cli import main

sys.exit(main())
