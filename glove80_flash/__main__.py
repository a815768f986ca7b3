"""Allow running as ``python -m glove80_flash``."""

import sys

from glove80_flash.cli.app import main


sys.exit(main())
