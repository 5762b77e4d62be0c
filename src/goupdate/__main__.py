"""Entry point for ``python -m goupdate``."""

import sys

from goupdate.cli import main

if __name__ == "__main__":
    sys.exit(main())
