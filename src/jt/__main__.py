"""Entry point for ``python -m jt``."""

import sys

from jt.cli import main

if __name__ == "__main__":
    sys.exit(main())
