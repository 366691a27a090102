"""Main entry point for textregions package.

This module allows the package to be executed as:
    python -m textregions [args...]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
