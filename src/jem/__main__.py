"""Entry point for running jem as a module.

Allows the package to be run as:
    python -m jem
"""

import sys

from jem.cli import main

if __name__ == "__main__":
    sys.exit(main())
