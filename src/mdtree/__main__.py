"""CLI entry point: python -m mdtree"""

import sys

from mdtree.cli import main

if __name__ == "__main__":
    sys.exit(main())
