#!/usr/bin/env python3
"""Entry point for running recordscreen as a module.

This allows the package to be invoked with:
    python -m recordscreen [arguments]
"""

import sys

from recordscreen.cli import main

if __name__ == "__main__":
    sys.exit(main())
