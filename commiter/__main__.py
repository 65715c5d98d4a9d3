#!/usr/bin/env python3
"""Main entry point for commiter when run as python -m commiter."""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
