#!/usr/bin/env python3
"""Runner script for a single player bootstrap."""

import sys

from gameboot.app.main import main

if __name__ == "__main__":
    sys.exit(main())
