"""
Entry point for running the error finder as a module.

Usage:
    python -m errorfinder scan ./src
    python -m errorfinder check app.js --fix
"""

import sys
from errorfinder.cli import main

if __name__ == "__main__":
    sys.exit(main())
