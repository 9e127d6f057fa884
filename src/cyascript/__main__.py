"""
Entry point for running the CyaScript CLI as a module.

Usage:
    python -m cyascript check input.cyas
"""

import sys

from cyascript.cli import main

if __name__ == "__main__":
    sys.exit(main())
