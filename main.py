#!/usr/bin/env python3
"""
BeatScript Entry Point Script

This script initializes the CLI handler and parses a single call script.
"""

import sys
from beatscript.cli import CLIHandler

if __name__ == "__main__":
    if sys.version_info < (3, 8):
        sys.stderr.write("BeatScript requires Python 3.8 or later.\n")
        sys.exit(1)

    cli = CLIHandler()
    cli.run()
