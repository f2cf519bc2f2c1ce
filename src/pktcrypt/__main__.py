#!/usr/bin/env python3
"""PktCrypt entry point for ``python -m pktcrypt``"""

from pktcrypt.cli import app

if __name__ == "__main__":
    app()
