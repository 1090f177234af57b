"""
Module execution entry point.

Allows running with: python -m ballotproof_cli
"""

import sys
from ballotproof_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
