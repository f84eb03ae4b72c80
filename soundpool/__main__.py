"""
SoundPool package __main__ entry point.

Allows running with: python -m soundpool
"""

import sys

from soundpool.app.run import main

if __name__ == "__main__":
    sys.exit(main())
