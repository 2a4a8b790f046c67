#!/usr/bin/env python3
"""IntervalWatch — entry point.

Run with:
    python main.py --preset "1 min" --rounds 3 --rest 15
    python -m intervalwatch
"""

import sys

from intervalwatch.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
