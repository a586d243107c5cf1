#!/usr/bin/env python3
"""
CA vs Intention-Space preset renderer.

Runs every class preset as a classical CA and as its Intention-Space variant
and prints them as ASCII or writes PGM images. Same options as the
``intention-space`` console script.
"""

import sys
import os

# Run from a source checkout without installing
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from intention_space.cli import main


if __name__ == "__main__":
    sys.exit(main())
