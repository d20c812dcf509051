#!/usr/bin/env python3
"""
run.py - Main entry point for dropfour

Examples:
    python run.py play
    python run.py play --ai random --gap-policy break
    python run.py test --position "......./......./0000111"
    python run.py benchmark --iterations 200
"""

import os
import sys

# Add the project root to Python path so the package imports from a checkout
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dropfour.interfaces.cli import main


if __name__ == "__main__":
    sys.exit(main())
