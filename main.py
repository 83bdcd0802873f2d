#!/usr/bin/env python

"""
Internship Hours Tracker - Main Entry Point

Logs internship counseling hours, split into direct and indirect hour
types, per weekday and per week, and keeps them in a local database.

Usage:
    python main.py --help

Requirements:
    - Python 3.10+
    - See pyproject.toml for dependencies
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from internship_tracker.cli import main


if __name__ == "__main__":
    sys.exit(main())
