"""
Entry point for running the quiz as a module.

Usage: python -m quizrunner -filename problems.csv -time 30 -score 5
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
