#!/usr/bin/env python3
"""
Timed Quiz - Main Entry Point

This script runs the timed quiz on the terminal. Problems are read from a
headerless CSV file with one "question,answer" pair per line.

Usage:
    python main.py [-time SECONDS] [-filename PATH] [-score POINTS]

Options:
    -time: Total session duration in seconds (default 30)
    -filename: Path of the problems CSV file (default ./problems.csv)
    -score: Points awarded per correct answer (default 5)
"""

import sys

from quizrunner.cli import main

if __name__ == "__main__":
    sys.exit(main())
