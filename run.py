#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four minimax player

Examples:
    # Play RED against a depth-5 search
    python run.py play --depth 5

    # Watch a depth-4 search play a random opponent
    python run.py watch --yellow random --red_depth 4 --seed 7

    # Best moves for a position, with search logging
    python run.py --debug_level info analyze --depth 5 --position 0,0,...

    # Time a depth-5 search
    python run.py benchmark --depth 5
"""

import sys

from connect4_minimax.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
