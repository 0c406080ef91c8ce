"""
connect4_minimax - Connect Four played by fixed-depth minimax search

This package provides a value-like board model, a game tree built to a
fixed depth, a minimax search that returns every move tied for the best
value, and a small game loop and command-line interface around them.
"""

# Version number
__version__ = '0.1.0'
