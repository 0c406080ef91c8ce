"""
connect4_minimax.game - Board model and game tree

This package contains the board representation and the game-tree nodes
used by the search. The turn loop and the Gymnasium environment live in
connect4_minimax.game.rules.
"""

from connect4_minimax.game.board import Board
from connect4_minimax.game.state import GameState, build_tree

__all__ = ['Board', 'GameState', 'build_tree']
