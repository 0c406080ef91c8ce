"""
base.py - Common interface for move sources

Anything that can propose moves for a board (the minimax search, simple test
doubles, a random player) implements Solver so the game loop can treat them
interchangeably.
"""

from abc import ABC, abstractmethod
from typing import List

from connect4_minimax.game.board import Board
from connect4_minimax.utils import Player, Move


class Solver(ABC):
    """Proposes moves for a fixed player."""

    def __init__(self, player: Player):
        self.player = player

    @abstractmethod
    def get_moves(self, board: Board) -> List[Move]:
        """
        Propose moves for self.player on board.

        Args:
            board: The current board; must not be modified

        Returns:
            Candidate moves, all equally good as far as this solver knows.
            Empty only when no move is possible.
        """

    @property
    def name(self) -> str:
        return type(self).__name__

    def __repr__(self):
        return f"{self.name}({self.player})"
