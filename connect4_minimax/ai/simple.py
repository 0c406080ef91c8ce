"""
simple.py - Trivial solvers

DummySolver proposes every legal move and is mostly useful in tests.
RandomSolver proposes a single uniformly random legal move.
"""

import random
from typing import List, Optional

from connect4_minimax.ai.base import Solver
from connect4_minimax.game.board import Board
from connect4_minimax.utils import Player, Move, InvalidInputError


class DummySolver(Solver):
    """Returns all legal moves in ascending column order."""

    def get_moves(self, board: Board) -> List[Move]:
        if board is None:
            raise InvalidInputError("DummySolver.get_moves requires a board")
        return board.legal_moves(self.player)


class RandomSolver(Solver):
    """Returns one random legal move."""

    def __init__(self, player: Player, seed: Optional[int] = None):
        super().__init__(player)
        self._rng = random.Random(seed)

    def get_moves(self, board: Board) -> List[Move]:
        if board is None:
            raise InvalidInputError("RandomSolver.get_moves requires a board")
        moves = board.legal_moves(self.player)
        if not moves:
            return []
        return [self._rng.choice(moves)]
