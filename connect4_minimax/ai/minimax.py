"""
minimax.py - Fixed-depth minimax search for Connect Four

This module provides MinimaxAI, a Solver that builds the full game tree to a
configured depth, scores the leaves with a board heuristic and propagates
values back up with minimax. It returns every top-level move tied for the
best value.

The heuristic is deliberately simple:
1. A won board scores WIN_SCORE per empty cell, so quicker wins score higher
2. Otherwise every win location adds +1 per own piece and -1 per opponent piece

There is no pruning; the cost grows as COLS ** depth.
"""

from typing import List

import numpy as np

from connect4_minimax.ai.base import Solver
from connect4_minimax.debug import debug, DebugLevel
from connect4_minimax.game.board import Board
from connect4_minimax.game.state import GameState, build_tree, log_tree
from connect4_minimax.utils import Player, Move, WIN_SCORE, DEFAULT_DEPTH, InvalidInputError


class MinimaxAI(Solver):
    """
    A Connect Four solver that uses plain minimax.

    Positions are evaluated from the point of view of `player`, assuming both
    sides play optimally within the search horizon.
    """

    def __init__(self, player: Player, depth: int = DEFAULT_DEPTH):
        """
        Initialize the minimax solver.

        Args:
            player: The player whose interest the search maximizes
            depth: Search depth in plies (higher = stronger but much slower)
        """
        super().__init__(player)
        if not isinstance(depth, int) or isinstance(depth, bool) or depth < 1:
            raise ValueError(f"Search depth must be a positive integer, got {depth!r}")
        self.depth = depth
        self.nodes_evaluated = 0  # For performance tracking

    def get_moves(self, board: Board) -> List[Move]:
        """
        Get all best moves for self.player.

        Args:
            board: The current game board

        Returns:
            Every move whose minimax value equals the best value, in ascending
            column order. Empty when the board allows no move.

        Raises:
            InvalidInputError: board is missing
        """
        if board is None:
            raise InvalidInputError("MinimaxAI.get_moves requires a board, got None")
        if not isinstance(board, Board):
            raise InvalidInputError(f"MinimaxAI.get_moves requires a Board, got {type(board).__name__}")

        self.nodes_evaluated = 0
        debug.start_timer("minimax_search")

        # We don't know what the last move was, so the root has none
        root = GameState(self.player, board, None)
        build_tree(root, self.depth)
        self.minimax(root)

        best_moves = [child.last_move for child in root.children if child.value == root.value]

        elapsed = debug.end_timer("minimax_search", "ai")
        debug.info(f"{self.player} depth {self.depth}: value {root.value}, "
                   f"best columns {[m.column for m in best_moves]}, "
                   f"{self.nodes_evaluated} nodes in {elapsed:.3f}s", "ai")
        if debug.is_enabled_for(DebugLevel.TRACE, "ai"):
            log_tree(root, depth=1, component="ai")

        return best_moves

    def minimax(self, state: GameState) -> None:
        """
        Assign a minimax value to every node of the tree rooted at state.

        Leaves are scored with evaluate(). An inner node takes the maximum of
        its children when self.player moves next and the minimum otherwise.
        """
        self.nodes_evaluated += 1

        if not state.children:
            state.value = self.evaluate(state.board)
            return

        for child in state.children:
            self.minimax(child)

        values = [child.value for child in state.children]
        state.value = max(values) if state.player is self.player else min(values)

    def evaluate(self, board: Board) -> int:
        """
        Evaluate the desirability of board for self.player.

        Meant for leaves of the game tree.

        Args:
            board: Board to evaluate

        Returns:
            Score (positive = good for self.player)
        """
        winner = board.winner()
        if winner is not None:
            sign = 1 if winner is self.player else -1
            return sign * WIN_SCORE * board.count_empty()

        cells = board.win_location_cells()
        mine = np.count_nonzero(cells == self.player.value)
        theirs = np.count_nonzero(cells == self.player.opponent().value)
        return int(mine - theirs)

    def __repr__(self):
        return f"{self.name}({self.player}, depth={self.depth})"


def minimax(ai: MinimaxAI, state: GameState) -> None:
    """Run ai's minimax evaluation over the tree rooted at state."""
    ai.minimax(state)
