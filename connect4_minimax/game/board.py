"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class which holds piece placement, validates
and applies moves, detects four-in-a-row and enumerates legal moves. Boards are
treated as values: `apply` returns a new board and leaves the original alone,
which lets every node of a search tree own a private snapshot.
"""

from typing import Iterable, List, Optional

import numpy as np

from connect4_minimax.debug import debug
from connect4_minimax.utils import (ROWS, COLS, EMPTY, WIN_INDICES, Player, Move,
                                    IllegalMoveError, cell_to_player, render_board_ascii)

_UNKNOWN = object()  # winner not computed yet


class Board:
    """
    A ROWS x COLS Connect Four grid.

    Row 0 is the top of the board and column 0 the left edge. Each cell is
    EMPTY or the value of the Player occupying it.
    """

    __slots__ = ("grid", "_winner")

    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Create a board.

        Args:
            grid: Optional existing (ROWS x COLS) grid to copy. Gravity is not
                checked for grids supplied this way.
        """
        if grid is None:
            self.grid = np.zeros((ROWS, COLS), dtype=np.int8)
        else:
            grid = np.asarray(grid, dtype=np.int8)
            if grid.shape != (ROWS, COLS):
                raise ValueError(f"Grid must have shape {(ROWS, COLS)}, got {grid.shape}")
            self.grid = grid.copy()
        self._winner = _UNKNOWN

    @classmethod
    def from_moves(cls, moves: Iterable[Move]) -> 'Board':
        """Build a board by applying moves in order to an empty board."""
        board = cls()
        for move in moves:
            board.make_move(move)
        return board

    @classmethod
    def from_position(cls, position: str) -> 'Board':
        """
        Build a board from a comma-separated list of ROWS * COLS cell values.

        Values are 0 (empty), 1 (red) or 2 (yellow), listed row by row from
        the top of the board.
        """
        values = [int(v) for v in position.split(',') if v.strip()]
        if len(values) != ROWS * COLS:
            raise ValueError(f"Position string must have {ROWS * COLS} values, got {len(values)}")
        if any(v not in (EMPTY, Player.RED.value, Player.YELLOW.value) for v in values):
            raise ValueError("Position values must be 0, 1 or 2")
        return cls(np.array(values).reshape(ROWS, COLS))

    def copy(self) -> 'Board':
        """
        Create a deep copy of the board.

        Returns:
            A new Board instance with the same pieces
        """
        new_board = Board.__new__(Board)
        new_board.grid = self.grid.copy()
        new_board._winner = self._winner
        return new_board

    def get_tile(self, row: int, col: int) -> Optional[Player]:
        """Return the player at (row, col), or None for an empty cell."""
        return cell_to_player(self.grid[row, col])

    def count_empty(self) -> int:
        return int(np.count_nonzero(self.grid == EMPTY))

    def is_full(self) -> bool:
        return not np.any(self.grid[0] == EMPTY)

    def make_move(self, move: Move) -> int:
        """
        Drop a piece for move.player into move.column, in place.

        Args:
            move: The move to apply

        Returns:
            The row the piece landed in

        Raises:
            IllegalMoveError: the game is already won, or the column is
                unknown or full. The board is unchanged in that case.
        """
        winner = self.winner()
        if winner is not None:
            raise IllegalMoveError(f"Illegal move {move}: {winner} has already won")

        col = move.column
        if not (0 <= col < COLS):
            raise IllegalMoveError(f"Illegal move {move}: column out of range")

        for row in range(ROWS - 1, -1, -1):
            if self.grid[row, col] == EMPTY:
                self.grid[row, col] = move.player.value
                self._winner = _UNKNOWN
                return row

        raise IllegalMoveError(f"Illegal move {move}: column {col} is full")

    def apply(self, move: Move) -> 'Board':
        """Return a new board with move applied. This board is not modified."""
        new_board = self.copy()
        new_board.make_move(move)
        return new_board

    def legal_moves(self, player: Player) -> List[Move]:
        """
        Get every move player can make, in ascending column order.

        Returns:
            One Move per non-full column, or an empty list when the game
            has a winner
        """
        if self.winner() is not None:
            return []
        return [Move(player, col) for col in range(COLS) if self.grid[0, col] == EMPTY]

    def win_location_cells(self) -> np.ndarray:
        """Raw grid values of every win location, shape (n_locations, 4)."""
        return self.grid.ravel()[WIN_INDICES]

    def win_locations(self) -> List[List[Optional[Player]]]:
        """
        Get the contents of every set of four collinear, contiguous cells.

        Lines run vertically, horizontally, diagonally up-right and diagonally
        down-right; only lines that stay on the board are included.
        """
        return [[cell_to_player(v) for v in location] for location in self.win_location_cells()]

    def winner(self) -> Optional[Player]:
        """Return the player with four in a row, or None."""
        if self._winner is _UNKNOWN:
            cells = self.win_location_cells()
            complete = (cells[:, 0] != EMPTY) & np.all(cells == cells[:, :1], axis=1)
            hits = np.flatnonzero(complete)
            self._winner = cell_to_player(cells[hits[0], 0]) if hits.size else None
            if self._winner is not None:
                debug.trace(f"Four in a row for {self._winner}", "board")
        return self._winner

    def render(self, prefix: str = "") -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board
        """
        return render_board_ascii(self.grid, prefix)

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self.grid, other.grid)

    # Grids change in place, so boards are not hashable
    __hash__ = None

    def __repr__(self):
        return f"Board(empty={self.count_empty()}, winner={self.winner()})"

    def __str__(self) -> str:
        return self.render()
