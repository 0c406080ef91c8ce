"""
utils.py - Constants, enumerations and shared types for Connect Four

This module provides the board dimensions, the Player enumeration, the
Move value type and the exceptions raised by the board and the search.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
EMPTY = 0      # Grid value of an empty cell

# Search constants
WIN_SCORE = 10000
DEFAULT_DEPTH = 4

# (row, col) steps: vertical, horizontal, diagonal up-right, diagonal down-right
DIRECTION_VECTORS: List[Tuple[int, int]] = [(1, 0), (0, 1), (-1, 1), (1, 1)]


class Player(Enum):
    """The two sides of a game. RED moves first."""
    RED = 1
    YELLOW = 2

    def opponent(self) -> 'Player':
        """Get the other player."""
        return Player.YELLOW if self is Player.RED else Player.RED

    @property
    def symbol(self) -> str:
        return "R" if self is Player.RED else "Y"

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Move:
    """A player dropping a piece into a column. The row follows from gravity."""
    player: Player
    column: int

    def __str__(self):
        return f"{self.player} -> column {self.column}"


class Connect4Error(Exception):
    """Base class for errors raised by the Connect Four core."""


class IllegalMoveError(Connect4Error, ValueError):
    """A move into a full or unknown column, or after the game was won."""


class InvalidInputError(Connect4Error, ValueError):
    """A search was asked to run without a usable board."""


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < ROWS and 0 <= col < COLS


def cell_to_player(value: int) -> Optional[Player]:
    """Map a raw grid value to a Player, or None for an empty cell."""
    if value == EMPTY:
        return None
    return Player(int(value))


def compute_win_indices() -> np.ndarray:
    """
    Enumerate every run of CONNECT_N in-bounds cells on the grid.

    Each direction is scanned in turn, trying every cell as the start of
    a line, so the result order is stable: all vertical lines, then all
    horizontal, diagonal up-right and diagonal down-right lines.

    Returns:
        Integer array of shape (n_locations, CONNECT_N) holding flat
        (row * COLS + col) cell indices
    """
    locations = []
    for dr, dc in DIRECTION_VECTORS:
        for row in range(ROWS):
            for col in range(COLS):
                cells = [(row + i * dr, col + i * dc) for i in range(CONNECT_N)]
                if all(is_valid_position(r, c) for r, c in cells):
                    locations.append([r * COLS + c for r, c in cells])
    return np.array(locations, dtype=np.intp)


# Computed once; shared by win detection and the search heuristic
WIN_INDICES = compute_win_indices()


def render_board_ascii(grid: np.ndarray, prefix: str = "") -> str:
    """
    Render a grid as ASCII art.

    Args:
        grid: The raw board grid (ROWS x COLS)
        prefix: Text prepended to every line, typically indentation

    Returns:
        ASCII representation of the board with column numbers underneath
    """
    lines = []
    for row in range(ROWS):
        cells = []
        for col in range(COLS):
            player = cell_to_player(grid[row, col])
            cells.append(player.symbol if player else " ")
        lines.append(prefix + "|" + "|".join(cells) + "|")
    lines.append(prefix + " " + " ".join(str(col) for col in range(COLS)))
    return "\n".join(lines)
