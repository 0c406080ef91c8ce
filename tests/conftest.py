import numpy as np
import pytest

from connect4_minimax.game.board import Board
from connect4_minimax.utils import Player, Move

RED, YELLOW = Player.RED, Player.YELLOW


def play(*moves):
    """Build a board from (player, column) pairs."""
    return Board.from_moves(Move(player, column) for player, column in moves)


@pytest.fixture
def draw_board():
    """A full board with no four in a row."""
    a = [1, 1, 2, 2, 1, 1, 2]
    b = [2, 2, 1, 1, 2, 2, 1]
    return Board(np.array([a, b, a, b, a, b]))


@pytest.fixture
def red_wins_vertically():
    return play((RED, 1), (YELLOW, 2), (RED, 1), (YELLOW, 2), (RED, 1), (YELLOW, 2), (RED, 1))


@pytest.fixture
def winning_scenario_board():
    """RED to move with two winning columns, 1 and 4."""
    return play(
        (RED, 1), (YELLOW, 2), (RED, 2), (YELLOW, 1), (RED, 3), (YELLOW, 3), (RED, 3),
        (YELLOW, 0), (RED, 4), (YELLOW, 5), (RED, 2), (YELLOW, 4), (RED, 4), (YELLOW, 6),
    )


@pytest.fixture
def blocking_scenario_board():
    """YELLOW threatens to complete the bottom row in column 3."""
    return play((YELLOW, 0), (RED, 0), (YELLOW, 1), (RED, 0), (YELLOW, 2))
