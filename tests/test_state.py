import logging

import pytest

from connect4_minimax.debug import debug, DebugLevel, LOGGER_NAME
from connect4_minimax.game.board import Board
from connect4_minimax.game.state import GameState, build_tree, count_nodes, log_tree
from connect4_minimax.utils import ROWS, COLS, Move

from tests.conftest import play, RED, YELLOW


def test_root_keeps_a_private_copy_of_the_board():
    board = Board()
    state = GameState(RED, board)
    board.make_move(Move(RED, 0))
    assert state.board.count_empty() == ROWS * COLS
    assert state.last_move is None
    assert state.value is None
    assert state.is_leaf()


def test_initialize_children_follows_legal_move_order():
    board = play((RED, 0))
    state = GameState(YELLOW, board, Move(RED, 0))
    state.initialize_children()

    assert [child.last_move for child in state.children] == board.legal_moves(YELLOW)
    for child in state.children:
        assert child.player is RED
        assert child.last_move.player is YELLOW
        assert child.board == board.apply(child.last_move)
        assert child.children == []
    # Parent board untouched
    assert state.board == board


def test_initialize_children_skips_full_columns():
    board = Board()
    for i in range(ROWS):
        board.make_move(Move(RED if i % 2 == 0 else YELLOW, 2))
    state = GameState(RED, board)
    state.initialize_children()
    assert [child.last_move.column for child in state.children] == [0, 1, 3, 4, 5, 6]


def test_initialize_children_on_won_board_creates_none():
    board = play((RED, 1), (RED, 1), (RED, 1), (RED, 1))
    state = GameState(YELLOW, board)
    state.initialize_children()
    assert state.children == []


def test_initialize_children_on_full_board_creates_none(draw_board):
    state = GameState(RED, draw_board)
    state.initialize_children()
    assert state.children == []


def test_depth_zero_tree_has_no_children(winning_scenario_board):
    for board in (Board(), winning_scenario_board):
        state = GameState(RED, board)
        build_tree(state, 0)
        assert state.children == []


def test_winning_state_is_leaf_at_any_depth():
    board = play((YELLOW, 0), (RED, 0), (YELLOW, 1), (RED, 0), (YELLOW, 2), (RED, 0), (YELLOW, 3))
    assert board.winner() is YELLOW
    state = GameState(RED, board)
    build_tree(state, 100)
    assert state.children == []


def test_build_tree_expands_every_level():
    state = GameState(RED, Board())
    build_tree(state, 2)
    assert len(state.children) == COLS
    assert all(len(child.children) == COLS for child in state.children)
    assert all(grandchild.children == []
               for child in state.children for grandchild in child.children)
    assert count_nodes(state) == 1 + COLS + COLS * COLS


def test_build_tree_stops_below_a_win(red_wins_vertically):
    # RED to move, one piece short of four in column 1
    board = play((RED, 1), (YELLOW, 2), (RED, 1), (YELLOW, 2), (RED, 1), (YELLOW, 2))
    state = GameState(RED, board)
    build_tree(state, 3)
    winning_child = state.children[1]
    assert winning_child.last_move == Move(RED, 1)
    assert winning_child.board == red_wins_vertically
    assert winning_child.children == []


def test_value_can_only_be_set_once():
    state = GameState(RED, Board())
    state.value = 5
    assert state.value == 5
    with pytest.raises(RuntimeError):
        state.value = 6
    assert state.value == 5


def test_log_tree_writes_one_line_per_node(caplog):
    state = GameState(RED, Board())
    build_tree(state, 1)
    level = debug.level
    debug.configure(level=DebugLevel.TRACE)
    debug.logger.propagate = True
    try:
        with caplog.at_level(logging.DEBUG - 5, logger=LOGGER_NAME):
            log_tree(state, depth=1)
    finally:
        debug.logger.propagate = False
        debug.configure(level=level)

    lines = [r.getMessage() for r in caplog.records]
    assert len(lines) == 1 + COLS
    assert lines[0] == f"[state] {state!r}"
    assert all("GameState(player=YELLOW" in line for line in lines[1:])
