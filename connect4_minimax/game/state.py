"""
state.py - Game tree nodes for the minimax search

A GameState pairs a board snapshot with the player about to move and the move
that produced it. Children are created on demand by initialize_children and
build_tree grows a whole tree to a fixed depth.
"""

from typing import List, Optional

from connect4_minimax.debug import debug
from connect4_minimax.game.board import Board
from connect4_minimax.utils import Player, Move


class GameState:
    """
    A node of the game tree.

    The node owns its children outright; nothing is shared between parents.
    `value` stays None until the search evaluates the node and is then fixed.
    """

    __slots__ = ("player", "board", "last_move", "children", "_value")

    def __init__(self, player: Player, board: Board, last_move: Optional[Move] = None):
        """
        Args:
            player: The player who moves next from this state
            board: Board snapshot; copied so the caller's board is never shared
            last_move: The move that produced this state, None for a root
        """
        self.player = player
        self.board = board.copy()
        self.last_move = last_move
        self.children: List['GameState'] = []
        self._value: Optional[int] = None

    @classmethod
    def _child(cls, player: Player, board: Board, last_move: Move) -> 'GameState':
        # Board is already a fresh copy made by Board.apply
        state = cls.__new__(cls)
        state.player = player
        state.board = board
        state.last_move = last_move
        state.children = []
        state._value = None
        return state

    @property
    def value(self) -> Optional[int]:
        return self._value

    @value.setter
    def value(self, value: int):
        if self._value is not None:
            raise RuntimeError(f"Value of {self!r} is already set to {self._value}")
        self._value = value

    def is_leaf(self) -> bool:
        return not self.children

    def initialize_children(self) -> None:
        """
        Create one child per legal move of self.player, in ascending column order.

        A board that already has a winner gets no children.
        """
        if self.board.winner() is not None:
            return
        opponent = self.player.opponent()
        self.children = [GameState._child(opponent, self.board.apply(move), move)
                         for move in self.board.legal_moves(self.player)]

    def __repr__(self):
        return (f"GameState(player={self.player}, last_move={self.last_move}, "
                f"children={len(self.children)}, value={self._value})")


def build_tree(state: GameState, depth: int) -> None:
    """
    Expand the game tree rooted at state to the given depth.

    NOTE: this runs in time exponential in depth (up to COLS children per
    node). Depths around 6 already take seconds.

    A state whose board has a winner is always a leaf, whatever the depth.
    """
    if depth <= 0:
        return
    state.initialize_children()
    for child in state.children:
        build_tree(child, depth - 1)


def count_nodes(state: GameState) -> int:
    """Count the nodes in the tree rooted at state."""
    return 1 + sum(count_nodes(child) for child in state.children)


def log_tree(state: GameState, depth: int = 1, component: str = "state") -> None:
    """Trace-log the top levels of a tree, one line per node."""
    def _walk(node: GameState, level: int):
        debug.trace("  " * level + repr(node), component)
        if level < depth:
            for child in node.children:
                _walk(child, level + 1)
    _walk(state, 0)
