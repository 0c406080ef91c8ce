"""
rules.py - Turn-taking game loop and Gymnasium environment for Connect Four

This module provides:
1. Game, which alternates two Solvers on a shared board until the game ends
2. ConnectFourEnv, a gymnasium environment where an agent plays one colour
   against a Solver
"""

import random
from typing import Dict, List, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connect4_minimax.ai.base import Solver
from connect4_minimax.debug import debug
from connect4_minimax.game.board import Board
from connect4_minimax.utils import ROWS, COLS, Player, Move, IllegalMoveError


def player_to_move(board: Board) -> Player:
    """Infer whose turn it is from piece counts. RED moves first."""
    red = int(np.count_nonzero(board.grid == Player.RED.value))
    yellow = int(np.count_nonzero(board.grid == Player.YELLOW.value))
    return Player.RED if red <= yellow else Player.YELLOW


class Game:
    """
    A game of Connect Four between two solvers.

    Each turn the active solver proposes a set of equally good moves, one of
    them is picked and applied to the shared board.
    """

    def __init__(self, red: Solver, yellow: Solver, board: Optional[Board] = None,
                 rng: Optional[random.Random] = None):
        """
        Args:
            red: Solver playing RED
            yellow: Solver playing YELLOW
            board: Starting position; an empty board if omitted
            rng: Picks among tied moves when given, otherwise the first move is played
        """
        if red.player is not Player.RED or yellow.player is not Player.YELLOW:
            raise ValueError(f"Solvers must play RED and YELLOW, got {red!r} and {yellow!r}")
        debug.debug(f"Initializing Game: {red!r} vs {yellow!r}", "game")
        self.solvers = {Player.RED: red, Player.YELLOW: yellow}
        self.board = board.copy() if board is not None else Board()
        self.active_player = player_to_move(self.board)
        self.history: List[Move] = []
        self._rng = rng

    def is_game_over(self) -> bool:
        return self.board.winner() is not None or self.board.is_full()

    def get_winner(self) -> Optional[Player]:
        return self.board.winner()

    def _select(self, moves: List[Move]) -> Move:
        if self._rng is not None:
            return self._rng.choice(moves)
        return moves[0]

    def play_turn(self) -> Move:
        """
        Let the active solver move once.

        Returns:
            The move that was applied

        Raises:
            IllegalMoveError: the game is over, the solver proposed nothing,
                or it proposed a move for the wrong player
        """
        if self.is_game_over():
            raise IllegalMoveError("The game is over")

        solver = self.solvers[self.active_player]
        moves = solver.get_moves(self.board)
        if not moves:
            raise IllegalMoveError(f"{solver!r} proposed no move on a live board")

        move = self._select(moves)
        if move.player is not self.active_player:
            raise IllegalMoveError(f"{solver!r} proposed {move} but {self.active_player} is to move")

        self.board.make_move(move)
        self.history.append(move)
        debug.debug(f"Turn {len(self.history)}: {move}", "game")
        self.active_player = self.active_player.opponent()
        return move

    def run_game(self) -> Optional[Player]:
        """
        Play turns until the game is over.

        Returns:
            The winner, or None for a draw
        """
        while not self.is_game_over():
            self.play_turn()

        winner = self.get_winner()
        debug.info(f"Game over after {len(self.history)} moves: "
                   f"{winner if winner else 'draw'}", "game")
        return winner

    def render(self) -> str:
        return self.board.render()


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    The agent controls `agent_player`; every agent move is answered by the
    opponent solver before the next observation is returned.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, opponent: Solver, render_mode: Optional[str] = None):
        """
        Args:
            opponent: Solver playing against the agent; the agent takes the other colour
            render_mode: Mode for rendering the environment
        """
        debug.debug(f"Initializing ConnectFourEnv against {opponent!r}", "env")

        self.action_space = spaces.Discrete(COLS)
        # 6x7 board with 3 possible values (0, 1, 2)
        self.observation_space = spaces.Box(low=0, high=2, shape=(ROWS, COLS), dtype=np.int8)

        self.opponent = opponent
        self.agent_player = opponent.player.opponent()
        self.board = Board()
        self.render_mode = render_mode
        self._rng = random.Random()

        # Reward settings
        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small penalty to encourage faster wins

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to an empty board.

        When the opponent plays RED it moves before the first observation.
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        if seed is not None:
            self._rng.seed(seed)

        self.board = Board()
        if self.opponent.player is Player.RED:
            self._opponent_move()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the agent's move in column `action`, then the opponent's reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")
        reward, terminated = self._outcome()
        if terminated:
            # Finished episode: repeat the final outcome, the board is frozen
            debug.warning(f"Step with action {action} after the game ended", "env")
            return self._get_observation(), reward, True, False, self._get_info()

        move = Move(self.agent_player, int(action))

        try:
            self.board.make_move(move)
        except IllegalMoveError as e:
            debug.warning(f"Invalid action {action}: {e}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward, terminated = self._outcome()
        if not terminated:
            self._opponent_move()
            reward, terminated = self._outcome()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def _opponent_move(self) -> None:
        moves = self.opponent.get_moves(self.board)
        if moves:
            self.board.make_move(self._rng.choice(moves))

    def _outcome(self) -> Tuple[float, bool]:
        winner = self.board.winner()
        if winner is self.agent_player:
            debug.info(f"Game over: agent ({winner}) wins", "env")
            return self.reward_win, True
        if winner is not None:
            debug.info(f"Game over: opponent ({winner}) wins", "env")
            return self.reward_lose, True
        if self.board.is_full():
            debug.info("Game over: draw", "env")
            return self.reward_draw, True
        return self.reward_step, False

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.board.render()
        if self.render_mode == "human":
            print(self.board.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.board.grid.copy()

    def _get_info(self) -> Dict:
        winner = self.board.winner()
        return {
            'valid_moves': [m.column for m in self.board.legal_moves(self.agent_player)],
            'agent_player': self.agent_player.name,
            'winner': winner.name if winner else None,
            'empty_cells': self.board.count_empty(),
        }
