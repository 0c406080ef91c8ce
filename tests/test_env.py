import numpy as np

from connect4_minimax.ai.base import Solver
from connect4_minimax.ai.simple import DummySolver
from connect4_minimax.game.rules import ConnectFourEnv
from connect4_minimax.utils import ROWS, COLS

from tests.conftest import RED, YELLOW


class ColumnSolver(Solver):
    """Always plays the lowest-numbered open column from a preferred one onwards."""

    def __init__(self, player, column):
        super().__init__(player)
        self.column = column

    def get_moves(self, board):
        legal = board.legal_moves(self.player)
        return [m for m in legal if m.column >= self.column][:1] or legal[:1]


def test_reset_gives_empty_observation():
    env = ConnectFourEnv(ColumnSolver(YELLOW, 6))
    observation, info = env.reset(seed=0)
    assert observation.shape == (ROWS, COLS)
    assert not observation.any()
    assert env.observation_space.contains(observation)
    assert info['valid_moves'] == list(range(COLS))
    assert info['agent_player'] == 'RED'


def test_opponent_opens_when_it_plays_red():
    env = ConnectFourEnv(ColumnSolver(RED, 3))
    observation, _ = env.reset()
    assert env.agent_player is YELLOW
    assert np.count_nonzero(observation) == 1
    assert observation[ROWS - 1, 3] == RED.value


def test_step_applies_agent_and_opponent_moves():
    env = ConnectFourEnv(ColumnSolver(YELLOW, 6))
    env.reset()
    observation, reward, terminated, truncated, info = env.step(0)
    assert observation[ROWS - 1, 0] == RED.value
    assert observation[ROWS - 1, 6] == YELLOW.value
    assert reward == env.reward_step
    assert not terminated and not truncated
    assert info['empty_cells'] == ROWS * COLS - 2


def test_agent_win_is_rewarded():
    env = ConnectFourEnv(ColumnSolver(YELLOW, 6))
    env.reset()
    for _ in range(3):
        _, _, terminated, _, _ = env.step(0)
        assert not terminated
    _, reward, terminated, truncated, info = env.step(0)
    assert reward == env.reward_win
    assert terminated and not truncated
    assert info['winner'] == 'RED'


def test_agent_loss_is_penalized():
    env = ConnectFourEnv(ColumnSolver(YELLOW, 6))
    env.reset()
    reward, terminated = None, False
    for column in (0, 1, 0):
        _, reward, terminated, _, _ = env.step(column)
    assert not terminated
    _, reward, terminated, _, info = env.step(2)
    assert reward == env.reward_lose
    assert terminated
    assert info['winner'] == 'YELLOW'


def test_invalid_action_truncates_without_changing_board():
    env = ConnectFourEnv(DummySolver(YELLOW))
    env.reset()
    observation, reward, terminated, truncated, info = env.step(COLS)
    assert reward == env.reward_invalid_move
    assert truncated and not terminated
    assert info['invalid_move']
    assert not observation.any()


def test_ascii_render():
    env = ConnectFourEnv(ColumnSolver(YELLOW, 6), render_mode="ascii")
    env.reset()
    env.step(0)
    assert "R" in env.render() and "Y" in env.render()


def test_step_after_game_end_repeats_final_outcome():
    env = ConnectFourEnv(ColumnSolver(YELLOW, 6))
    env.reset()
    for _ in range(4):
        final = env.step(0)
    assert final[2]

    observation, reward, terminated, truncated, info = env.step(1)
    assert reward == env.reward_win
    assert terminated and not truncated
    assert 'invalid_move' not in info
    assert np.array_equal(observation, final[0])
