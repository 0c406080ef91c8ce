import pytest

from connect4_minimax.ai.minimax import MinimaxAI
from connect4_minimax.ai.simple import DummySolver, RandomSolver
from connect4_minimax.debug import debug, DebugLevel
from connect4_minimax.interfaces.cli import main, make_solver, HumanSolver, QuitGame
from connect4_minimax.utils import ROWS, COLS, Move

from tests.conftest import play, RED, YELLOW

EMPTY_POSITION = ",".join(["0"] * (ROWS * COLS))


@pytest.fixture(autouse=True)
def restore_debug_level():
    level = debug.level
    yield
    debug.configure(level=level)


def test_make_solver_builds_each_kind():
    assert isinstance(make_solver('minimax', RED, 3), MinimaxAI)
    assert make_solver('minimax', RED, 3).depth == 3
    assert isinstance(make_solver('random', YELLOW, seed=1), RandomSolver)
    assert isinstance(make_solver('dummy', YELLOW), DummySolver)
    with pytest.raises(ValueError):
        make_solver('oracle', RED)


def test_analyze_reports_best_columns(capsys):
    assert main(['analyze', '--depth', '1', '--position', EMPTY_POSITION]) == 0
    out = capsys.readouterr().out
    assert "RED to move" in out
    assert "Best columns at depth 1: [3]" in out


def test_analyze_reports_existing_winner(capsys):
    values = ["0"] * (ROWS * COLS)
    for row in range(ROWS - 4, ROWS):
        values[row * COLS] = "2"
    assert main(['analyze', '--position', ",".join(values)]) == 0
    assert "YELLOW has four in a row" in capsys.readouterr().out


def test_analyze_rejects_malformed_position(capsys):
    assert main(['analyze', '--position', '1,2,3']) == 1
    assert "Error" in capsys.readouterr().out


def test_watch_plays_a_full_game(capsys):
    assert main(['watch', '--red', 'dummy', '--yellow', 'dummy']) == 0
    out = capsys.readouterr().out
    assert "Move 19: RED -> column 3" in out
    assert "RED wins!" in out


def test_debug_level_flag_configures_logging():
    main(['--debug_level', 'trace', 'watch', '--red', 'dummy', '--yellow', 'dummy'])
    assert debug.level is DebugLevel.TRACE


def test_missing_command_fails(capsys):
    assert main([]) == 1


def test_human_solver_retries_until_a_legal_column():
    answers = iter(["x", "9", "2"])
    solver = HumanSolver(RED, input_fn=lambda prompt: next(answers))
    assert solver.get_moves(play((YELLOW, 0))) == [Move(RED, 2)]


def test_human_solver_quit():
    solver = HumanSolver(RED, input_fn=lambda prompt: "q")
    with pytest.raises(QuitGame):
        solver.get_moves(play())


def test_play_ends_when_human_quits(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt: "q")
    assert main(['play', '--ai', 'dummy']) == 0
    assert "Quitting game." in capsys.readouterr().out
