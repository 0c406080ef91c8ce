"""
cli.py - Command-line interface for the Connect Four minimax player

This module provides a CLI for playing against the search, watching two
solvers play each other, analyzing board positions and timing searches.
"""

import argparse
import random
import sys
from typing import List, Optional

from connect4_minimax.ai.base import Solver
from connect4_minimax.ai.minimax import MinimaxAI
from connect4_minimax.ai.simple import DummySolver, RandomSolver
from connect4_minimax.debug import debug, DebugLevel
from connect4_minimax.game.board import Board
from connect4_minimax.game.rules import Game, player_to_move
from connect4_minimax.utils import COLS, DEFAULT_DEPTH, Player, Move, Connect4Error

SOLVER_CHOICES = ['minimax', 'random', 'dummy']


class QuitGame(Exception):
    """The human player asked to leave the game."""


def make_solver(kind: str, player: Player, depth: int = DEFAULT_DEPTH,
                seed: Optional[int] = None) -> Solver:
    """Build a solver by name for the given player."""
    if kind == 'minimax':
        return MinimaxAI(player, depth)
    if kind == 'random':
        return RandomSolver(player, seed)
    if kind == 'dummy':
        return DummySolver(player)
    raise ValueError(f"Unknown solver type: {kind}")


class HumanSolver(Solver):
    """Reads moves from standard input."""

    def __init__(self, player: Player, input_fn=None):
        super().__init__(player)
        self._input = input_fn or input

    def get_moves(self, board: Board) -> List[Move]:
        legal = {m.column: m for m in board.legal_moves(self.player)}
        while True:
            user_input = self._input(f"Your move (columns {sorted(legal)}, q to quit): ").strip().lower()
            if user_input == 'q':
                raise QuitGame
            try:
                column = int(user_input)
            except ValueError:
                print("Invalid input. Please enter a column number or 'q'.")
                continue
            if column in legal:
                return [legal[column]]
            print(f"Column {column} is not playable.")


class SimpleCLI:
    """Command-line interface for the Connect Four minimax player."""

    def __init__(self, argv: Optional[List[str]] = None):
        self.argv = argv
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Connect Four with fixed-depth minimax')
        parser.add_argument('--debug', action='store_true',
                            help='Enable debug mode (equivalent to --debug_level debug)')
        parser.add_argument('--debug_level',
                            choices=[level.name.lower() for level in DebugLevel],
                            default='warning',
                            help='Logging verbosity')
        parser.add_argument('--log_file', type=str, default=None, help='Also log to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play against the computer')
        play_parser.add_argument('--ai', choices=SOLVER_CHOICES, default='minimax',
                                 help='Opponent type')
        play_parser.add_argument('--depth', type=int, default=DEFAULT_DEPTH, help='Search depth')
        play_parser.add_argument('--second', action='store_true',
                                 help='Play YELLOW and let the computer open')
        play_parser.add_argument('--seed', type=int, default=None, help='Random seed')

        watch_parser = subparsers.add_parser('watch', help='Watch two solvers play each other')
        watch_parser.add_argument('--red', choices=SOLVER_CHOICES, default='minimax')
        watch_parser.add_argument('--yellow', choices=SOLVER_CHOICES, default='minimax')
        watch_parser.add_argument('--red_depth', type=int, default=DEFAULT_DEPTH)
        watch_parser.add_argument('--yellow_depth', type=int, default=DEFAULT_DEPTH)
        watch_parser.add_argument('--seed', type=int, default=None,
                                  help='Random seed for tie breaks and random solvers')

        analyze_parser = subparsers.add_parser('analyze', help='Analyze a board position')
        analyze_parser.add_argument('--position', type=str, required=True,
                                    help='42 comma-separated cell values (0 empty, 1 red, 2 yellow), top row first')
        analyze_parser.add_argument('--depth', type=int, default=DEFAULT_DEPTH, help='Search depth')

        benchmark_parser = subparsers.add_parser('benchmark', help='Time minimax searches')
        benchmark_parser.add_argument('--depth', type=int, default=DEFAULT_DEPTH, help='Search depth')
        benchmark_parser.add_argument('--iterations', type=int, default=3,
                                      help='Number of searches to time')
        return parser

    def parse_args(self) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(self.argv)

        level = DebugLevel.DEBUG if self.args.debug else DebugLevel.from_string(self.args.debug_level)
        debug.configure(level=level, log_file=self.args.log_file)

    def run(self) -> int:
        """Run the CLI based on the parsed arguments. Returns an exit code."""
        if not self.args:
            self.parse_args()

        commands = {
            'play': self.play_game,
            'watch': self.watch_game,
            'analyze': self.analyze_position,
            'benchmark': self.benchmark,
        }
        command = commands.get(self.args.command)
        if command is None:
            print("Please specify a command. Use --help for options.")
            return 1

        try:
            command()
        except Connect4Error as e:
            debug.error(f"{self.args.command} failed: {e}", "cli")
            print(f"Error: {e}")
            return 1
        except ValueError as e:
            print(f"Error: {e}")
            return 1
        return 0

    def _rng(self) -> Optional[random.Random]:
        # Without a seed the first of several tied moves is played
        if self.args.seed is None:
            return None
        return random.Random(self.args.seed)

    def _report(self, game: Game) -> None:
        winner = game.get_winner()
        print("Game over!")
        print(f"{winner} wins!" if winner else "It's a draw!")

    def play_game(self) -> None:
        """Play a game against the computer."""
        human_player = Player.YELLOW if self.args.second else Player.RED
        computer = make_solver(self.args.ai, human_player.opponent(), self.args.depth, self.args.seed)
        human = HumanSolver(human_player)
        solvers = {human_player: human, computer.player: computer}

        game = Game(solvers[Player.RED], solvers[Player.YELLOW], rng=self._rng())
        print(f"You are {human_player}. Enter a column number (0-{COLS - 1}) to move.")
        print(game.render())

        try:
            while not game.is_game_over():
                if game.active_player is computer.player:
                    print("Computer is thinking...")
                move = game.play_turn()
                print(f"\n{move}")
                print(game.render())
        except QuitGame:
            print("\nQuitting game.")
            return

        self._report(game)

    def watch_game(self) -> None:
        """Let two solvers play a full game and print every move."""
        seed = self.args.seed
        red = make_solver(self.args.red, Player.RED, self.args.red_depth, seed)
        yellow = make_solver(self.args.yellow, Player.YELLOW, self.args.yellow_depth, seed)
        game = Game(red, yellow, rng=self._rng())
        print(f"{red!r} vs {yellow!r}")

        while not game.is_game_over():
            move = game.play_turn()
            print(f"\nMove {len(game.history)}: {move}")
            print(game.render())

        self._report(game)

    def analyze_position(self) -> None:
        """Report winner, legal moves and best moves for a position."""
        board = Board.from_position(self.args.position)
        print("Loaded position:")
        print(board.render())

        winner = board.winner()
        if winner is not None:
            print(f"\n{winner} has four in a row")
            return

        player = player_to_move(board)
        legal = board.legal_moves(player)
        print(f"\n{player} to move, empty cells: {board.count_empty()}")
        print(f"Legal columns: {[m.column for m in legal]}")
        if not legal:
            print("Board is full")
            return

        ai = MinimaxAI(player, self.args.depth)
        best = ai.get_moves(board)
        print(f"Best columns at depth {self.args.depth}: {[m.column for m in best]} "
              f"({ai.nodes_evaluated} nodes)")

    def benchmark(self) -> None:
        """Time searches from the empty board."""
        iterations = max(1, self.args.iterations)
        print(f"Running {iterations} searches at depth {self.args.depth}...")

        ai = MinimaxAI(Player.RED, self.args.depth)
        board = Board()
        total = 0.0
        for _ in range(iterations):
            debug.start_timer("benchmark")
            ai.get_moves(board)
            total += debug.end_timer("benchmark")

        print(f"{ai.nodes_evaluated} nodes per search, "
              f"{total / iterations:.3f} seconds per search, "
              f"{total / (iterations * ai.nodes_evaluated) * 1e6:.2f} us per node")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI(argv)
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
