"""
connect4_minimax/ai/__init__.py - Move sources for Connect Four

This package provides the Solver interface, the fixed-depth minimax search
and a couple of trivial solvers.
"""

from connect4_minimax.ai.base import Solver
from connect4_minimax.ai.minimax import MinimaxAI
from connect4_minimax.ai.simple import DummySolver, RandomSolver

__all__ = ['Solver', 'MinimaxAI', 'DummySolver', 'RandomSolver']
