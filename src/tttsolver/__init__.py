"""tttsolver package.

Exhaustive tic-tac-toe solving: position codec, outcome checks, the full
position table and a backward (retrograde) solver, plus text rendering and
a simple CLI.

Convenience imports are exposed for common workflows.
"""

from .display import render_position, render_tree
from .game_basics import decode, encode
from .solver import SolveStats, SolverInvariantError, solve, solve_all
from .state_space import Position, StateSpace

__all__ = [
    "decode",
    "encode",
    "Position",
    "StateSpace",
    "solve",
    "solve_all",
    "SolveStats",
    "SolverInvariantError",
    "render_position",
    "render_tree",
]
