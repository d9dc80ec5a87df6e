"""KenKen puzzle solver and generator."""

from .core import (
    Operation,
    Cage,
    Puzzle,
    Solution,
    KenkenError,
    CageShapeError,
    DepthExceededError,
    DEFAULT_MAX_DEPTH,
)
from .solvers import BacktrackingSolver, SolverStats

__version__ = "1.0.0"

__all__ = [
    "Operation",
    "Cage",
    "Puzzle",
    "Solution",
    "KenkenError",
    "CageShapeError",
    "DepthExceededError",
    "DEFAULT_MAX_DEPTH",
    "BacktrackingSolver",
    "SolverStats",
]
