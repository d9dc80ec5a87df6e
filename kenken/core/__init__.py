"""Core module for KenKen puzzle representation and validation."""

from .exceptions import KenkenError, CageShapeError, DepthExceededError
from .grid import LatinGrid
from .puzzle import Operation, Cage, Puzzle, Solution, DEFAULT_MAX_DEPTH
from .validator import validate_solution, count_solutions, has_unique_solution

__all__ = [
    "KenkenError",
    "CageShapeError",
    "DepthExceededError",
    "LatinGrid",
    "Operation",
    "Cage",
    "Puzzle",
    "Solution",
    "DEFAULT_MAX_DEPTH",
    "validate_solution",
    "count_solutions",
    "has_unique_solution",
]
