"""Solvers module for KenKen puzzles."""

from .base_solver import BaseSolver, SolverStats
from .backtracking_solver import BacktrackingSolver, SearchEvent
from .sequences import generate_sum, generate_product, generate_difference, generate_quotient

__all__ = [
    "BaseSolver",
    "SolverStats",
    "BacktrackingSolver",
    "SearchEvent",
    "generate_sum",
    "generate_product",
    "generate_difference",
    "generate_quotient",
]
