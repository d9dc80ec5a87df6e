"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import time
import tracemalloc

from ..core.puzzle import Puzzle, Solution


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0

    # Algorithm-specific metrics
    backtracks: int = 0
    nodes_explored: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for KenKen solvers."""

    name: str = "BaseSolver"

    def __init__(self, track_memory: bool = False):
        """
        Args:
            track_memory: Record peak memory with tracemalloc. Slows the
                          search down noticeably, so it is off by default.
        """
        self.track_memory = track_memory
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, puzzle: Puzzle) -> Tuple[Optional[List[Solution]], SolverStats]:
        """
        Solve a KenKen puzzle with timing and optional memory tracking.

        Errors raised by the search are not caught: the stats are still
        completed, then the error propagates to the caller.

        Args:
            puzzle: The puzzle to solve.

        Returns:
            Tuple of (solutions or None, stats).
        """
        self.stats = SolverStats(algorithm=self.name)

        if self.track_memory:
            tracemalloc.start()
        start_time = time.perf_counter()

        try:
            solutions = self._solve(puzzle)
            self.stats.solved = bool(solutions)
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            if self.track_memory:
                _, peak = tracemalloc.get_traced_memory()
                tracemalloc.stop()
                self.stats.memory_bytes = peak

        return solutions, self.stats

    @abstractmethod
    def _solve(self, puzzle: Puzzle) -> Optional[List[Solution]]:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            puzzle: The puzzle to solve. Must not be modified.

        Returns:
            The solutions found, or None if there are none.
        """
        pass

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)
