"""Backtracking search on top of cage and row/column constraint propagation."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional

from .area import Area, Solved, clone_area, new_area, select_branch_cell
from .base_solver import BaseSolver
from .propagation import check_cage_shape, deduce
from ..core.exceptions import DepthExceededError
from ..core.puzzle import DEFAULT_MAX_DEPTH, Puzzle, Solution


@dataclass(frozen=True)
class SearchEvent:
    """
    Notification sent to a search observer.

    Attributes:
        kind: "branch", "contradiction" or "solution".
        depth: Recursion depth of the node.
        cell: Branching cell index ("branch" only).
        value: Value guessed for that cell ("branch" only).
    """
    kind: str
    depth: int
    cell: Optional[int] = None
    value: Optional[int] = None


SearchObserver = Callable[[SearchEvent], None]


class BacktrackingSolver(BaseSolver):
    """
    KenKen solver combining constraint propagation with backtracking.

    Each search node runs deduction sweeps to a fixed point. If cells are
    still unsolved, the cell with the fewest candidates (MRV) is picked and
    the search splits in two:

    - guess: a copy of the board where the cell holds its smallest candidate;
    - exclude: this node's board with that candidate removed.

    Both children are one level deeper. Together they cover every solution
    exactly once, so the search can count solutions as well as find them.
    """

    name = "Propagation+Backtracking"

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_solutions: int = 0,
        observer: Optional[SearchObserver] = None,
        track_memory: bool = False,
    ):
        """
        Initialize the solver.

        Args:
            max_depth: Deepest recursion level the search may enter. Going
                       deeper aborts the whole search with DepthExceededError.
            max_solutions: Stop exploring once this many solutions are
                           found (0 = find them all).
            observer: Optional callable notified of branches, contradictions
                      and solutions.
            track_memory: Record peak memory in the stats.
        """
        super().__init__(track_memory=track_memory)
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")
        if max_solutions < 0:
            raise ValueError(f"max_solutions must be non-negative, got {max_solutions}")
        self.max_depth = max_depth
        self.max_solutions = max_solutions
        self.observer = observer
        self._puzzle: Optional[Puzzle] = None
        self._solutions: List[Solution] = []
        self._sweeps = [0]

    def _solve(self, puzzle: Puzzle) -> Optional[List[Solution]]:
        """Search the puzzle from a fresh board."""
        for cage in puzzle.cages:
            check_cage_shape(cage)

        self._puzzle = puzzle
        self._solutions = []
        self._sweeps = [0]
        self.stats.extra["deepest"] = 0

        try:
            self._search(new_area(puzzle.size), 0)
        finally:
            self.stats.iterations = self._sweeps[0]
            self.stats.extra["solutions"] = len(self._solutions)

        return self._solutions or None

    def _budget_reached(self) -> bool:
        return self.max_solutions > 0 and len(self._solutions) >= self.max_solutions

    def _notify(self, kind: str, depth: int, cell: Optional[int] = None,
                value: Optional[int] = None) -> None:
        if self.observer is not None:
            self.observer(SearchEvent(kind, depth, cell, value))

    def _search(self, area: Area, depth: int) -> None:
        """
        Recursive search. ``area`` belongs to this call and may be modified.

        Solutions are appended to ``self._solutions``.
        """
        if depth > self.max_depth:
            raise DepthExceededError(self.max_depth)

        self.stats.nodes_explored += 1
        if depth > self.stats.extra["deepest"]:
            self.stats.extra["deepest"] = depth

        if not deduce(self._puzzle, area, self._sweeps):
            self.stats.backtracks += 1
            self._notify("contradiction", depth)
            return

        index = select_branch_cell(area)
        if index is None:
            # No unsolved cell left
            self._solutions.append(Solution.from_area(area, depth))
            self._notify("solution", depth)
            return

        # Guess the smallest candidate, not the first one a cage sequence produced
        value = min(area[index].values)
        self._notify("branch", depth, index, value)

        guess = clone_area(area)
        guess[index] = Solved(value)
        self._search(guess, depth + 1)

        if self._budget_reached():
            return

        area[index].values.discard(value)
        self._search(area, depth + 1)
