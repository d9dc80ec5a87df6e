"""Validation utilities for KenKen puzzles and solutions."""

from __future__ import annotations
import math
from typing import TYPE_CHECKING, List, Sequence, Union

import numpy as np

from .puzzle import Operation

if TYPE_CHECKING:
    from .puzzle import Cage, Puzzle, Solution


def cage_satisfied(cage: Cage, values: Sequence[int]) -> bool:
    """
    Check whether values placed in a cage meet its arithmetic constraint.

    Sum and product cages may not hold the same value in two consecutive
    cells of their cell order, and difference and quotient cages need two
    distinct values.

    Args:
        cage: The cage.
        values: The values of the cage's cells, in the cage's cell order.

    Returns:
        True if the constraint holds.
    """
    op = cage.operation
    if op in (Operation.ADD, Operation.MUL):
        if not values or any(a == b for a, b in zip(values, values[1:])):
            return False
        if op == Operation.ADD:
            return sum(values) == cage.target
        return math.prod(values) == cage.target
    if op == Operation.FREE:
        return len(values) == 1 and values[0] == cage.target

    if len(values) != 2 or values[0] == values[1]:
        return False
    high, low = max(values), min(values)
    if op == Operation.SUB:
        return high - low == cage.target
    return high % low == 0 and high // low == cage.target


def is_latin_square(values: Sequence[int], size: int) -> bool:
    """Check that every row and column is a permutation of 1..size."""
    if len(values) != size * size:
        return False
    grid = np.asarray(values, dtype=np.int32).reshape(size, size)
    expected = np.arange(1, size + 1)
    for i in range(size):
        if not np.array_equal(np.sort(grid[i, :]), expected):
            return False
        if not np.array_equal(np.sort(grid[:, i]), expected):
            return False
    return True


def validate_solution(puzzle: Puzzle, solution: Union[Solution, Sequence[int]]) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The puzzle.
        solution: A Solution or a row-major sequence of values.

    Returns:
        True if the values form a Latin square and satisfy every cage.
    """
    values = list(getattr(solution, "values", solution))
    if not is_latin_square(values, puzzle.size):
        return False
    return all(
        cage_satisfied(cage, [values[i] for i in cage.cells])
        for cage in puzzle.cages
    )


def count_solutions(puzzle: Puzzle, limit: int = 0) -> int:
    """
    Count the solutions of a puzzle by plain backtracking.

    Works cell by cell in index order using only row/column checks, and
    checks a cage once its last cell is filled. It shares no code with the
    propagation solver, so it can be used to cross-check it.

    Args:
        puzzle: The puzzle.
        limit: Stop counting once this many solutions are found (0 = no limit).

    Returns:
        Number of solutions found (up to limit).
    """
    size = puzzle.size
    values: List[int] = [0] * puzzle.cell_count
    row_used = [set() for _ in range(size)]
    col_used = [set() for _ in range(size)]

    # Cages to check when a given cell gets filled
    closing: List[List[Cage]] = [[] for _ in range(puzzle.cell_count)]
    for cage in puzzle.cages:
        if cage.cells:
            closing[max(cage.cells)].append(cage)

    count = [0]  # Use list to allow modification in nested function

    def backtrack(idx: int) -> bool:
        """Returns True if limit reached."""
        if idx == puzzle.cell_count:
            count[0] += 1
            return limit > 0 and count[0] >= limit

        row, col = divmod(idx, size)
        for val in range(1, size + 1):
            if val in row_used[row] or val in col_used[col]:
                continue

            values[idx] = val
            if all(cage_satisfied(c, [values[i] for i in c.cells]) for c in closing[idx]):
                row_used[row].add(val)
                col_used[col].add(val)
                done = backtrack(idx + 1)
                row_used[row].discard(val)
                col_used[col].discard(val)
                if done:
                    return True
            values[idx] = 0

        return False

    backtrack(0)
    return count[0]


def has_unique_solution(puzzle: Puzzle) -> bool:
    """Check if a puzzle has exactly one solution."""
    return count_solutions(puzzle, limit=2) == 1
