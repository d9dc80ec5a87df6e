"""Constraint propagation: cage arithmetic and row/column exclusivity."""

from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Set

from ..core.exceptions import CageShapeError
from ..core.puzzle import Cage, Operation, Puzzle
from .area import Area, Candidates, Solved
from .sequences import (
    generate_difference,
    generate_product,
    generate_quotient,
    generate_sum,
)


def check_cage_shape(cage: Cage) -> None:
    """Raise CageShapeError if the cage's cell count doesn't fit its operation."""
    count = len(cage.cells)
    op = cage.operation
    if op in (Operation.SUB, Operation.DIV) and count != 2:
        raise CageShapeError(op, count, "exactly 2 cells")
    if op == Operation.FREE and count != 1:
        raise CageShapeError(op, count, "exactly 1 cell")
    if op in (Operation.ADD, Operation.MUL) and count < 1:
        raise CageShapeError(op, count, "at least 1 cell")


def _narrow(cell: Candidates, allowed: Set[int]) -> int:
    """Intersect a cell's candidates with ``allowed``; return how many were removed."""
    before = len(cell.values)
    cell.values &= allowed
    return before - len(cell.values)


def apply_cage(cage: Cage, area: Area, size: int) -> Optional[int]:
    """
    Narrow the candidates of a cage's cells to values that fit its constraint.

    Every unsolved cell keeps exactly the values it takes in some admissible
    assignment of the cage. Solved cells are never modified, they only
    restrict the assignments.

    Args:
        cage: The cage to apply.
        area: The full board, modified in place.
        size: Board size.

    Returns:
        Number of candidates removed, or None if the cage admits no
        assignment at all.

    Raises:
        CageShapeError: The cage has the wrong cell count for its operation.
    """
    check_cage_shape(cage)
    cells = [area[i] for i in cage.cells]
    op = cage.operation

    if op == Operation.FREE:
        cell = cells[0]
        if cell.solved:
            return 0 if cell.value == cage.target else None
        removed = _narrow(cell, {cage.target})
        return removed if cell.values else None

    if op == Operation.ADD:
        assignments: Sequence[Sequence[int]] = generate_sum(len(cells), size, cage.target, cells)
    elif op == Operation.MUL:
        assignments = generate_product(len(cells), size, cage.target, cells)
    elif op == Operation.SUB:
        assignments = generate_difference(size, cage.target, cells)
    else:
        assignments = generate_quotient(size, cage.target, cells)

    if not assignments:
        return None

    removed = 0
    for pos, cell in enumerate(cells):
        if not cell.solved:
            removed += _narrow(cell, {a[pos] for a in assignments})
    return removed


def exclude_solved(area: Area, indices: Iterable[int]) -> Optional[int]:
    """
    Remove the values solved in one row or column from its other cells.

    Returns:
        Number of candidates removed, or None if the line holds the same
        solved value twice.
    """
    indices = list(indices)
    placed = set()
    for i in indices:
        cell = area[i]
        if cell.solved:
            if cell.value in placed:
                return None
            placed.add(cell.value)

    removed = 0
    if placed:
        for i in indices:
            cell = area[i]
            if not cell.solved:
                before = len(cell.values)
                cell.values -= placed
                removed += before - len(cell.values)
    return removed


def sweep(puzzle: Puzzle, area: Area) -> Optional[int]:
    """
    One deduction sweep: every cage, then every row, then every column.

    Every cage is applied even after a contradiction, so malformed cages are
    always reported.

    Returns:
        Number of candidates removed, or None if a contradiction was found.
    """
    size = puzzle.size
    removed = 0
    contradiction = False

    for cage in puzzle.cages:
        result = apply_cage(cage, area, size)
        if result is None:
            contradiction = True
        else:
            removed += result
    if contradiction:
        return None

    lines: List[Iterable[int]] = []
    lines.extend(range(row * size, (row + 1) * size) for row in range(size))
    lines.extend(range(col, size * size, size) for col in range(size))
    for line in lines:
        result = exclude_solved(area, line)
        if result is None:
            return None
        removed += result

    return removed


def promote(area: Area) -> Optional[int]:
    """
    Promote every single-candidate cell to solved.

    Returns:
        Number of promoted cells, or None if some cell has no candidate left.
    """
    promoted = 0
    for i, cell in enumerate(area):
        if cell.solved:
            continue
        if not cell.values:
            return None
        if len(cell.values) == 1:
            area[i] = Solved(next(iter(cell.values)))
            promoted += 1
    return promoted


def deduce(puzzle: Puzzle, area: Area, sweeps: Optional[List[int]] = None) -> bool:
    """
    Run deduction sweeps until a fixed point or a contradiction.

    The fixed point is a sweep that neither removes a candidate nor solves a
    cell, so calling this again on its result changes nothing.

    Args:
        puzzle: The puzzle.
        area: Board state, modified in place.
        sweeps: Optional one-element counter incremented once per sweep.

    Returns:
        False if the board is contradictory.
    """
    while True:
        if sweeps is not None:
            sweeps[0] += 1
        removed = sweep(puzzle, area)
        if removed is None:
            return False
        promoted = promote(area)
        if promoted is None:
            return False
        if removed == 0 and promoted == 0:
            return True
