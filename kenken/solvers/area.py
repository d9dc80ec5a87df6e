"""Cell states and the board area the solver works on."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Set, Union


@dataclass(frozen=True)
class Solved:
    """A cell whose value is known."""
    value: int

    solved = True


@dataclass
class Candidates:
    """A cell that may still take any of ``values``. An empty set means contradiction."""
    values: Set[int] = field(default_factory=set)

    solved = False

    def copy(self) -> Candidates:
        return Candidates(set(self.values))


Cell = Union[Solved, Candidates]
Area = List[Cell]


def new_area(size: int) -> Area:
    """Fresh board area: every cell may hold any value 1..size."""
    return [Candidates(set(range(1, size + 1))) for _ in range(size * size)]


def clone_area(area: Area) -> Area:
    """Copy an area for a new branch. Solved cells are immutable and shared."""
    return [cell if cell.solved else cell.copy() for cell in area]


def admits(cell: Cell, value: int) -> bool:
    """Whether ``value`` is still possible in ``cell``."""
    if cell.solved:
        return cell.value == value
    return value in cell.values


def select_branch_cell(area: Area) -> Optional[int]:
    """
    Select the unsolved cell to branch on (MRV heuristic).

    Picks the cell with the fewest remaining candidates, the lowest index
    among equals.

    Returns:
        The cell index, or None if every cell is solved.
    """
    best = None
    best_len = 0
    for i, cell in enumerate(area):
        if cell.solved:
            continue
        if best is None or len(cell.values) < best_len:
            best = i
            best_len = len(cell.values)
    return best
