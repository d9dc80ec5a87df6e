"""Latin square grid used as the hidden solution of generated puzzles."""

from __future__ import annotations
import random
from typing import List, Optional

import numpy as np


class LatinGrid:
    """
    A ``size x size`` Latin square: every row and column holds 1..size once.

    New grids start from the cyclic square ``(row + col) % size + 1`` and are
    randomized with :meth:`shuffle`, which only applies row swaps, column
    swaps and transposition, all of which preserve the Latin property.
    """

    def __init__(self, size: int, grid: Optional[np.ndarray] = None):
        """
        Initialize a grid.

        Args:
            size: Board size.
            grid: Optional initial values. If None, creates the cyclic square.
        """
        if size < 1:
            raise ValueError(f"Size must be positive, got {size}")
        self.size = size

        if grid is not None:
            if grid.shape != (size, size):
                raise ValueError(f"Grid shape must be ({size}, {size})")
            self.grid = grid.copy().astype(np.int32)
        else:
            rows, cols = np.indices((size, size))
            self.grid = ((rows + cols) % size + 1).astype(np.int32)

    def copy(self) -> LatinGrid:
        """Create a deep copy of the grid."""
        return LatinGrid(self.size, self.grid)

    def __getitem__(self, index: int) -> int:
        """Value at a row-major cell index."""
        row, col = divmod(index, self.size)
        return int(self.grid[row, col])

    def values(self) -> List[int]:
        """Row-major list of all values."""
        return [int(v) for v in self.grid.flatten()]

    def shuffle(self, count: int, rng: Optional[random.Random] = None) -> None:
        """Apply ``count`` rounds of random row swap, column swap and transpose."""
        rng = rng or random.Random()
        for _ in range(count):
            self.swap_rows(rng.randrange(self.size), rng.randrange(self.size))
            self.swap_cols(rng.randrange(self.size), rng.randrange(self.size))
            self.transpose()

    def swap_rows(self, row1: int, row2: int) -> None:
        self.grid[[row1, row2], :] = self.grid[[row2, row1], :]

    def swap_cols(self, col1: int, col2: int) -> None:
        self.grid[:, [col1, col2]] = self.grid[:, [col2, col1]]

    def transpose(self) -> None:
        self.grid = np.ascontiguousarray(self.grid.T)

    def is_latin(self) -> bool:
        """Check that every row and column is a permutation of 1..size."""
        expected = np.arange(1, self.size + 1)
        rows_ok = all(np.array_equal(np.sort(row), expected) for row in self.grid)
        cols_ok = all(np.array_equal(np.sort(col), expected) for col in self.grid.T)
        return rows_ok and cols_ok

    def __str__(self) -> str:
        """Pretty-print the grid inside a frame."""
        width = len(str(self.size))
        inner = (width + 1) * self.size + 1
        lines = ["/" + "-" * inner + "\\"]
        for row in self.grid:
            lines.append("| " + " ".join(f"{v:>{width}}" for v in row) + " |")
        lines.append("\\" + "-" * inner + "/")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"LatinGrid(size={self.size})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LatinGrid):
            return False
        return self.size == other.size and np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash((self.size, tuple(self.values())))
