"""Exception types raised by the KenKen solver."""

from __future__ import annotations


class KenkenError(Exception):
    """Base class for all KenKen errors."""


class CageShapeError(KenkenError, ValueError):
    """
    A cage has the wrong number of cells for its operation.

    Subtraction and division cages need exactly two cells, free cages
    exactly one and sum/product cages at least one. This is malformed
    puzzle data and is never recovered from inside the search.
    """

    def __init__(self, operation, cell_count: int, expected: str):
        self.operation = operation
        self.cell_count = cell_count
        super().__init__(
            f"{operation.name} cage can't be applied to {cell_count} cells, "
            f"it needs {expected}"
        )


class DepthExceededError(KenkenError):
    """The backtracking search went deeper than its ``max_depth``."""

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Search exceeded maximum recursion depth of {max_depth}")
