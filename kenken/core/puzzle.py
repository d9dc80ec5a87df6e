"""KenKen puzzle representation: operations, cages, puzzles and solutions."""

from __future__ import annotations
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np


DEFAULT_MAX_DEPTH = 64

_PUZZLE_RE = re.compile(r"^(\d+)((?:<\d+\.[a-z]\.\d+(?:,\d+)*>)*)$")
_CAGE_RE = re.compile(r"<(\d+)\.([a-z])\.(\d+(?:,\d+)*)>")


class Operation(Enum):
    """Arithmetic operation of a cage."""
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    FREE = "free"

    @property
    def opcode(self) -> str:
        """Single-character code used by the textual puzzle format."""
        return self.value[0]

    @property
    def symbol(self) -> str:
        """Symbol printed next to the cage target."""
        symbols = {
            Operation.ADD: "+",
            Operation.SUB: "-",
            Operation.MUL: "x",
            Operation.DIV: "/",
            Operation.FREE: "",
        }
        return symbols[self]

    @classmethod
    def from_opcode(cls, code: str) -> Operation:
        for op in cls:
            if op.opcode == code:
                return op
        raise ValueError(f"Unknown operation code {code!r}")


@dataclass(frozen=True)
class Cage:
    """
    A group of cells sharing one arithmetic constraint.

    Attributes:
        target: Value the cage's cells must produce.
        operation: Operation combining the cells.
        cells: Row-major cell indices. For cages of more than two cells the
               order matters: consecutive cells may not hold the same value.
    """
    target: int
    operation: Operation
    cells: Tuple[int, ...]

    def __post_init__(self):
        object.__setattr__(self, "cells", tuple(self.cells))
        if self.target < 0:
            raise ValueError(f"Cage target must be non-negative, got {self.target}")

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def label(self) -> str:
        """Target and operation symbol, e.g. ``'12x'``."""
        return f"{self.target}{self.operation.symbol}"

    def to_string(self) -> str:
        cells = ",".join(str(c) for c in self.cells)
        return f"<{self.target}.{self.operation.opcode}.{cells}>"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target": self.target,
            "operation": self.operation.value,
            "cells": list(self.cells),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Cage:
        return cls(int(data["target"]), Operation(data["operation"]), data["cells"])


@dataclass(frozen=True)
class Solution:
    """
    A fully solved board.

    Attributes:
        values: Row-major cell values.
        depth: Recursion depth at which the search found this solution.
               0 means it was reached by deduction alone.
    """
    values: Tuple[int, ...]
    depth: int = 0

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(int(v) for v in self.values))

    @property
    def size(self) -> int:
        return math.isqrt(len(self.values))

    @classmethod
    def from_area(cls, area: Sequence, depth: int) -> Solution:
        """Build a solution from an area whose cells are all solved."""
        values = []
        for cell in area:
            if not cell.solved:
                raise ValueError("Area is unsolved")
            values.append(cell.value)
        return cls(tuple(values), depth)

    def to_grid(self) -> np.ndarray:
        """Return the values as a ``size x size`` array."""
        return np.array(self.values, dtype=np.int32).reshape(self.size, self.size)

    def to_dict(self) -> Dict[str, Any]:
        return {"values": list(self.values), "depth": self.depth}

    def __str__(self) -> str:
        grid = self.to_grid()
        width = len(str(self.size))
        inner = (width + 1) * self.size + 1
        lines = ["/" + "-" * inner + "\\"]
        for row in grid:
            lines.append("| " + " ".join(f"{v:>{width}}" for v in row) + " |")
        lines.append("\\" + "-" * inner + "/")
        return "\n".join(lines)


@dataclass(frozen=True)
class Puzzle:
    """
    A KenKen puzzle: board size and the cages partitioning the board.

    The puzzle is immutable. Solving never modifies it, so one instance can
    be solved any number of times.
    """
    size: int
    cages: Tuple[Cage, ...]

    def __post_init__(self):
        if self.size < 1:
            raise ValueError(f"Size must be positive, got {self.size}")
        object.__setattr__(self, "cages", tuple(self.cages))
        cell_count = self.size * self.size
        for cage in self.cages:
            for idx in cage.cells:
                if idx < 0 or idx >= cell_count:
                    raise ValueError(
                        f"Cell index {idx} out of range for a {self.size}x{self.size} board"
                    )

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def solve(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_solutions: int = 0,
    ) -> Optional[List[Solution]]:
        """
        Solve the puzzle.

        Args:
            max_depth: Deepest recursion level the search may enter.
            max_solutions: Stop looking once this many solutions are found.
                           0 enumerates every solution, 2 is enough to prove
                           uniqueness.

        Returns:
            None if the puzzle has no solution, otherwise the solutions in
            discovery order.

        Raises:
            DepthExceededError: The search needed more than ``max_depth`` levels.
            CageShapeError: A cage has the wrong cell count for its operation.
        """
        from ..solvers.backtracking_solver import BacktrackingSolver

        solver = BacktrackingSolver(max_depth=max_depth, max_solutions=max_solutions)
        solutions, _ = solver.solve(self)
        return solutions

    def cage_map(self) -> np.ndarray:
        """Return a ``size x size`` array holding each cell's cage index (-1 if none)."""
        cage_of = np.full(self.cell_count, -1, dtype=np.int32)
        for i, cage in enumerate(self.cages):
            cage_of[list(cage.cells)] = i
        return cage_of.reshape(self.size, self.size)

    def to_string(self) -> str:
        """
        Serialize the puzzle.

        The size comes first, followed by one ``<target.opcode.cells>`` group
        per cage, e.g. ``3<5.a.0,1><3.a.2,5><4.a.3,6><3.a.4,7><3.f.8>``.
        """
        return str(self.size) + "".join(cage.to_string() for cage in self.cages)

    @classmethod
    def from_string(cls, s: str) -> Puzzle:
        """Parse a puzzle produced by :meth:`to_string`."""
        s = "".join(s.split())
        match = _PUZZLE_RE.match(s)
        if match is None:
            raise ValueError(f"Malformed puzzle string: {s!r}")

        cages = []
        for target, code, cells in _CAGE_RE.findall(match.group(2)):
            cages.append(Cage(
                int(target),
                Operation.from_opcode(code),
                tuple(int(c) for c in cells.split(",")),
            ))
        return cls(int(match.group(1)), tuple(cages))

    def to_dict(self) -> Dict[str, Any]:
        return {"size": self.size, "cages": [cage.to_dict() for cage in self.cages]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Puzzle:
        return cls(int(data["size"]), tuple(Cage.from_dict(c) for c in data["cages"]))

    def __str__(self) -> str:
        """Draw the cage layout followed by a legend of cage constraints."""
        cage_map = self.cage_map()
        labels = [_cage_name(i) for i in range(len(self.cages))]
        width = max((len(label) for label in labels), default=1)

        lines = ["+" + "-" * ((width + 1) * self.size + 1) + "+"]
        for row in cage_map:
            names = [labels[c] if c >= 0 else "." for c in row]
            lines.append("| " + " ".join(f"{n:<{width}}" for n in names) + " |")
        lines.append(lines[0])

        for label, cage in zip(labels, self.cages):
            lines.append(f"{label:<{width}}  {cage.label}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Puzzle(size={self.size}, cages={len(self.cages)})"


def _cage_name(index: int) -> str:
    """Spreadsheet-style cage name: A..Z, AA, AB, ..."""
    name = ""
    index += 1
    while index:
        index, rem = divmod(index - 1, 26)
        name = chr(ord("A") + rem) + name
    return name
