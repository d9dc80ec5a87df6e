"""KenKen puzzle generator with difficulty classification by search depth."""

from __future__ import annotations
import bisect
import os
import random
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from tqdm import tqdm

from ..core.exceptions import DepthExceededError
from ..core.grid import LatinGrid
from ..core.puzzle import DEFAULT_MAX_DEPTH, Cage, Operation, Puzzle


class Difficulty(Enum):
    """Difficulty levels, defined by the search depth needed to solve."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXTREME = "extreme"
    ANY = "any"

    @property
    def depth_range(self) -> Tuple[int, Optional[int]]:
        """Get the range of solution depths for this difficulty (min, max or None)."""
        ranges = {
            Difficulty.EASY: (0, 0),        # pure deduction
            Difficulty.MEDIUM: (1, 2),
            Difficulty.HARD: (3, 5),
            Difficulty.EXTREME: (6, None),
            Difficulty.ANY: (0, None),
        }
        return ranges[self]

    @classmethod
    def from_depth(cls, depth: int) -> Difficulty:
        """Classify a solution depth."""
        if depth == 0:
            return cls.EASY
        if depth <= 2:
            return cls.MEDIUM
        if depth <= 5:
            return cls.HARD
        return cls.EXTREME

    def matches(self, depth: int) -> bool:
        """Whether a solution found at ``depth`` has this difficulty."""
        return self == Difficulty.ANY or self == Difficulty.from_depth(depth)


# Sampling order of operation weights
OPERATIONS = (Operation.ADD, Operation.SUB, Operation.MUL, Operation.DIV, Operation.FREE)
DEFAULT_OPERATION_WEIGHTS = (1.0, 1.3, 1.0, 1.6, 0.15)


class KenkenGenerator:
    """
    Generator for KenKen puzzles.

    Algorithm:
    1. Shuffle a Latin square, which becomes the hidden solution
    2. Grow cages from the lowest free cell by a random walk
    3. Pick an operation for each cage by weight and compute its target
    4. Optionally keep only puzzles the solver proves unique at the
       requested difficulty
    """

    def __init__(
        self,
        size: int = 4,
        difficulty: Difficulty = Difficulty.ANY,
        max_depth: int = DEFAULT_MAX_DEPTH,
        unique: bool = True,
        max_cage_size: int = 4,
        operation_weights: Optional[Sequence[float]] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the generator.

        Args:
            size: Board size.
            difficulty: Required difficulty of validated puzzles.
            max_depth: Search depth limit used when validating.
            unique: Reject puzzles with more than one solution.
            max_cage_size: Largest number of cells in a cage.
            operation_weights: Weights for Add, Sub, Mul, Div and Free.
            seed: Random seed for reproducibility.
        """
        if size < 1:
            raise ValueError(f"Size must be positive, got {size}")
        if max_cage_size < 1:
            raise ValueError(f"max_cage_size must be positive, got {max_cage_size}")

        weights = tuple(operation_weights or DEFAULT_OPERATION_WEIGHTS)
        if len(weights) != len(OPERATIONS) or any(w < 0 for w in weights) or sum(weights) <= 0:
            raise ValueError(f"Need {len(OPERATIONS)} non-negative weights, got {weights}")

        add, sub, mul, _, free = weights
        if max_cage_size > 1 and free < sum(weights):
            # Multi-cell cages need an operation that always fits them
            if add + mul <= 0 and not (max_cage_size == 2 and sub > 0):
                raise ValueError(
                    f"Weights {weights} leave no operation for cages of up to "
                    f"{max_cage_size} cells, give Add or Mul a positive weight"
                )

        self.size = size
        self.difficulty = difficulty
        self.max_depth = max_depth
        self.unique = unique
        self.max_cage_size = max_cage_size
        self.operation_weights = weights
        self.rng = random.Random(seed)
        self.attempts = 0

    def generate(self, grid: Optional[LatinGrid] = None) -> Puzzle:
        """
        Generate one puzzle without validating it.

        Args:
            grid: Solution grid to build cages on. If None, a shuffled
                  Latin square is used.
        """
        if grid is None:
            grid = LatinGrid(self.size)
            grid.shuffle(self.size * 2, self.rng)
        elif grid.size != self.size:
            raise ValueError(f"Grid size {grid.size} doesn't match generator size {self.size}")

        unallocated = list(range(self.size * self.size))
        cages = []
        while unallocated:
            cages.append(self._generate_cage(grid, unallocated))
        return Puzzle(self.size, tuple(cages))

    def validate(self, puzzle: Puzzle) -> bool:
        """Check that the puzzle is solvable, unique if required, and of the right difficulty."""
        try:
            solutions = puzzle.solve(self.max_depth, 2)
        except DepthExceededError:
            return False

        if solutions is None:
            return False
        if self.unique and len(solutions) != 1:
            return False
        return self.difficulty.matches(solutions[0].depth)

    def generate_puzzles(
        self,
        count: int,
        validate: bool = True,
        grid: Optional[LatinGrid] = None,
        show_progress: bool = False,
        max_attempts: Optional[int] = None,
    ) -> List[Puzzle]:
        """
        Generate ``count`` puzzles.

        Args:
            count: Number of puzzles to return.
            validate: Discard puzzles that fail :meth:`validate`.
            grid: If given, every puzzle is built on this solution grid.
            show_progress: Show a progress bar of accepted puzzles.
            max_attempts: Give up after generating this many candidates
                          (None = keep going until ``count`` are accepted).

        Returns:
            List of puzzles, shorter than ``count`` only if ``max_attempts``
            ran out. ``self.attempts`` holds how many were generated.
        """
        puzzles: List[Puzzle] = []
        self.attempts = 0
        with tqdm(total=count, desc="Generating", disable=not show_progress) as pbar:
            while len(puzzles) < count:
                if max_attempts is not None and self.attempts >= max_attempts:
                    break
                puzzle = self.generate(grid.copy() if grid is not None else None)
                self.attempts += 1
                if not validate or self.validate(puzzle):
                    puzzles.append(puzzle)
                    pbar.update(1)
                    pbar.set_postfix(attempts=self.attempts)
        return puzzles

    def _free_weight_share(self) -> float:
        return self.operation_weights[-1] / sum(self.operation_weights)

    def _neighbours(self, cell: int) -> List[int]:
        """Grid neighbours of a cell in random order."""
        size = self.size
        row, col = divmod(cell, size)
        candidates = []
        if row > 0:
            candidates.append(cell - size)
        if row < size - 1:
            candidates.append(cell + size)
        if col > 0:
            candidates.append(cell - 1)
        if col < size - 1:
            candidates.append(cell + 1)
        self.rng.shuffle(candidates)
        return candidates

    def _generate_cage(self, grid: LatinGrid, unallocated: List[int]) -> Cage:
        """Grow one cage starting at the lowest unallocated cell."""
        last = unallocated.pop(0)
        cells = [last]
        chance = 1.0 - self._free_weight_share()

        while len(cells) < self.max_cage_size and self.rng.random() < chance / len(cells):
            for neighbour in self._neighbours(last):
                pos = bisect.bisect_left(unallocated, neighbour)
                if pos < len(unallocated) and unallocated[pos] == neighbour:
                    last = unallocated.pop(pos)
                    cells.append(last)
                    break
            else:
                # Walk is stuck
                break

        operation = self._choose_operation(grid, cells)
        return Cage(self._target(grid, cells, operation), operation, tuple(cells))

    def _choose_operation(self, grid: LatinGrid, cells: List[int]) -> Operation:
        """Sample an operation by weight among those that fit the cage."""
        if len(cells) == 1:
            return Operation.FREE

        weights = list(self.operation_weights)
        for i, op in enumerate(OPERATIONS):
            if not self._fits(grid, cells, op):
                weights[i] = 0.0
        return self.rng.choices(OPERATIONS, weights=weights)[0]

    @staticmethod
    def _fits(grid: LatinGrid, cells: List[int], op: Operation) -> bool:
        if op in (Operation.ADD, Operation.MUL):
            return len(cells) > 1
        if op == Operation.SUB:
            return len(cells) == 2
        if op == Operation.DIV:
            if len(cells) != 2:
                return False
            n, m = grid[cells[0]], grid[cells[1]]
            return max(n, m) % min(n, m) == 0
        return len(cells) == 1

    @staticmethod
    def _target(grid: LatinGrid, cells: List[int], op: Operation) -> int:
        values = [grid[c] for c in cells]
        if op == Operation.ADD:
            return sum(values)
        if op == Operation.MUL:
            product = 1
            for v in values:
                product *= v
            return product
        if op == Operation.SUB:
            return max(values) - min(values)
        if op == Operation.DIV:
            return max(values) // min(values)
        return values[0]

    @staticmethod
    def save_to_folder(puzzles: List[Puzzle], folder_path: str, prefix: str = "puzzle") -> None:
        """
        Save a list of puzzles to a folder as individual text files.

        Args:
            puzzles: List of Puzzle objects.
            folder_path: Directory to save the puzzles.
            prefix: Prefix for the filename (default: "puzzle").
        """
        os.makedirs(folder_path, exist_ok=True)

        for i, puzzle in enumerate(puzzles, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            with open(file_path, "w") as f:
                f.write(puzzle.to_string())
                f.write("\n\nPretty format:\n")
                f.write(str(puzzle))
                f.write("\n")
