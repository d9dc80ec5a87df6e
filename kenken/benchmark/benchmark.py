"""Benchmarking framework for the KenKen solver."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
import json
import os

from tqdm import tqdm

from ..core.exceptions import DepthExceededError
from ..core.puzzle import DEFAULT_MAX_DEPTH, Puzzle
from ..core.validator import validate_solution
from ..generator import KenkenGenerator, Difficulty
from ..solvers import BacktrackingSolver


# Search modes and the max_solutions each one runs with
SEARCH_MODES: Dict[str, int] = {
    "first": 1,
    "unique": 2,
    "all": 0,
}


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    puzzle_id: int
    difficulty: str
    mode: str
    solved: bool
    time_seconds: float
    memory_bytes: int
    iterations: int
    backtracks: int
    nodes_explored: int
    solutions: int = 0
    depth: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "difficulty": self.difficulty,
            "mode": self.mode,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "solutions": self.solutions,
            "depth": self.depth,
            **self.extra
        }


class Benchmark:
    """
    Benchmark framework for the KenKen solver.

    Generates puzzles per difficulty and solves each one in several search
    modes (first solution, uniqueness proof, full enumeration), collecting
    performance metrics.
    """

    def __init__(
        self,
        puzzles_per_difficulty: int = 10,
        difficulties: Optional[List[Difficulty]] = None,
        size: int = 4,
        modes: Optional[List[str]] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        track_memory: bool = True,
        seed: Optional[int] = None
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles_per_difficulty: Number of puzzles to generate per difficulty.
            difficulties: List of difficulties to test (default: easy, medium, hard).
            size: Board size of the generated puzzles.
            modes: Search modes to run (default: all of SEARCH_MODES).
            max_depth: Search depth limit for every run.
            track_memory: Record peak memory of each run.
            seed: Random seed for reproducibility.
        """
        self.puzzles_per_difficulty = puzzles_per_difficulty
        self.difficulties = difficulties or [Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD]
        self.size = size
        self.max_depth = max_depth
        self.track_memory = track_memory
        self.seed = seed

        modes = modes or list(SEARCH_MODES)
        for mode in modes:
            if mode not in SEARCH_MODES:
                raise ValueError(f"Unknown search mode {mode!r}, expected one of {list(SEARCH_MODES)}")
        self.modes = modes

        self.puzzles: Dict[str, List[Puzzle]] = {}
        self.results: List[BenchmarkResult] = []

    def generate_puzzles(self) -> None:
        """Generate all puzzles for benchmarking."""
        print("Generating puzzles...")
        for i, difficulty in enumerate(tqdm(self.difficulties, desc="Difficulties")):
            seed = None if self.seed is None else self.seed + i
            generator = KenkenGenerator(
                size=self.size,
                difficulty=difficulty,
                max_depth=self.max_depth,
                seed=seed,
            )
            puzzles = generator.generate_puzzles(
                self.puzzles_per_difficulty,
                max_attempts=self.puzzles_per_difficulty * 500,
            )
            if len(puzzles) < self.puzzles_per_difficulty:
                print(f"Warning: only {len(puzzles)} {difficulty.value} puzzles found "
                      f"in {generator.attempts} attempts")
            self.puzzles[difficulty.value] = puzzles

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        if not self.puzzles:
            self.generate_puzzles()

        self.results = []

        total_tests = sum(len(p) for p in self.puzzles.values()) * len(self.modes)
        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for difficulty_name, puzzles in self.puzzles.items():
            for puzzle_id, puzzle in enumerate(puzzles):
                for mode in self.modes:
                    self.results.append(self._run_single(puzzle, puzzle_id, difficulty_name, mode))
                    pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        puzzle: Puzzle,
        puzzle_id: int,
        difficulty: str,
        mode: str,
    ) -> BenchmarkResult:
        """Solve one puzzle in one search mode."""
        solver = BacktrackingSolver(
            max_depth=self.max_depth,
            max_solutions=SEARCH_MODES[mode],
            track_memory=self.track_memory,
        )
        extra: Dict[str, Any] = {}
        solutions = None
        try:
            solutions, stats = solver.solve(puzzle)
        except DepthExceededError as e:
            stats = solver.stats
            extra["error"] = str(e)

        if solutions and not all(validate_solution(puzzle, s) for s in solutions):
            extra["error"] = "invalid solution"

        return BenchmarkResult(
            puzzle_id=puzzle_id,
            difficulty=difficulty,
            mode=mode,
            solved=bool(solutions) and "error" not in extra,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            iterations=stats.iterations,
            backtracks=stats.backtracks,
            nodes_explored=stats.nodes_explored,
            solutions=len(solutions) if solutions else 0,
            depth=solutions[0].depth if solutions else None,
            extra=extra,
        )

    @staticmethod
    def _aggregate(results: List[BenchmarkResult]) -> Dict[str, Any]:
        """Accuracy, timing and search-effort averages over a group of runs."""
        count = len(results)
        solved = sum(1 for r in results if r.solved)
        times = [r.time_seconds for r in results]
        depths = [r.depth for r in results if r.depth is not None]
        return {
            "accuracy": solved / count * 100,
            "avg_time_seconds": sum(times) / count,
            "max_time_seconds": max(times),
            "min_time_seconds": min(times),
            "avg_memory_mb": sum(r.memory_bytes for r in results) / count / (1024 * 1024),
            "avg_nodes": sum(r.nodes_explored for r in results) / count,
            "avg_backtracks": sum(r.backtracks for r in results) / count,
            "avg_depth": sum(depths) / len(depths) if depths else None,
            "total_solved": solved,
            "total_tested": count,
        }

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics, per search mode and per difficulty."""
        by_mode: Dict[str, Any] = {}
        by_difficulty: Dict[str, Dict[str, Any]] = {}

        for mode in self.modes:
            runs = [r for r in self.results if r.mode == mode]
            if runs:
                by_mode[mode] = self._aggregate(runs)

        for difficulty in self.difficulties:
            for mode in self.modes:
                runs = [
                    r for r in self.results
                    if r.difficulty == difficulty.value and r.mode == mode
                ]
                if runs:
                    by_difficulty.setdefault(difficulty.value, {})[mode] = self._aggregate(runs)

        return {
            "size": self.size,
            "total_puzzles": sum(len(p) for p in self.puzzles.values()),
            "modes": list(self.modes),
            "difficulties": [d.value for d in self.difficulties],
            "results_by_mode": by_mode,
            "results_by_difficulty": by_difficulty,
        }

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and generated puzzles to files."""
        os.makedirs(output_dir, exist_ok=True)

        # Save raw results as JSON
        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        # Save summary
        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        # Save puzzles by difficulty
        puzzles_dir = os.path.join(output_dir, "puzzles")
        os.makedirs(puzzles_dir, exist_ok=True)

        for difficulty, puzzles in self.puzzles.items():
            diff_dir = os.path.join(puzzles_dir, difficulty)
            KenkenGenerator.save_to_folder(puzzles, diff_dir, prefix=f"puzzle_{difficulty}")

        print(f"Results and puzzles saved to {output_dir}")
