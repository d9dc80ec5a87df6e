"""Command-line interface for the KenKen solver system."""

import argparse
import json
import os
import sys

from .core.exceptions import KenkenError, DepthExceededError
from .core.puzzle import DEFAULT_MAX_DEPTH, Puzzle
from .generator import KenkenGenerator, Difficulty
from .solvers import BacktrackingSolver


DIFFICULTY_CHOICES = [d.value for d in Difficulty]


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="KenKen Puzzle Generator & Solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 5 medium 6x6 puzzles
  python -m kenken.cli generate --size 6 --count 5 --difficulty medium

  # Solve a puzzle and list every solution
  python -m kenken.cli solve --puzzle "3<5.a.0,1><3.a.2,5><4.a.3,6><3.a.4,7><3.f.8>"

  # Run full benchmark
  python -m kenken.cli benchmark --puzzles 10 --output results/
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate KenKen puzzles")
    gen_parser.add_argument(
        "--size", type=int, default=4,
        help="Board size (default: 4)"
    )
    gen_parser.add_argument(
        "--count", "-n", type=int, default=5,
        help="Number of puzzles to generate (default: 5)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d",
        choices=DIFFICULTY_CHOICES,
        default="any",
        help="Difficulty level (default: any)"
    )
    gen_parser.add_argument(
        "--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
        help=f"Search depth limit when validating (default: {DEFAULT_MAX_DEPTH})"
    )
    gen_parser.add_argument(
        "--max-cage-size", type=int, default=4,
        help="Largest cage (default: 4)"
    )
    gen_parser.add_argument(
        "--non-unique", action="store_true",
        help="Accept puzzles with more than one solution"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a KenKen puzzle")
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Serialized puzzle, e.g. '3<5.a.0,1><3.a.2,5>...'"
    )
    solve_parser.add_argument(
        "--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
        help=f"Search depth limit (default: {DEFAULT_MAX_DEPTH})"
    )
    solve_parser.add_argument(
        "--max-solutions", type=int, default=0,
        help="Stop after this many solutions, 0 for all (default: 0)"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Run solver benchmarks")
    bench_parser.add_argument(
        "--size", type=int, default=4,
        help="Board size (default: 4)"
    )
    bench_parser.add_argument(
        "--puzzles", "-n", type=int, default=10,
        help="Puzzles per difficulty (default: 10)"
    )
    bench_parser.add_argument(
        "--difficulty", "-d",
        choices=["easy", "medium", "hard", "extreme", "all"],
        default="all",
        help="Difficulty to benchmark (default: all = easy, medium, hard)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Random seed for reproducibility (default: 42)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "generate":
        cmd_generate(args)
    elif args.command == "solve":
        cmd_solve(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def cmd_generate(args):
    """Handle the generate command."""
    try:
        generator = KenkenGenerator(
            size=args.size,
            difficulty=Difficulty(args.difficulty),
            max_depth=args.max_depth,
            unique=not args.non_unique,
            max_cage_size=args.max_cage_size,
            seed=args.seed,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"\nGenerating {args.count} {args.difficulty} {args.size}x{args.size} puzzles...")
    puzzles = generator.generate_puzzles(args.count, show_progress=True)

    all_puzzles = []
    for i, puzzle in enumerate(puzzles, 1):
        solutions = puzzle.solve(args.max_depth, 2)
        depth = solutions[0].depth if solutions else None
        all_puzzles.append({
            "index": i,
            "difficulty": Difficulty.from_depth(depth).value if depth is not None else None,
            "depth": depth,
            "puzzle": puzzle.to_string(),
            **puzzle.to_dict(),
        })

        print(f"\n--- Puzzle {i} (depth {depth}) ---")
        print(puzzle.to_string())
        print(puzzle)

    # If no output file is specified, save to a default 'puzzles' folder
    if not args.output:
        base_dir = os.path.join("puzzles", args.difficulty)
        KenkenGenerator.save_to_folder(puzzles, base_dir, prefix=f"puzzle_{args.difficulty}")
        print(f"\nPuzzles also saved individually in the '{base_dir}/' directory")
    else:
        with open(args.output, "w") as f:
            json.dump(all_puzzles, f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")

    print(f"\nTotal puzzles generated: {len(puzzles)} ({generator.attempts} attempts)")


def cmd_solve(args):
    """Handle the solve command."""
    # Parse puzzle
    try:
        puzzle = Puzzle.from_string(args.puzzle)
    except ValueError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)

    print("Input puzzle:")
    print(puzzle)
    print()

    solver = BacktrackingSolver(max_depth=args.max_depth, max_solutions=args.max_solutions)
    try:
        solutions, stats = solver.solve(puzzle)
    except DepthExceededError as e:
        print(f"✗ {e}")
        sys.exit(1)
    except KenkenError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if solutions is None:
        print(f"✗ No solution ({stats.time_seconds:.4f}s)")
    else:
        print(f"✓ {len(solutions)} solution(s) in {stats.time_seconds:.4f}s")
        for i, solution in enumerate(solutions, 1):
            difficulty = Difficulty.from_depth(solution.depth).value
            print(f"\nSolution {i} (depth {solution.depth}, {difficulty}):")
            print(solution)

    if args.verbose:
        print(f"\n  Sweeps: {stats.iterations:,}")
        print(f"  Nodes: {stats.nodes_explored:,}")
        print(f"  Backtracks: {stats.backtracks:,}")
        print(f"  Deepest level: {stats.extra.get('deepest', 0)}")


def cmd_benchmark(args):
    """Handle the benchmark command."""
    # Imported here so generate/solve don't pay for matplotlib
    from .benchmark import Benchmark
    from .benchmark.visualizer import Visualizer

    # Parse difficulties
    if args.difficulty == "all":
        difficulties = [Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD]
    else:
        difficulties = [Difficulty(args.difficulty)]

    print("=" * 60)
    print("KENKEN SOLVER BENCHMARK")
    print("=" * 60)
    print(f"Board size: {args.size}x{args.size}")
    print(f"Puzzles per difficulty: {args.puzzles}")
    print(f"Difficulties: {[d.value for d in difficulties]}")

    benchmark = Benchmark(
        puzzles_per_difficulty=args.puzzles,
        difficulties=difficulties,
        size=args.size,
        seed=args.seed
    )

    print(f"Search modes: {', '.join(benchmark.modes)}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    # Run benchmark
    results = benchmark.run()

    # Print summary
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)

    print("\nBy Search Mode:")
    print("-" * 50)
    for mode, stats in summary["results_by_mode"].items():
        print(f"\n{mode}:")
        print(f"  Accuracy: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Nodes: {stats['avg_nodes']:.1f}")
        print(f"  Avg Memory: {stats['avg_memory_mb']:.2f} MB")

    # Save results
    benchmark.save_results(args.output)

    # Generate charts
    if not args.no_charts and results:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {os.path.basename(chart)}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
