"""Command-line interface for the Knight's Tour solver."""

import argparse
import json
import logging
import sys
from typing import List, Tuple

from .benchmark import Benchmark
from .benchmark.visualizer import Visualizer
from .config import ALGORITHMS, SolverConfig
from .core.board import KnightBoard, Position
from .core.starting_points import valid_starting_points
from .errors import KnightTourError


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Knight's Tour Solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Find a full tour on a 6x6 board from a corner
  python -m knight_tour.cli solve --size 6 --start 0,0

  # Ask for a hint after a few moves
  python -m knight_tour.cli hint --size 5 --start 1,2 --visited "0,0"

  # List every square a 5x5 tour can start from
  python -m knight_tour.cli starts --size 5

  # Compare the solvers
  python -m knight_tour.cli benchmark --sizes 5 6 --states 5 --output results/
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show debug logging and detailed statistics"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for name, help_text in (
        ("solve", "Find a full tour from the current position"),
        ("hint", "Suggest the next move"),
        ("check", "Check whether a tour can still be completed"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        _add_board_arguments(sub)

    # Starts command
    starts_parser = subparsers.add_parser("starts", help="List valid starting squares")
    starts_parser.add_argument(
        "--size", "-n", type=int, required=True,
        help="Board size"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Run solver benchmarks")
    bench_parser.add_argument(
        "--sizes", type=int, nargs="+", default=[5, 6],
        help="Board sizes to benchmark (default: 5 6)"
    )
    bench_parser.add_argument(
        "--states", "-n", type=int, default=5,
        help="Game states per board size (default: 5)"
    )
    bench_parser.add_argument(
        "--moves", "-m", type=int, default=3,
        help="Moves already played in each state (default: 3)"
    )
    bench_parser.add_argument(
        "--timeout", type=float, default=30.0,
        help="Timeout per search in seconds (default: 30)"
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

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command in ("solve", "hint", "check"):
            cmd_query(args)
        elif args.command == "starts":
            cmd_starts(args)
        elif args.command == "benchmark":
            cmd_benchmark(args)
    except (KnightTourError, ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)


def _add_board_arguments(sub: argparse.ArgumentParser) -> None:
    sub.add_argument(
        "--size", "-n", type=int, default=None,
        help="Board size (required unless --board is given)"
    )
    sub.add_argument(
        "--start", "-p", type=str, required=True,
        help="Knight's current square as ROW,COL"
    )
    sub.add_argument(
        "--visited", type=str, default="",
        help='Previously visited squares, e.g. "0,0;1,2"'
    )
    sub.add_argument(
        "--board", "-b", type=str, default=None,
        help="Board string, row-major, 0/. unvisited and 1/x visited"
    )
    sub.add_argument(
        "--algorithm", "-a", choices=ALGORITHMS, default=None,
        help="Search algorithm (default: warnsdorff)"
    )
    sub.add_argument(
        "--timeout", type=float, default=None,
        help="Give up after this many seconds"
    )
    sub.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON file with solver settings"
    )
    sub.add_argument(
        "--json", action="store_true",
        help="Print the result as JSON"
    )


def parse_position(text: str) -> Position:
    """Parse "ROW,COL" into a Position."""
    try:
        row, col = (int(part) for part in text.split(","))
    except ValueError:
        raise ValueError(f"Expected ROW,COL, got {text!r}")
    return Position(row, col)


def parse_positions(text: str) -> List[Position]:
    return [parse_position(chunk) for chunk in text.split(";") if chunk.strip()]


def build_board(args) -> Tuple[KnightBoard, Position]:
    """Create the board and start square described by the command arguments."""
    start = parse_position(args.start)
    if args.board:
        board = KnightBoard.from_string(args.board, args.size)
    elif args.size is not None:
        board = KnightBoard(args.size)
    else:
        raise ValueError("Either --size or --board is required")

    for row, col in parse_positions(args.visited):
        if not board.in_bounds(row, col):
            raise ValueError(f"Visited square ({row}, {col}) is outside the board")
        board.visit(row, col)
    if not board.in_bounds(*start):
        raise ValueError(f"Start {tuple(start)} is outside the board")
    board.visit(*start)
    return board, start


def cmd_query(args):
    """Handle the solve, hint and check commands."""
    config = SolverConfig.from_json_file(args.config) if args.config else SolverConfig()
    if args.algorithm:
        config.algorithm = args.algorithm
    if args.timeout is not None:
        config.timeout_seconds = args.timeout

    board, start = build_board(args)
    solver = config.build_solver()
    path, stats = solver.solve(board, start, board.count_visited())

    if args.json:
        payload = {"outcome": stats.outcome.value, **_query_result(args.command, path)}
        if args.verbose:
            payload["stats"] = stats.to_dict()
        print(json.dumps(payload, indent=2))
        return

    print(board)
    print()

    if args.command == "solve":
        if path is not None:
            print(f"✓ Tour found in {stats.time_seconds:.4f}s ({len(path) - 1} moves)")
            print(" -> ".join(f"({r},{c})" for r, c in path))
        else:
            print(f"✗ No tour found ({stats.outcome.value})")
    elif args.command == "hint":
        if path is not None and len(path) > 1:
            print(f"Next move: ({path[1].row},{path[1].col})")
        else:
            print(f"No hint available ({stats.outcome.value})")
    else:
        print("Tour possible" if path is not None else f"Tour not possible ({stats.outcome.value})")

    if args.verbose:
        print(f"  Algorithm: {stats.algorithm}")
        print(f"  Time: {stats.time_seconds:.4f}s")
        print(f"  Nodes explored: {stats.nodes_explored:,}")
        print(f"  Backtracks: {stats.backtracks:,}")
        print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")


def _query_result(command: str, path) -> dict:
    if command == "solve":
        return {"path": [p.to_dict() for p in path] if path is not None else None}
    if command == "hint":
        return {"hint": path[1].to_dict() if path is not None and len(path) > 1 else None}
    return {"possible": path is not None}


def cmd_starts(args):
    """Handle the starts command."""
    points = valid_starting_points(args.size)
    print(f"{len(points)} of {args.size * args.size} squares start a full tour on a {args.size}x{args.size} board:")
    marks = {(p.row, p.col) for p in points}
    for row in range(args.size):
        print(' '.join('S' if (row, col) in marks else '.' for col in range(args.size)))


def cmd_benchmark(args):
    """Handle the benchmark command."""
    print("=" * 60)
    print("KNIGHT'S TOUR SOLVER BENCHMARK")
    print("=" * 60)
    print(f"Board sizes: {args.sizes}")
    print(f"States per size: {args.states} ({args.moves} moves played)")

    benchmark = Benchmark(
        board_sizes=args.sizes,
        states_per_size=args.states,
        moves_per_state=args.moves,
        timeout_seconds=args.timeout,
        seed=args.seed
    )

    print(f"Algorithms: {', '.join(benchmark.solvers.keys())}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)

    print("\nBy Algorithm:")
    print("-" * 50)
    for algo, stats in summary["results_by_algorithm"].items():
        print(f"\n{algo}:")
        print(f"  Solved: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Inconclusive: {stats['inconclusive']}")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Nodes: {stats['avg_nodes_explored']:,.0f}")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
