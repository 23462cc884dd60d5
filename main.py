"""CLI entrypoint for the dungeon diagram solver."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from dungeon.core.exceptions import PuzzleFormatError
from dungeon.engine.solver import DiagramSolver, SolverConfig
from dungeon.io.puzzle_file import load_puzzle
from dungeon.io.solution_store import DEFAULT_OUTPUT_DIR, SolutionStore
from dungeon.utils.logger import configure_logging
from dungeon.utils.pretty import pretty_print_grid, render_ascii

EXIT_SOLVED = 0
EXIT_NO_SOLUTION = 1
EXIT_MALFORMED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve a dungeon diagram puzzle by placing walls",
    )
    parser.add_argument("puzzle", type=Path, help="Puzzle file (projections + 8x8 tile map)")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help="Directory for the solved diagram and JSON report",
    )
    parser.add_argument("--no-save", action="store_true", help="Do not write result files")
    parser.add_argument(
        "--no-precheck",
        action="store_true",
        help="Skip the CP-SAT projection feasibility pre-check",
    )
    parser.add_argument(
        "--precheck-timeout",
        type=float,
        default=10.0,
        help="Time limit in seconds for the pre-check",
    )
    parser.add_argument(
        "--show-border",
        action="store_true",
        help="Render the surrounding wall border too",
    )
    parser.add_argument(
        "--show-projections",
        action="store_true",
        help="Print the solved diagram with its row and column wall counts",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    try:
        puzzle = load_puzzle(args.puzzle)
    except PuzzleFormatError as exc:
        print(f"Failed to parse puzzle: {exc}")
        return EXIT_MALFORMED

    config = SolverConfig(
        precheck=not args.no_precheck,
        precheck_timeout_seconds=args.precheck_timeout,
    )
    result = DiagramSolver(config).solve(puzzle)
    store = None if args.no_save else SolutionStore(args.output_dir)

    if not result.solved:
        print(f"({result.elapsed_seconds:.2f}s) Failed to find a solution.")
        if store is not None:
            store.save_failure(args.puzzle.name, puzzle, result)
        return EXIT_NO_SOLUTION

    print(f"({result.elapsed_seconds:.2f}s) Found a solution:")
    if args.show_projections:
        pretty_print_grid(result.interior, puzzle.row_projection, puzzle.column_projection)
    else:
        print(render_ascii(result.grid, include_border=args.show_border))
    if store is not None:
        store.save_success(args.puzzle.name, puzzle, result)
    return EXIT_SOLVED


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
