"""CLI entrypoint: load puzzle(s), run the solver, and report results."""

import argparse
import csv
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from solver import solve_puzzle
from src.mushikui.examples import EXAMPLE_PUZZLES
from src.mushikui.loader import PUZZLE_SUFFIXES, load_puzzles
from src.mushikui.model import Puzzle
from src.mushikui.parser import parse_puzzle
from src.utils.trace import enable_tracing, get_tracer, reset_tracer

DATA_PATH_ENV = "MUSHIKUI_DATA_PATH"
EXAMPLES = "examples"


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Recover the hidden digits of long-multiplication puzzles")
    parser.add_argument(
        "input",
        nargs="?",
        default=os.environ.get(DATA_PATH_ENV),
        help=f"Puzzle file or directory, or '{EXAMPLES}' for the built-in puzzles "
        f"(defaults to ${DATA_PATH_ENV})",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write a results CSV")
    parser.add_argument("--trace-dir", type=Path, default=None, help="Write one trace CSV per puzzle here")
    parser.add_argument("--no-trace", action="store_true", help="Disable step tracing")
    parser.add_argument("--wildcard", default="*", help="Character marking an unknown digit")
    parser.add_argument(
        "--require-unique",
        action="store_true",
        help="Treat puzzles without exactly one solution as failures (exit status 1).",
    )
    args = parser.parse_args(argv)
    if not args.input:
        parser.error(f"no input given and ${DATA_PATH_ENV} is not set")
    return args


def format_puzzle(puzzle: Puzzle) -> str:
    """Render the puzzle in the usual right-aligned long multiplication layout."""
    width = len(puzzle.product)

    def _row(digits) -> str:
        return "".join(str(d) for d in digits)

    lines = [
        _row(puzzle.multiplicand).rjust(width),
        _row(puzzle.multiplier).rjust(width),
        "-" * width,
    ]
    for j, part in enumerate(puzzle.partial_products):
        lines.append(_row(part).rjust(width - j))
    lines.append("-" * width)
    lines.append(_row(puzzle.product).rjust(width))
    return "\n".join(lines)


def collect_puzzles(source: str) -> List[Dict[str, Any]]:
    if source == EXAMPLES:
        return [{"id": pid, "puzzle": text} for pid, text in EXAMPLE_PUZZLES.items()]

    path = Path(source)
    puzzles: List[Dict[str, Any]] = []
    if path.is_file():
        puzzles = load_puzzles(str(path))
    elif path.is_dir():
        for file_path in sorted(path.iterdir()):
            if file_path.suffix in PUZZLE_SUFFIXES:
                puzzles.extend(load_puzzles(str(file_path)))
    else:
        raise ValueError(f"Input path {path} is neither file nor directory")
    return puzzles


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "solutions", "steps", "solution"])

        for r in results:
            writer.writerow([
                r["id"],
                r["solutions"],
                r["steps"],
                json.dumps(r["solution"], ensure_ascii=False, separators=(",", ":")),
            ])


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    puzzles = collect_puzzles(args.input)
    results = []
    failures = 0

    for record in puzzles:
        reset_tracer()
        enable_tracing(not args.no_trace)
        tracer = get_tracer()
        puzzle_id = record.get("id", "unknown")

        try:
            puzzle = parse_puzzle(record, args.wildcard)
            print(f"# {puzzle_id}")
            print(format_puzzle(puzzle))
            print()

            solutions = solve_puzzle(puzzle, tracer=tracer)
            for solution in solutions:
                print(format_puzzle(solution))
                print()
            if not solutions:
                print("No solution.\n")

            summary = tracer.summary()
            results.append({
                "id": puzzle_id,
                "solutions": len(solutions),
                "steps": summary["num_assignments"],
                "solution": [s.to_dict() for s in solutions],
            })
            if args.require_unique and len(solutions) != 1:
                print(f"ERROR: {puzzle_id} has {len(solutions)} solutions, expected exactly one")
                failures += 1
        except Exception as e:
            print(f"ERROR: Failed to solve puzzle {puzzle_id}: {e}")
            results.append({
                "id": puzzle_id,
                "solutions": -1,
                "steps": -1,
                "solution": [],
            })
            failures += 1

        if args.trace_dir and tracer.enabled:
            tracer.to_csv(args.trace_dir / f"{puzzle_id}.csv")

    if args.output:
        write_results_csv(results, args.output)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
